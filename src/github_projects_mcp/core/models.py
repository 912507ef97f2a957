from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


# --- Raw response shapes ---


class PageInfo(BaseModel):
    end_cursor: str = Field(default="", alias="endCursor")
    has_next_page: bool = Field(default=False, alias="hasNextPage")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("end_cursor", mode="before")
    @classmethod
    def _null_cursor(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("has_next_page", mode="before")
    @classmethod
    def _null_flag(cls, v: Any) -> bool:
        return bool(v)


class ContentKind(str, Enum):
    ISSUE = "Issue"
    PULL_REQUEST = "PullRequest"
    DRAFT_ISSUE = "DraftIssue"
    UNKNOWN = "unknown"
    ABSENT = "absent"


_KNOWN_CONTENT = {
    ContentKind.ISSUE.value: ContentKind.ISSUE,
    ContentKind.PULL_REQUEST.value: ContentKind.PULL_REQUEST,
    ContentKind.DRAFT_ISSUE.value: ContentKind.DRAFT_ISSUE,
}


@dataclass(frozen=True)
class ItemContent:
    """
    Tagged view of a project item's `content` union.

    ABSENT: the remote returned null (content not materialised yet).
    UNKNOWN: a __typename this server does not map; only the tag is kept.
    """

    kind: ContentKind
    typename: str = ""
    id: str = ""
    title: str = ""
    state: str = ""
    url: str = ""

    @classmethod
    def from_raw(cls, raw: Optional[Dict[str, Any]]) -> "ItemContent":
        if not isinstance(raw, dict):
            return cls(kind=ContentKind.ABSENT)

        typename = _as_str(raw.get("__typename"))
        kind = _KNOWN_CONTENT.get(typename)
        if kind is None:
            return cls(kind=ContentKind.UNKNOWN, typename=typename)

        return cls(
            kind=kind,
            typename=typename,
            id=_as_str(raw.get("id")),
            title=_as_str(raw.get("title")),
            state=_as_str(raw.get("state")),
            url=_as_str(raw.get("url")),
        )


# --- Output DTOs ---


class Project(BaseModel):
    id: str
    number: int
    title: str = ""
    url: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("id", "title", "url", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> str:
        return _as_str(v)


class ProjectItem(BaseModel):
    id: str
    content_id: str = ""
    content_type: str = ""
    title: str = ""
    state: str = ""
    url: str = ""

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_content(cls, item_id: Any, content: ItemContent) -> "ProjectItem":
        return cls(
            id=_as_str(item_id),
            content_id=content.id,
            content_type=content.typename,
            title=content.title,
            state=content.state,
            url=content.url,
        )

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "ProjectItem":
        content = ItemContent.from_raw(node.get("content"))
        return cls.from_content(node.get("id"), content)


class _Page(BaseModel):
    end_cursor: str = ""
    has_next_page: bool = False

    @model_serializer(mode="wrap")
    def _omit_empty_cursor(self, handler):
        data = handler(self)
        if not data.get("end_cursor"):
            data.pop("end_cursor", None)
        return data


class ProjectPage(_Page):
    projects: List[Project] = Field(default_factory=list)


class ProjectItemPage(_Page):
    items: List[ProjectItem] = Field(default_factory=list)


class ProjectItemResult(BaseModel):
    item: ProjectItem


__all__ = [
    "PageInfo",
    "ContentKind",
    "ItemContent",
    "Project",
    "ProjectItem",
    "ProjectPage",
    "ProjectItemPage",
    "ProjectItemResult",
]
