from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .classify import ErrorKind, classify
from .client import GitHubClientError, GitHubGraphQLClient
from .errors import OwnerNotFoundError, TransportError, ValidationError

log = logging.getLogger("github_projects_mcp.core.owner")

ORGANIZATION_ID_QUERY = """
query($login: String!) {
  organization(login: $login) { id }
}
"""

USER_ID_QUERY = """
query($login: String!) {
  user(login: $login) { id }
}
"""


class OwnerKind(str, Enum):
    ORGANIZATION = "organization"
    USER = "user"


@dataclass(frozen=True)
class Owner:
    kind: OwnerKind
    id: str
    login: str


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FATAL = "fatal"


@dataclass(frozen=True)
class LookupResult:
    status: LookupStatus
    node_id: Optional[str] = None
    error: Optional[GitHubClientError] = None


# Organization is tried first and wins when both namespaces match.
_OWNER_LOOKUPS: Tuple[Tuple[OwnerKind, str], ...] = (
    (OwnerKind.ORGANIZATION, ORGANIZATION_ID_QUERY),
    (OwnerKind.USER, USER_ID_QUERY),
)


async def _lookup(
    client: GitHubGraphQLClient, kind: OwnerKind, document: str, login: str
) -> LookupResult:
    try:
        data = await client.query(
            document, {"login": login}, tool=f"{kind.value}_lookup"
        )
    except GitHubClientError as exc:
        if classify(exc) is ErrorKind.NOT_FOUND:
            return LookupResult(LookupStatus.NOT_FOUND, error=exc)
        return LookupResult(LookupStatus.FATAL, error=exc)

    node = data.get(kind.value)
    if isinstance(node, dict) and node.get("id"):
        return LookupResult(LookupStatus.FOUND, node_id=str(node["id"]))
    return LookupResult(LookupStatus.NOT_FOUND)


async def resolve_owner(client: GitHubGraphQLClient, login: str) -> Owner:
    """
    Resolve a login to an organization or user node.

    Lookups run strictly in order and stop at the first step that finds the
    owner or fails fatally. A fatal failure raises TransportError naming the
    step ("organization lookup failed: ..."); when every step comes back
    empty, OwnerNotFoundError is raised.
    """
    login = (login or "").strip()
    if not login:
        raise ValidationError("owner is required")

    for kind, document in _OWNER_LOOKUPS:
        result = await _lookup(client, kind, document, login)
        log.debug(
            "owner.lookup",
            extra={
                "login": login,
                "operation": kind.value,
                "outcome": result.status.value,
            },
        )
        if result.status is LookupStatus.FOUND:
            return Owner(kind=kind, id=result.node_id or "", login=login)
        if result.status is LookupStatus.FATAL:
            raise TransportError(f"{kind.value} lookup", result.error) from result.error

    raise OwnerNotFoundError(login)


async def resolve_owner_id(client: GitHubGraphQLClient, login: str) -> str:
    owner = await resolve_owner(client, login)
    return owner.id


__all__ = [
    "OwnerKind",
    "Owner",
    "LookupStatus",
    "LookupResult",
    "resolve_owner",
    "resolve_owner_id",
    "ORGANIZATION_ID_QUERY",
    "USER_ID_QUERY",
]
