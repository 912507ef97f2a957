from __future__ import annotations

import math
from typing import Any, Dict, Optional

from github_projects_mcp.core.client import GitHubClientError, GitHubGraphQLClient
from github_projects_mcp.core.errors import TransportError, ValidationError
from github_projects_mcp.core.models import Project, ProjectItem, ProjectItemResult
from github_projects_mcp.core.owner import resolve_owner_id
from github_projects_mcp.core.tools.projects import (
    ITEM_CONTENT_FIELDS,
    PROJECT_FIELDS,
)

CREATE_PROJECT_MUTATION = f"""
mutation($input: CreateProjectV2Input!) {{
  createProjectV2(input: $input) {{
    projectV2 {{ {PROJECT_FIELDS} }}
  }}
}}
"""

ADD_PROJECT_ITEM_MUTATION = f"""
mutation($input: AddProjectV2ItemByIdInput!) {{
  addProjectV2ItemById(input: $input) {{
    item {{
      id
      {ITEM_CONTENT_FIELDS}
    }}
  }}
}}
"""

UPDATE_ITEM_FIELD_MUTATION = """
mutation($input: UpdateProjectV2ItemFieldValueInput!) {
  updateProjectV2ItemFieldValue(input: $input) {
    projectV2Item { id }
  }
}
"""

# Members of the remote ProjectV2FieldValue input object.
FIELD_VALUE_TYPES = {
    "text": "text",
    "number": "number",
    "date": "date",
    "single_select_option_id": "singleSelectOptionId",
    "iteration_id": "iterationId",
}


def _require(**values: Optional[str]) -> Dict[str, str]:
    missing = [name for name, v in values.items() if not (v or "").strip()]
    if missing:
        verb = "is" if len(missing) == 1 else "are"
        raise ValidationError(f"{', '.join(missing)} {verb} required")
    return {name: (v or "").strip() for name, v in values.items()}


async def _mutate(
    client: GitHubGraphQLClient,
    document: str,
    payload: Dict[str, Any],
    *,
    operation: str,
) -> Dict[str, Any]:
    try:
        return await client.mutate(
            document, payload, tool=operation.replace(" ", "_")
        )
    except GitHubClientError as exc:
        raise TransportError(operation, exc) from exc


async def create_project(
    client: GitHubGraphQLClient,
    *,
    owner: str,
    title: str,
    description: Optional[str] = None,
) -> Project:
    """
    Create a Project (v2) for an organization or user login.

    The owner is resolved first (organization preferred over user); no
    mutation is sent when it cannot be resolved.
    """
    required = _require(owner=owner, title=title)

    try:
        owner_id = await resolve_owner_id(client, required["owner"])
    except TransportError as exc:
        raise TransportError("owner lookup", exc) from exc

    payload: Dict[str, Any] = {"ownerId": owner_id, "title": required["title"]}
    if description:
        payload["shortDescription"] = description

    data = await _mutate(
        client, CREATE_PROJECT_MUTATION, payload, operation="create project"
    )
    project = (data.get("createProjectV2") or {}).get("projectV2")
    if not isinstance(project, dict):
        raise TransportError(
            "create project", "response did not include a project"
        )
    return Project.model_validate(project)


async def add_project_item(
    client: GitHubGraphQLClient, *, project_id: str, content_id: str
) -> ProjectItemResult:
    """
    Add an issue or pull request (by node ID) to a project.

    If the remote has not materialised the content yet, the item comes back
    with only its id set.
    """
    required = _require(project_id=project_id, content_id=content_id)
    payload = {
        "projectId": required["project_id"],
        "contentId": required["content_id"],
    }

    data = await _mutate(
        client, ADD_PROJECT_ITEM_MUTATION, payload, operation="add project item"
    )
    item = (data.get("addProjectV2ItemById") or {}).get("item")
    if not isinstance(item, dict):
        raise TransportError(
            "add project item", "response did not include an item"
        )
    return ProjectItemResult(item=ProjectItem.from_node(item))


def _field_value(value: str, value_type: str) -> Dict[str, Any]:
    key = FIELD_VALUE_TYPES.get(value_type)
    if key is None:
        allowed = ", ".join(sorted(FIELD_VALUE_TYPES))
        raise ValidationError(f"value_type must be one of: {allowed}")
    if key == "number":
        try:
            number = float(value)
        except ValueError as exc:
            raise ValidationError(f"value {value!r} is not a number") from exc
        if not math.isfinite(number):
            raise ValidationError(f"value {value!r} is not a finite number")
        return {key: number}
    return {key: value}


async def update_project_item_field(
    client: GitHubGraphQLClient,
    *,
    item_id: str,
    field_id: str,
    value: str,
    project_id: Optional[str] = None,
    value_type: str = "text",
) -> ProjectItemResult:
    """
    Set one field on a project item. Only the item id is returned; the
    remote mutation does not echo the rest of the item.

    value_type: text (default), number, date, single_select_option_id,
    iteration_id. A whitespace-only value counts as missing; any other value
    is sent exactly as given.
    """
    required = _require(item_id=item_id, field_id=field_id, value=value)

    payload: Dict[str, Any] = {
        "itemId": required["item_id"],
        "fieldId": required["field_id"],
        "value": _field_value(value, value_type),
    }
    if project_id and project_id.strip():
        payload["projectId"] = project_id.strip()

    data = await _mutate(
        client,
        UPDATE_ITEM_FIELD_MUTATION,
        payload,
        operation="update project item field",
    )
    updated = (data.get("updateProjectV2ItemFieldValue") or {}).get("projectV2Item")
    if not isinstance(updated, dict):
        raise TransportError(
            "update project item field", "response did not include an item"
        )
    return ProjectItemResult(item=ProjectItem(id=str(updated.get("id") or "")))
