from __future__ import annotations

from typing import Any, Dict, Optional

from github_projects_mcp.core.classify import ErrorKind, classify, is_not_found
from github_projects_mcp.core.client import (
    GitHubClientError,
    GitHubGraphQLClient,
    GitHubGraphQLError,
)
from github_projects_mcp.core.errors import (
    NotFoundError,
    TransportError,
    ValidationError,
)
from github_projects_mcp.core.models import (
    Project,
    ProjectItem,
    ProjectItemPage,
    ProjectPage,
)
from github_projects_mcp.core.tools._connections import (
    DEFAULT_PAGE_SIZE,
    connection_nodes,
    connection_page_info,
    page_variables,
)

PROJECT_FIELDS = "id number title url"

ITEM_CONTENT_FIELDS = """
content {
  __typename
  ... on Issue { id title state url }
  ... on PullRequest { id title state url }
  ... on DraftIssue { id title }
}
"""

ORGANIZATION_PROJECTS_QUERY = f"""
query($login: String!, $first: Int!, $after: String) {{
  organization(login: $login) {{
    projectsV2(first: $first, after: $after) {{
      nodes {{ {PROJECT_FIELDS} }}
      pageInfo {{ endCursor hasNextPage }}
    }}
  }}
}}
"""

USER_PROJECTS_QUERY = f"""
query($login: String!, $first: Int!, $after: String) {{
  user(login: $login) {{
    projectsV2(first: $first, after: $after) {{
      nodes {{ {PROJECT_FIELDS} }}
      pageInfo {{ endCursor hasNextPage }}
    }}
  }}
}}
"""

PROJECT_BY_NUMBER_QUERY = f"""
query($login: String!, $number: Int!) {{
  organization(login: $login) {{
    projectV2(number: $number) {{ {PROJECT_FIELDS} }}
  }}
  user(login: $login) {{
    projectV2(number: $number) {{ {PROJECT_FIELDS} }}
  }}
}}
"""

PROJECT_ITEMS_QUERY = f"""
query($id: ID!, $first: Int!, $after: String) {{
  node(id: $id) {{
    ... on ProjectV2 {{
      items(first: $first, after: $after) {{
        nodes {{
          id
          {ITEM_CONTENT_FIELDS}
        }}
        pageInfo {{ endCursor hasNextPage }}
      }}
    }}
  }}
}}
"""


def _require(value: Optional[str], name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{name} is required")
    return value


async def _list_projects(
    client: GitHubGraphQLClient,
    *,
    root: str,
    document: str,
    login: str,
    first: Optional[int],
    after: Optional[str],
) -> ProjectPage:
    operation = f"list {root} projects"
    variables = {"login": login, **page_variables(first, after)}
    try:
        data = await client.query(
            document, variables, tool=operation.replace(" ", "_")
        )
    except GitHubClientError as exc:
        if classify(exc) is ErrorKind.NOT_FOUND:
            raise NotFoundError(f"{root} not found: {login!r}") from exc
        raise TransportError(operation, exc) from exc

    owner = data.get(root)
    if not isinstance(owner, dict):
        raise NotFoundError(f"{root} not found: {login!r}")

    connection = owner.get("projectsV2")
    page_info = connection_page_info(connection)
    return ProjectPage(
        projects=[Project.model_validate(n) for n in connection_nodes(connection)],
        end_cursor=page_info.end_cursor,
        has_next_page=page_info.has_next_page,
    )


async def list_organization_projects(
    client: GitHubGraphQLClient,
    *,
    organization: str,
    first: int = DEFAULT_PAGE_SIZE,
    after: Optional[str] = None,
) -> ProjectPage:
    """
    List Projects (v2) owned by an organization, in remote order.

    `first` is clamped to 1..100; pass the previous page's `end_cursor` as
    `after` to continue. The projects list is always present, possibly empty.
    """
    organization = _require(organization, "organization")
    return await _list_projects(
        client,
        root="organization",
        document=ORGANIZATION_PROJECTS_QUERY,
        login=organization,
        first=first,
        after=after,
    )


async def list_user_projects(
    client: GitHubGraphQLClient,
    *,
    user: str,
    first: int = DEFAULT_PAGE_SIZE,
    after: Optional[str] = None,
) -> ProjectPage:
    """List Projects (v2) owned by a user; same paging as organization listing."""
    user = _require(user, "user")
    return await _list_projects(
        client,
        root="user",
        document=USER_PROJECTS_QUERY,
        login=user,
        first=first,
        after=after,
    )


def _project_under(
    data: Optional[Dict[str, Any]], root: str
) -> Optional[Dict[str, Any]]:
    owner = (data or {}).get(root)
    if not isinstance(owner, dict):
        return None
    project = owner.get("projectV2")
    return project if isinstance(project, dict) else None


async def get_project(
    client: GitHubGraphQLClient, *, owner: str, number: int
) -> Project:
    """
    Fetch a single project by owner login and project number.

    Both the organization and user roots are queried in one round trip; the
    organization's project wins when both resolve.
    """
    owner = _require(owner, "owner")
    if not number:
        raise ValidationError("number is required")
    if number < 0:
        raise ValidationError("number must be positive")

    variables = {"login": owner, "number": int(number)}
    try:
        data = await client.query(
            PROJECT_BY_NUMBER_QUERY, variables, tool="get_project"
        )
    except GitHubGraphQLError as exc:
        # The root that doesn't match reports "could not resolve"; the other
        # root's data is still usable.
        if not is_not_found(exc):
            raise TransportError("get project", exc) from exc
        if exc.data is None:
            raise NotFoundError(f"project not found: {owner}#{number}") from exc
        data = exc.data
    except GitHubClientError as exc:
        if classify(exc) is ErrorKind.NOT_FOUND:
            raise NotFoundError(f"project not found: {owner}#{number}") from exc
        raise TransportError("get project", exc) from exc

    for root in ("organization", "user"):
        project = _project_under(data, root)
        if project is not None:
            return Project.model_validate(project)

    raise NotFoundError(f"project not found: {owner}#{number}")


async def get_project_items(
    client: GitHubGraphQLClient,
    *,
    project_id: str,
    first: int = DEFAULT_PAGE_SIZE,
    after: Optional[str] = None,
) -> ProjectItemPage:
    """
    List items of a project by its node ID.

    Items whose content is null or of an unmapped type are still returned,
    with the content fields left empty.
    """
    project_id = _require(project_id, "project_id")
    variables = {"id": project_id, **page_variables(first, after)}
    try:
        data = await client.query(
            PROJECT_ITEMS_QUERY, variables, tool="get_project_items"
        )
    except GitHubClientError as exc:
        if classify(exc) is ErrorKind.NOT_FOUND:
            raise NotFoundError(f"project not found: {project_id!r}") from exc
        raise TransportError("get project items", exc) from exc

    node = data.get("node")
    if not isinstance(node, dict) or "items" not in node:
        raise NotFoundError(f"project not found: {project_id!r}")

    connection = node.get("items")
    page_info = connection_page_info(connection)
    return ProjectItemPage(
        items=[ProjectItem.from_node(n) for n in connection_nodes(connection)],
        end_cursor=page_info.end_cursor,
        has_next_page=page_info.has_next_page,
    )
