"""
Shared helpers for working with GraphQL connection payloads.
"""

from typing import Any, Dict, List, Optional

from github_projects_mcp.core.models import PageInfo

DEFAULT_PAGE_SIZE = 30
MAX_PAGE_SIZE = 100


def clamp_page_size(page_size: Optional[int]) -> int:
    """Clamp page_size into the range the API accepts for `first`."""
    if not page_size:
        return DEFAULT_PAGE_SIZE
    return max(1, min(int(page_size), MAX_PAGE_SIZE))


def page_variables(first: Optional[int], after: Optional[str]) -> Dict[str, Any]:
    return {"first": clamp_page_size(first), "after": after or None}


def connection_nodes(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Extract the nodes list from a connection payload, preserving order.
    Raises ValueError if `nodes` is present but not a list.
    """
    if not isinstance(connection, dict):
        return []
    nodes = connection.get("nodes") or []
    if not isinstance(nodes, list):
        raise ValueError("Expected connection nodes to be a list.")
    return [n for n in nodes if isinstance(n, dict)]


def connection_page_info(connection: Optional[Dict[str, Any]]) -> PageInfo:
    raw = connection.get("pageInfo") if isinstance(connection, dict) else None
    return PageInfo.model_validate(raw if isinstance(raw, dict) else {})
