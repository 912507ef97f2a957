import time

from github_projects_mcp.core.client import GitHubClientError, GitHubGraphQLClient
from github_projects_mcp.core.errors import TransportError

VIEWER_QUERY = "query { viewer { login id } }"


async def system_ping(client: GitHubGraphQLClient) -> dict:
    """
    Simple connectivity and latency check against the GitHub GraphQL API.
    Returns status plus the authenticated user's login and node id.
    """
    start = time.perf_counter()

    try:
        data = await client.query(VIEWER_QUERY, tool="system_ping")
    except GitHubClientError as exc:
        raise TransportError("system ping", exc) from exc

    latency_ms = (time.perf_counter() - start) * 1000
    viewer = data.get("viewer") or {}

    return {
        "status": "ok",
        "latency_ms": round(latency_ms, 2),
        "login": viewer.get("login", "unknown"),
        "user_id": viewer.get("id"),
        "endpoint": client.endpoint,
    }
