from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from github_projects_mcp.core.config import create_client_from_env, load_log_level
from github_projects_mcp.core.logging import setup_logging
from github_projects_mcp.core.registry import register_discovered_tools

SERVER_NAME = "github-projects-mcp"


def build_app(client=None) -> FastMCP:
    """Create a FastMCP app with every discovered tool bound to one client."""
    client = client or create_client_from_env()
    app = FastMCP(SERVER_NAME)
    register_discovered_tools(app, client)
    return app


# --- Entry point ----------------------------------------------------------- #


async def main() -> None:
    setup_logging(load_log_level())
    # Fails with ConfigurationError before any network call when the token is unset
    client = create_client_from_env()

    app = build_app(client)
    try:
        await app.run_stdio_async()
    finally:
        await client.aclose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
