from __future__ import annotations

import os
from typing import Tuple

from . import client as _client
from .client import DEFAULT_GRAPHQL_URL, GitHubGraphQLClient
from .errors import ConfigurationError

TOKEN_ENV = "GITHUB_PERSONAL_ACCESS_TOKEN"
ENDPOINT_ENV = "GITHUB_GRAPHQL_URL"
LOG_LEVEL_ENV = "GITHUB_PROJECTS_MCP_LOG_LEVEL"


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load the GitHub token and GraphQL endpoint from environment (optional .env)."""
    if use_dotenv:
        _client.load_dotenv()
    token = os.getenv(TOKEN_ENV, "").strip()
    endpoint = os.getenv(ENDPOINT_ENV, "").strip() or DEFAULT_GRAPHQL_URL
    return token, endpoint


def load_log_level() -> str:
    return os.getenv(LOG_LEVEL_ENV, "").strip() or "INFO"


def create_client_from_env(**kwargs) -> GitHubGraphQLClient:
    """Create a GitHubGraphQLClient from environment variables."""
    token, endpoint = load_env_config()
    if not token:
        raise ConfigurationError(f"Missing {TOKEN_ENV} in environment.")
    return GitHubGraphQLClient(token=token, endpoint=endpoint, **kwargs)


__all__ = [
    "TOKEN_ENV",
    "ENDPOINT_ENV",
    "LOG_LEVEL_ENV",
    "load_env_config",
    "load_log_level",
    "create_client_from_env",
]
