"""Core domain surface for github-projects-mcp (transport-agnostic)."""

from .classify import (
    NOT_FOUND_PHRASES,
    ErrorKind,
    classify,
    is_not_found,
    register_not_found_phrase,
)
from .client import (
    DEFAULT_GRAPHQL_URL,
    GitHubClientError,
    GitHubGraphQLClient,
    GitHubGraphQLError,
    GitHubHTTPError,
    GitHubParseError,
)
from .config import create_client_from_env, load_env_config
from .errors import (
    ConfigurationError,
    GitHubProjectsError,
    NotFoundError,
    OwnerNotFoundError,
    TransportError,
    ValidationError,
)
from .models import (
    ContentKind,
    ItemContent,
    Project,
    ProjectItem,
    ProjectItemPage,
    ProjectItemResult,
    ProjectPage,
)
from .owner import Owner, OwnerKind, resolve_owner, resolve_owner_id
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

__all__ = [
    # Client
    "DEFAULT_GRAPHQL_URL",
    "GitHubGraphQLClient",
    # Transport exceptions
    "GitHubClientError",
    "GitHubHTTPError",
    "GitHubGraphQLError",
    "GitHubParseError",
    # Domain exceptions
    "GitHubProjectsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OwnerNotFoundError",
    "TransportError",
    # Error classification
    "NOT_FOUND_PHRASES",
    "ErrorKind",
    "classify",
    "is_not_found",
    "register_not_found_phrase",
    # Owner resolution
    "Owner",
    "OwnerKind",
    "resolve_owner",
    "resolve_owner_id",
    # DTOs
    "ContentKind",
    "ItemContent",
    "Project",
    "ProjectItem",
    "ProjectPage",
    "ProjectItemPage",
    "ProjectItemResult",
    # Config helpers
    "create_client_from_env",
    "load_env_config",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
