"""github_projects_mcp package exports."""

from .core import (
    ConfigurationError,
    GitHubClientError,
    GitHubGraphQLClient,
    GitHubGraphQLError,
    GitHubHTTPError,
    GitHubParseError,
    GitHubProjectsError,
    NotFoundError,
    OwnerNotFoundError,
    Project,
    ProjectItem,
    ProjectItemPage,
    ProjectPage,
    TransportError,
    ValidationError,
    create_client_from_env,
    discover_tool_modules,
    register_discovered_tools,
    resolve_owner,
)

__all__ = [
    # Client
    "GitHubGraphQLClient",
    "create_client_from_env",
    # Exceptions
    "GitHubClientError",
    "GitHubHTTPError",
    "GitHubGraphQLError",
    "GitHubParseError",
    "GitHubProjectsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OwnerNotFoundError",
    "TransportError",
    # Domain
    "resolve_owner",
    "Project",
    "ProjectItem",
    "ProjectPage",
    "ProjectItemPage",
    # Server utilities
    "discover_tool_modules",
    "register_discovered_tools",
]
