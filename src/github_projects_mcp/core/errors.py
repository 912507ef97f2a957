from __future__ import annotations

from typing import Optional


class GitHubProjectsError(Exception):
    """Base error for every domain failure surfaced to tool callers."""


class ValidationError(GitHubProjectsError, ValueError):
    """Required input missing or malformed; raised before any network call."""


class ConfigurationError(GitHubProjectsError, ValueError):
    """Credential or endpoint missing from configuration."""


class NotFoundError(GitHubProjectsError):
    """An owner, project or node could not be resolved."""


class OwnerNotFoundError(NotFoundError):
    def __init__(self, login: str):
        super().__init__(f"owner not found: {login!r}")
        self.login = login


class TransportError(GitHubProjectsError):
    """
    Network failure or unrecognised remote error, tagged with the failing
    sub-operation, e.g. "organization lookup failed: <cause>".
    """

    def __init__(self, operation: str, cause: Optional[BaseException | str] = None):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


__all__ = [
    "GitHubProjectsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OwnerNotFoundError",
    "TransportError",
]
