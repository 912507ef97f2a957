"""
Classify remote failures as "entity not found" vs fatal.

GitHub's GraphQL API returns free-text errors with no stable code, so the
recognised phrasings live in one registry here. Callers only classify
non-None errors.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from .client import GitHubGraphQLError

NOT_FOUND_PHRASES: List[str] = [
    "could not resolve to a User",
    "could not resolve to an Organization",
    "could not resolve to a node",
    "could not resolve to a ProjectV2",
    "non-200 OK status code: 400",
    "non-200 OK status code: 404",
]


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    FATAL = "fatal"


def register_not_found_phrase(phrase: str) -> None:
    """Add a phrase that marks an error message as "not found"."""
    phrase = (phrase or "").strip()
    if not phrase:
        raise ValueError("phrase must be a non-empty string")
    needle = phrase.casefold()
    if any(p.casefold() == needle for p in NOT_FOUND_PHRASES):
        return
    NOT_FOUND_PHRASES.append(phrase)


def _matches(message: str) -> bool:
    msg = message.casefold()
    return any(phrase.casefold() in msg for phrase in NOT_FOUND_PHRASES)


def classify(err: BaseException | str) -> ErrorKind:
    """
    NOT_FOUND when the message carries a registered phrase. A GraphQL error
    with several messages is NOT_FOUND only if every message is.
    """
    if isinstance(err, GitHubGraphQLError) and err.messages:
        found = all(_matches(m) for m in err.messages)
    else:
        found = _matches(str(err))
    return ErrorKind.NOT_FOUND if found else ErrorKind.FATAL


def is_not_found(err: BaseException | str) -> bool:
    return classify(err) is ErrorKind.NOT_FOUND


__all__ = [
    "NOT_FOUND_PHRASES",
    "ErrorKind",
    "register_not_found_phrase",
    "classify",
    "is_not_found",
]
