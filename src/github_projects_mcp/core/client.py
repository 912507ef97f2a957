import logging
import os
import time
from typing import Any, Dict, List, Optional

import httpx
from dotenv import load_dotenv

from .errors import ConfigurationError
from .observability import log_event

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "github-projects-mcp"


class GitHubClientError(Exception):
    """Base error for transport failures; str() carries the raw remote text."""


class GitHubHTTPError(GitHubClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(
            f"non-200 OK status code: {status_code} {method} {url}: {message}"
        )
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_json = response_json
        self.response_text = response_text


class GitHubGraphQLError(GitHubClientError):
    """
    A 200 response carrying an `errors` array. GitHub often returns partial
    data alongside (e.g. one root resolved, the other not), kept on `data`.
    """

    def __init__(
        self,
        errors: List[Dict[str, Any]],
        *,
        data: Optional[Dict[str, Any]] = None,
    ):
        messages = [
            str(e.get("message") or "unknown error")
            for e in errors
            if isinstance(e, dict)
        ]
        super().__init__("; ".join(messages) or "graphql request failed")
        self.errors = errors
        self.messages = messages
        self.data = data


class GitHubParseError(GitHubClientError):
    pass


class GitHubGraphQLClient:
    """
    Shared client for the GitHub GraphQL API.
    - Handles bearer auth, endpoint, timeouts
    - Returns the decoded `data` object; raises on HTTP/GraphQL errors
    - No retries and no business logic; tools own domain decisions
    """

    def __init__(
        self,
        *,
        token: str,
        endpoint: str = DEFAULT_GRAPHQL_URL,
        timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        token = (token or "").strip()
        endpoint = (endpoint or "").strip()

        if not token:
            raise ConfigurationError("token must be provided.")
        if not endpoint:
            raise ConfigurationError("endpoint must be provided.")

        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("github_projects_mcp.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
            timeout=timeout_seconds,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "GitHubGraphQLClient":
        load_dotenv()
        token = os.getenv("GITHUB_PERSONAL_ACCESS_TOKEN", "").strip()
        endpoint = os.getenv("GITHUB_GRAPHQL_URL", "").strip() or DEFAULT_GRAPHQL_URL
        return cls(token=token, endpoint=endpoint, **kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "GitHubGraphQLClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def execute(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        *,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Core request method. One POST, never retried.
        - Raises GitHubHTTPError on non-2xx HTTP responses
        - Raises GitHubGraphQLError when the body carries `errors`
        - Raises GitHubParseError if the body isn't a GraphQL JSON object
        - Raises GitHubClientError on network/timeout errors
        - Returns the `data` object on success
        """
        start = time.perf_counter()
        body = {"query": document, "variables": variables or {}}

        try:
            resp = await self.http.post(self.endpoint, json=body)
        except httpx.HTTPError as exc:
            log_event(
                "op_call",
                tool=tool,
                endpoint=self.endpoint,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise GitHubClientError(
                f"Network/timeout error calling POST {self.endpoint}: {exc}"
            ) from exc

        log_event(
            "op_call",
            tool=tool,
            endpoint=self.endpoint,
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp)

        payload = self._safe_json(resp)
        data = payload.get("data")
        errors = payload.get("errors")

        if errors:
            if not isinstance(errors, list):
                errors = [{"message": str(errors)}]
            raise GitHubGraphQLError(
                errors, data=data if isinstance(data, dict) else None
            )
        if not isinstance(data, dict):
            raise GitHubParseError(
                f"Expected a `data` object from POST {self.endpoint}, "
                f"got {type(data).__name__}"
            )
        return data

    async def query(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        *,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.execute(document, variables, tool=tool)

    async def mutate(
        self,
        document: str,
        input: Dict[str, Any],
        *,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run a mutation whose document declares a single `$input` variable."""
        return await self.execute(document, {"input": input}, tool=tool)

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        if not resp.content:
            raise GitHubParseError(
                f"Empty response body from POST {resp.request.url}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise GitHubParseError(
                f"Expected JSON from POST {resp.request.url}, "
                f"got non-JSON body snippet: {snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise GitHubParseError(
                f"Expected top-level JSON object from POST {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(self, resp: httpx.Response) -> GitHubHTTPError:
        url = str(resp.request.url)
        # Try JSON first; fall back to text snippet.
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = resp.reason_phrase or "request failed"

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                message = parsed.get("message") or parsed.get("error") or message
        except ValueError:
            response_text = (resp.text or "")[:500]

        return GitHubHTTPError(
            status_code=resp.status_code,
            method="POST",
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )


__all__ = [
    "DEFAULT_GRAPHQL_URL",
    "GitHubGraphQLClient",
    "GitHubClientError",
    "GitHubHTTPError",
    "GitHubGraphQLError",
    "GitHubParseError",
]
