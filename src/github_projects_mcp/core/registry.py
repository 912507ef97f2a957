"""
Tool discovery for the GitHub Projects tools.

A tool is any public coroutine defined in a `core.tools` module whose first
parameter is `client`. The registered wrapper injects the shared
GitHubGraphQLClient, so MCP callers only see the remaining keyword arguments.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Callable, Iterable, List, Set, Tuple, get_type_hints

from .client import GitHubGraphQLClient

log = logging.getLogger("github_projects_mcp.core.registry")

TOOLS_PACKAGE = "github_projects_mcp.core.tools"

ClientProvider = Callable[[], GitHubGraphQLClient]


def discover_tool_modules(package_name: str = TOOLS_PACKAGE) -> List[ModuleType]:
    """
    Import the modules of `package_name`. Private helpers (`_connections`)
    are imported too, they simply expose no tools. A module that fails to
    import is logged and left out.
    """
    package = importlib.import_module(package_name)
    modules: List[ModuleType] = []

    for info in pkgutil.iter_modules(package.__path__, package.__name__ + "."):
        try:
            modules.append(importlib.import_module(info.name))
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", info.name, exc)

    return modules


def _takes_client_first(func: Callable) -> bool:
    params = list(inspect.signature(func).parameters)
    return bool(params) and params[0] == "client"


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield public coroutines defined in `module` that take `client` first."""
    for name, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if name.startswith("_") or func.__module__ != module.__name__:
            continue
        if not _takes_client_first(func):
            log.debug("Not a tool (no leading client): %s.%s", module.__name__, name)
            continue
        yield func


def collect_tools(modules: Iterable[ModuleType]) -> List[Tuple[str, Callable]]:
    """Pair each tool with its name; two tools may not share a name."""
    seen: Set[str] = set()
    tools: List[Tuple[str, Callable]] = []
    for module in modules:
        for func in iter_tool_functions(module):
            if func.__name__ in seen:
                raise ValueError(f"Duplicate tool name detected: {func.__name__}")
            seen.add(func.__name__)
            tools.append((func.__name__, func))
    return tools


def _bind_client(func: Callable, client_provider: ClientProvider) -> Callable:
    """Wrap `func` so `client` is supplied per call and absent from the schema."""
    sig = inspect.signature(func)
    hints = get_type_hints(func)

    params = [
        p.replace(annotation=hints.get(p.name, p.annotation))
        for p in list(sig.parameters.values())[1:]
    ]
    public_sig = sig.replace(
        parameters=params,
        return_annotation=hints.get("return", sig.return_annotation),
    )

    async def tool(*args, **kwargs):
        return await func(client_provider(), *args, **kwargs)

    tool.__name__ = func.__name__
    tool.__qualname__ = func.__qualname__
    tool.__doc__ = func.__doc__
    tool.__module__ = func.__module__
    tool.__signature__ = public_sig  # type: ignore[attr-defined]
    return tool


def register_discovered_tools(
    app,
    client: ClientProvider | GitHubGraphQLClient,
    modules: List[ModuleType] | None = None,
) -> List[str]:
    """
    Register every discovered tool via `app.tool(name=...)` and return the
    names in registration order. `client` is a shared client or a callable
    returning one.
    """
    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    if isinstance(client, GitHubGraphQLClient):
        shared = client

        def client_provider() -> GitHubGraphQLClient:
            return shared

    else:
        client_provider = client

    tools = collect_tools(modules or discover_tool_modules())
    for name, func in tools:
        app.tool(name=name)(_bind_client(func, client_provider))
        log.info("Registered tool: %s (%s)", name, func.__module__)

    return [name for name, _ in tools]


__all__ = [
    "TOOLS_PACKAGE",
    "collect_tools",
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
