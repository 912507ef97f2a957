import inspect
from types import ModuleType

import pytest
from mcp.server.fastmcp import FastMCP
from github_projects_mcp.core.client import GitHubGraphQLClient
from github_projects_mcp.core.registry import (
    discover_tool_modules,
    register_discovered_tools,
)
from github_projects_mcp.server import build_app

EXPECTED_TOOLS = {
    "list_organization_projects",
    "list_user_projects",
    "get_project",
    "get_project_items",
    "create_project",
    "add_project_item",
    "update_project_item_field",
    "system_ping",
}


def _make_module(name: str, code: str) -> ModuleType:
    module = ModuleType(name)
    exec(code, module.__dict__)
    return module


def _client() -> GitHubGraphQLClient:
    return GitHubGraphQLClient(token="mock-token", endpoint="https://mock-gh.test/graphql")


@pytest.mark.asyncio
async def test_register_discovered_tools_registers_valid_tools_only():
    code = """
async def tool_fn(client, *, foo:int=1):
    return (client.endpoint, foo)

async def _private(client):
    return None

async def wrong_first(arg1, client):
    return None

def sync_func(client):
    return None
"""
    mod = _make_module("fake_mod", code)

    app = FastMCP("test")
    registered = []

    # monkeypatch tool to record registrations
    def record_tool(name):
        def decorator(fn):
            registered.append((name, fn))
            return fn

        return decorator

    app.tool = record_tool  # type: ignore[attr-defined]

    names = register_discovered_tools(app, _client(), modules=[mod])

    assert names == ["tool_fn"]
    assert [n for n, _ in registered] == ["tool_fn"]

    # wrapper signature should not expose client
    sig = inspect.signature(registered[0][1])
    assert "client" not in sig.parameters

    # call wrapper to ensure client injection works
    result = await registered[0][1](foo=5)
    assert result == ("https://mock-gh.test/graphql", 5)


def test_register_discovered_tools_duplicate_names_raise():
    mod1 = _make_module("mod1", "async def tool_fn(client): return None")
    mod2 = _make_module("mod2", "async def tool_fn(client): return None")

    app = FastMCP("test")

    with pytest.raises(ValueError):
        register_discovered_tools(app, _client(), modules=[mod1, mod2])


def test_register_discovered_tools_requires_tool_decorator():
    with pytest.raises(TypeError):
        register_discovered_tools(object(), _client(), modules=[])


def test_discover_tool_modules_skips_import_failures(monkeypatch, caplog):
    import importlib
    import pkgutil

    class Info:
        def __init__(self, name):
            self.name = name

    def fake_iter_modules(path, prefix):
        return [
            Info(prefix + "good"),
            Info(prefix + "bad"),
        ]

    good_mod = _make_module(
        "github_projects_mcp.core.tools.good", "async def tool_fn(client): return None"
    )

    real_import_module = importlib.import_module

    def fake_import_module(name, *args, **kwargs):
        if name == "github_projects_mcp.core.tools.bad":
            raise ImportError("boom")
        if name == "github_projects_mcp.core.tools.good":
            return good_mod
        return real_import_module(name, *args, **kwargs)

    monkeypatch.setattr(pkgutil, "iter_modules", fake_iter_modules)
    monkeypatch.setattr(importlib, "import_module", fake_import_module)

    with caplog.at_level("ERROR"):
        modules = discover_tool_modules()

    assert [m.__name__ for m in modules] == ["github_projects_mcp.core.tools.good"]
    assert any("Failed importing tool module" in rec.message for rec in caplog.records)


def test_real_tools_package_exposes_every_operation():
    app = FastMCP("test")
    registered = []

    def record_tool(name):
        def decorator(fn):
            registered.append(fn)
            return fn

        return decorator

    app.tool = record_tool  # type: ignore[attr-defined]

    names = register_discovered_tools(app, _client())

    assert set(names) == EXPECTED_TOOLS
    assert len(names) == len(EXPECTED_TOOLS)
    for fn in registered:
        assert "client" not in inspect.signature(fn).parameters


@pytest.mark.asyncio
async def test_build_app_lists_tools():
    app = build_app(_client())

    tools = await app.list_tools()

    assert {t.name for t in tools} == EXPECTED_TOOLS
