import pytest
from github_projects_mcp.core.client import DEFAULT_GRAPHQL_URL
from github_projects_mcp.core.config import (
    create_client_from_env,
    load_env_config,
    load_log_level,
)
from github_projects_mcp.core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    # Prevent load_dotenv from repopulating values from .env
    monkeypatch.setattr(
        "github_projects_mcp.core.client.load_dotenv", lambda *a, **k: None
    )


def test_create_client_from_env_missing_token(monkeypatch):
    monkeypatch.delenv("GITHUB_PERSONAL_ACCESS_TOKEN", raising=False)

    with pytest.raises(ConfigurationError) as exc:
        create_client_from_env()

    assert "Missing GITHUB_PERSONAL_ACCESS_TOKEN" in str(exc.value)


def test_create_client_from_env_blank_token(monkeypatch):
    monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "   ")

    with pytest.raises(ConfigurationError):
        create_client_from_env()


def test_load_env_config_endpoint_override(monkeypatch):
    monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("GITHUB_GRAPHQL_URL", "https://ghe.example.com/api/graphql")

    assert load_env_config() == ("tok", "https://ghe.example.com/api/graphql")


def test_create_client_from_env_default_endpoint(monkeypatch):
    monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "tok")
    monkeypatch.delenv("GITHUB_GRAPHQL_URL", raising=False)

    client = create_client_from_env()

    assert client.endpoint == DEFAULT_GRAPHQL_URL


def test_load_log_level(monkeypatch):
    monkeypatch.delenv("GITHUB_PROJECTS_MCP_LOG_LEVEL", raising=False)
    assert load_log_level() == "INFO"

    monkeypatch.setenv("GITHUB_PROJECTS_MCP_LOG_LEVEL", "debug")
    assert load_log_level() == "debug"
