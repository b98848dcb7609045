# vRA Automation Helpers MCP Server
# File: tests/test_sanity.py
# Version: v2

"""Basic sanity tests for configuration and connection setup."""

from vra_helpers_mcp.config import VraConfig
from vra_helpers_mcp.connection import Connection
from vra_helpers_mcp.tools import tasks


def test_config_from_env_defaults(monkeypatch) -> None:
    for name in (
        "VRA_SERVER_URL",
        "VRA_ACCESS_TOKEN",
        "VRA_VERIFY_TLS",
        "VRA_PAGE_LIMIT",
        "VRA_POLL_INTERVAL_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    config = VraConfig.from_env()
    assert config.server_url is None
    assert config.verify_tls is True
    assert config.page_limit == 100
    assert config.poll_interval_seconds == 30


def test_config_clamps_and_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("VRA_PAGE_LIMIT", "5000")
    monkeypatch.setenv("VRA_POLL_INTERVAL_SECONDS", "soon")
    monkeypatch.setenv("VRA_VERIFY_TLS", "off")

    config = VraConfig.from_env()
    assert config.page_limit == 1000
    assert config.poll_interval_seconds == 30
    assert config.verify_tls is False


def test_connection_requires_url_and_token() -> None:
    assert Connection.from_config(VraConfig(server_url=None, access_token="t")) is None
    assert Connection.from_config(VraConfig(server_url="https://vra", access_token=None)) is None

    connection = Connection.from_config(VraConfig(server_url="https://vra/", access_token="tok-secret"))
    assert connection is not None
    assert connection.server_base_url == "https://vra"
    assert connection.headers()["Authorization"] == "Bearer tok-secret"
    assert "tok-secret" not in repr(connection)


def test_make_client_without_env_has_no_connection(monkeypatch) -> None:
    monkeypatch.delenv("VRA_SERVER_URL", raising=False)
    monkeypatch.delenv("VRA_ACCESS_TOKEN", raising=False)

    client = tasks._make_client()
    assert client.connection is None
