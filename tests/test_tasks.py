# vRA Automation Helpers MCP Server
# File: tests/test_tasks.py
# Version: v2

"""Tests for the MCP-facing tasks.

These tests patch `_make_client` so that we never talk to a real vRA
server.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List

import httpx
import pytest
from mcp.server.fastmcp import FastMCP

from vra_helpers_mcp.client import VraClient
from vra_helpers_mcp.config import VraConfig
from vra_helpers_mcp.connection import Connection
from vra_helpers_mcp.exceptions import NotConnectedError
from vra_helpers_mcp.models import RequestStatus
from vra_helpers_mcp.tools import request_waiter, tasks


class DummyServer:
    def __init__(self) -> None:
        self.tools: Dict[str, Callable[..., Any]] = {}

    def tool(self, *args, **kwargs):
        def decorator(fn):
            self.tools[kwargs["name"]] = fn
            return fn

        return decorator


def _vra_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/software-service/api/softwarecomponenttypes":
        return httpx.Response(200, json={"content": [{"id": "Software.Java", "name": "Java"}]})
    if path == "/software-service/api/softwarecomponenttypes/Software.Java":
        return httpx.Response(
            200,
            json={
                "id": "Software.Java",
                "name": "Java",
                "schema": {
                    "fields": [
                        {
                            "label": "java_home",
                            "description": "JDK location",
                            "dataType": {"type": "primitive", "typeId": "STRING"},
                            "state": {
                                "facets": [
                                    {"type": "defaultValue", "value": {"value": {"value": "/opt/jdk"}}},
                                    {"type": "mandatory", "value": {"value": {"value": True}}},
                                ]
                            },
                        },
                        {
                            "label": "vm",
                            "dataType": {"type": "ref", "typeId": "Infrastructure.Machine"},
                        },
                    ]
                },
            },
        )
    if path == "/catalog-service/api/consumer/requests":
        return httpx.Response(200, json={"content": [{"requestNumber": 77, "state": "SUCCESSFUL"}]})
    return httpx.Response(404, text="unknown path")


@pytest.fixture
def mock_vra(monkeypatch) -> None:
    cfg = VraConfig(server_url="https://vra.example.com", access_token="tok", poll_interval_seconds=5)
    client = VraClient(
        config=cfg,
        connection=Connection.from_config(cfg),
        transport=httpx.MockTransport(_vra_handler),
    )
    monkeypatch.setattr(tasks, "_make_client", lambda: client)


def test_inspect_task_returns_records(mock_vra) -> None:
    out = tasks.inspect_software_component_properties()

    assert out["meta"]["count"] == 1
    assert out["meta"]["components"] == 1
    record = out["records"][0]
    assert record["component_name"] == "Java"
    assert record["property_name"] == "java_home"
    assert record["value"] == "/opt/jdk"
    assert record["overrideable"] is True
    assert record["required"] is True


def test_wait_task_uses_configured_interval(mock_vra, monkeypatch) -> None:
    sleeps: List[float] = []
    monkeypatch.setattr(request_waiter.time, "sleep", sleeps.append)

    out = tasks.wait_for_requests([77])

    assert out["results"] == [{"request_number": 77, "completion_status": "SUCCESSFUL"}]
    assert out["meta"]["poll_interval_seconds"] == 5
    assert sleeps == []


def test_tasks_without_connection_raise(monkeypatch) -> None:
    monkeypatch.delenv("VRA_SERVER_URL", raising=False)
    monkeypatch.delenv("VRA_ACCESS_TOKEN", raising=False)

    with pytest.raises(NotConnectedError):
        tasks.inspect_software_component_properties()
    with pytest.raises(NotConnectedError):
        tasks.wait_for_requests([1])


def test_connection_info_hides_token(monkeypatch) -> None:
    monkeypatch.setenv("VRA_SERVER_URL", "https://vra.example.com/")
    monkeypatch.setenv("VRA_ACCESS_TOKEN", "super-secret")

    info = tasks.get_connection_info()

    assert info["host"] == "vra.example.com"
    assert info["connected"] is True
    assert info["token_configured"] is True
    assert "super-secret" not in repr(info)


@pytest.mark.asyncio
async def test_register_tools_exposes_all_tools(mock_vra) -> None:
    server = DummyServer()
    tasks.register_tools(server)

    assert set(server.tools) == {
        "vra_inspect_software_component_properties",
        "vra_wait_for_requests",
        "vra_get_connection_info",
    }
    out = await server.tools["vra_inspect_software_component_properties"](property_filter="java", exact_match=False)
    assert out["meta"]["count"] == 1


def test_register_tools_rejects_non_server() -> None:
    with pytest.raises(ValueError):
        tasks.register_tools(object())


class _SlowRequestClient:
    """Fake client whose request stays in flight for one poll."""

    def __init__(self) -> None:
        self.config = VraConfig(server_url="https://vra", access_token="t")
        self.connection = Connection("https://vra", "t")
        self._states = ["IN_PROGRESS", "SUCCESSFUL"]
        self.fetches: List[int] = []

    def require_connection(self) -> Connection:
        return self.connection

    def get_request_status(self, request_number: int) -> RequestStatus:
        self.fetches.append(request_number)
        state = self._states.pop(0) if len(self._states) > 1 else self._states[0]
        return RequestStatus(request_number=request_number, state=state)


@pytest.mark.asyncio
async def test_wait_tool_keeps_event_loop_responsive(monkeypatch) -> None:
    """Polling sleeps run in a worker thread, not on the server's loop."""

    client = _SlowRequestClient()
    monkeypatch.setattr(tasks, "_make_client", lambda: client)

    server = FastMCP("vra-helpers-test")
    tasks.register_tools(server)

    ticks = 0

    async def ticker() -> None:
        nonlocal ticks
        while True:
            ticks += 1
            await asyncio.sleep(0.05)

    ticker_task = asyncio.create_task(ticker())
    try:
        await server.call_tool(
            "vra_wait_for_requests",
            {"request_numbers": [88], "poll_interval_seconds": 1, "max_polls": 2},
        )
    finally:
        ticker_task.cancel()

    assert client.fetches == [88, 88]
    # One real one-second sleep; a blocked loop would tick only once.
    assert ticks >= 5
