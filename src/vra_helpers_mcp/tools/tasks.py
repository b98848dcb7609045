# vRA Automation Helpers MCP Server
# File: tools/tasks.py
# Version: v6
#
# NOTE: This module is the single place where we define "business logic"
# that is exposed as MCP tools.  The MCP transport simply calls
# `register_tools(server)` to wire these up.  The tasks block (HTTP calls,
# poll sleeps), so the MCP tools run them in a worker thread.

from __future__ import annotations

from functools import partial
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import anyio.to_thread

from ..client import VraClient
from ..config import VraConfig
from ..connection import Connection
from .properties import inspect_properties
from .request_waiter import wait_for_completion


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _make_client(cfg: Optional[VraConfig] = None) -> VraClient:
    """Create a VraClient from environment variables.

    The client carries no connection when VRA_SERVER_URL or
    VRA_ACCESS_TOKEN is missing; its operations then raise
    NotConnectedError.

    Note: Callers should prefer invoking this with *no arguments* to keep
    unit tests monkeypatch-friendly (tests often replace _make_client with
    a no-arg lambda).
    """
    cfg = cfg or VraConfig.from_env()
    return VraClient(config=cfg, connection=Connection.from_config(cfg))


# ---------------------------------------------------------------------------
# Core tasks (library-style)
# ---------------------------------------------------------------------------


def inspect_software_component_properties(
    property_filter: str = "",
    exact_match: bool = False,
) -> Dict[str, Any]:
    client = _make_client()
    records = [
        r.as_dict()
        for r in inspect_properties(
            client, property_filter=property_filter, exact_match=exact_match
        )
    ]

    return {
        "records": records,
        "meta": {
            "property_filter": property_filter,
            "exact_match": bool(exact_match),
            "count": len(records),
            "components": len({r["component_id"] for r in records}),
        },
    }


def wait_for_requests(
    request_numbers: List[int],
    poll_interval_seconds: Optional[int] = None,
    max_polls: Optional[int] = None,
) -> Dict[str, Any]:
    client = _make_client()
    if poll_interval_seconds is None:
        poll_interval_seconds = client.config.poll_interval_seconds

    results = [
        r.as_dict()
        for r in wait_for_completion(
            client,
            request_numbers,
            poll_interval_seconds=poll_interval_seconds,
            max_polls=max_polls,
        )
    ]

    return {
        "results": results,
        "meta": {
            "count": len(results),
            "poll_interval_seconds": poll_interval_seconds,
            "max_polls": max_polls,
        },
    }


def get_connection_info() -> Dict[str, Any]:
    """Redacted snapshot of the vRA connection configuration."""
    cfg = VraConfig.from_env()

    host = None
    if cfg.server_url:
        host = urlparse(cfg.server_url).hostname or cfg.server_url

    return {
        "server_url": cfg.server_url,
        "host": host,
        "connected": Connection.from_config(cfg) is not None,
        "token_configured": bool(cfg.access_token),
        "verify_tls": bool(cfg.verify_tls),
        "http_timeout_seconds": cfg.http_timeout_seconds,
        "page_limit": cfg.page_limit,
        "poll_interval_seconds": cfg.poll_interval_seconds,
    }


# ---------------------------------------------------------------------------
# MCP tool registration
# ---------------------------------------------------------------------------


def register_tools(server: Any) -> None:
    """Register MCP tools on an MCP Server-like instance."""
    if server is None or not hasattr(server, "tool"):
        raise ValueError(
            "register_tools(server) expects an MCP Server-like object that exposes a .tool() decorator."
        )

    @server.tool(
        name="vra_inspect_software_component_properties",
        description=(
            "List software component properties (value, encrypted, overrideable, "
            "required, computed), optionally filtered by property name."
        ),
    )
    async def mcp_inspect_software_component_properties(
        property_filter: str = "",
        exact_match: bool = False,
    ) -> Dict[str, Any]:
        return await anyio.to_thread.run_sync(
            partial(
                inspect_software_component_properties,
                property_filter=property_filter,
                exact_match=exact_match,
            )
        )

    @server.tool(
        name="vra_wait_for_requests",
        description="Wait until the given vRA catalog requests reach a final state and report it.",
    )
    async def mcp_wait_for_requests(
        request_numbers: List[int],
        poll_interval_seconds: Optional[int] = None,
        max_polls: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await anyio.to_thread.run_sync(
            partial(
                wait_for_requests,
                request_numbers=request_numbers,
                poll_interval_seconds=poll_interval_seconds,
                max_polls=max_polls,
            )
        )

    @server.tool(
        name="vra_get_connection_info",
        description="Return the configured vRA server and connection state (no secrets).",
    )
    async def mcp_get_connection_info() -> Dict[str, Any]:
        return get_connection_info()
