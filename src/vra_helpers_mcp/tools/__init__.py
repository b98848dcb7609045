# vRA Automation Helpers MCP Server
# File: tools/__init__.py
# Version: v2

"""The two vRA helpers and their MCP tool registration."""

from __future__ import annotations

from .properties import inspect_properties
from .request_waiter import wait_for_completion, wait_for_request

__all__ = ["inspect_properties", "wait_for_completion", "wait_for_request"]
