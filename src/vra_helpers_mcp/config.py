# vRA Automation Helpers MCP Server
# File: config.py
# Version: v2

"""Configuration loading for the vRA Automation Helpers."""

from __future__ import annotations

from dataclasses import dataclass
import os


def _parse_bool_env(name: str, default: bool = False) -> bool:
    """Parse a boolean-like environment variable.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _parse_int_env(
    name: str,
    default: int,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Parse an int environment variable with clamping and safe fallback."""
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        value = int(default)
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            value = int(default)

    if min_value is not None and value < min_value:
        value = min_value
    if max_value is not None and value > max_value:
        value = max_value

    return value


@dataclass
class VraConfig:
    """Configuration values required to talk to vRealize Automation.

    The bearer token is produced by an external login step; this package
    never requests or refreshes it.
    """

    server_url: str | None
    access_token: str | None

    verify_tls: bool = True
    http_timeout_seconds: int = 30

    # Listing page size for the software component type catalog.
    page_limit: int = 100

    # Default wait between request status polls.
    poll_interval_seconds: int = 30

    @classmethod
    def from_env(cls) -> "VraConfig":
        """Create configuration from environment variables."""
        server_url = os.getenv("VRA_SERVER_URL")
        access_token = os.getenv("VRA_ACCESS_TOKEN")

        verify_tls = _parse_bool_env("VRA_VERIFY_TLS", default=True)

        http_timeout_seconds = _parse_int_env(
            "VRA_HTTP_TIMEOUT_SECONDS", default=30, min_value=1, max_value=600
        )
        page_limit = _parse_int_env(
            "VRA_PAGE_LIMIT", default=100, min_value=1, max_value=1000
        )
        poll_interval_seconds = _parse_int_env(
            "VRA_POLL_INTERVAL_SECONDS", default=30, min_value=0, max_value=3600
        )

        return cls(
            server_url=server_url,
            access_token=access_token,
            verify_tls=verify_tls,
            http_timeout_seconds=http_timeout_seconds,
            page_limit=page_limit,
            poll_interval_seconds=poll_interval_seconds,
        )
