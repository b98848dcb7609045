# vRA Automation Helpers MCP Server
# File: connection.py
# Version: v1

"""The authenticated vRA session shared by both helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .config import VraConfig


@dataclass(frozen=True)
class Connection:
    """Server base URL plus bearer token of an established vRA session.

    Instances are read-only; login and logout happen elsewhere.
    """

    server_base_url: str
    auth_token: str

    @classmethod
    def from_config(cls, config: VraConfig) -> Optional["Connection"]:
        """Build a connection from configuration, or None if incomplete."""
        if not config.server_url or not config.access_token:
            return None
        return cls(
            server_base_url=config.server_url.rstrip("/"),
            auth_token=config.access_token,
        )

    def headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.auth_token}",
        }

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return f"Connection(server_base_url={self.server_base_url!r})"
