# vRA Automation Helpers MCP Server
# File: exceptions.py
# Version: v1

"""Error types raised by the vRA helpers."""

from __future__ import annotations

from typing import Optional


class VraError(RuntimeError):
    """Base class for all errors raised by this package."""


class NotConnectedError(VraError):
    """Raised when no vRA connection (server URL + token) is available."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message
            or (
                "No vRA connection is available. "
                "Set VRA_SERVER_URL and VRA_ACCESS_TOKEN after logging in."
            )
        )


class UpstreamRequestError(VraError):
    """A vRA REST call failed (transport error or non-2xx response).

    ``identifier`` names the item being processed when the call failed
    (a software component id or a request number).
    """

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        identifier: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.identifier = identifier


class PollLimitExceededError(VraError):
    """A request was still in flight after the allowed number of polls."""

    def __init__(self, request_number: int, state: str, polls: int) -> None:
        super().__init__(
            f"Request {request_number} still '{state}' after {polls} polls."
        )
        self.request_number = request_number
        self.state = state
        self.polls = polls
