# vRA Automation Helpers MCP Server
# File: tools/request_waiter.py
# Version: v2

"""Block until catalog requests leave their in-flight states."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Iterator, Optional

from ..client import VraClient
from ..exceptions import PollLimitExceededError
from ..models import STATE_SUCCESSFUL, RequestResult

logger = logging.getLogger(__name__)


def wait_for_request(
    client: VraClient,
    request_number: int,
    poll_interval_seconds: int = 30,
    max_polls: Optional[int] = None,
) -> RequestResult:
    """Poll one request until it is no longer in flight.

    With ``max_polls`` unset the loop is unbounded; otherwise
    PollLimitExceededError is raised once that many re-fetches still
    report an in-flight state.
    """
    status = client.get_request_status(request_number)
    logger.debug("Request %s is %s", request_number, status.state)

    if status.state != STATE_SUCCESSFUL:
        polls = 0
        while status.in_flight:
            if max_polls is not None and polls >= max_polls:
                raise PollLimitExceededError(request_number, status.state, polls)
            time.sleep(poll_interval_seconds)
            polls += 1
            status = client.get_request_status(request_number)
            logger.debug(
                "Request %s is %s (poll %d)", request_number, status.state, polls
            )

    logger.info("Request %s finished with state %s", request_number, status.state)
    return RequestResult(request_number=status.request_number, completion_status=status.state)


def wait_for_completion(
    client: VraClient,
    request_numbers: Iterable[int],
    poll_interval_seconds: int = 30,
    max_polls: Optional[int] = None,
) -> Iterator[RequestResult]:
    """Yield a RequestResult per request number, strictly in input order.

    Each request is waited on to completion before the next one is
    looked up. ``request_numbers`` may be a lazily produced stream.
    """
    client.require_connection()
    if poll_interval_seconds < 0:
        raise ValueError("poll_interval_seconds must not be negative")
    if max_polls is not None and max_polls < 0:
        raise ValueError("max_polls must not be negative")
    return _iter_results(client, request_numbers, poll_interval_seconds, max_polls)


def _iter_results(
    client: VraClient,
    request_numbers: Iterable[int],
    poll_interval_seconds: int,
    max_polls: Optional[int],
) -> Iterator[RequestResult]:
    for request_number in request_numbers:
        yield wait_for_request(
            client,
            int(request_number),
            poll_interval_seconds=poll_interval_seconds,
            max_polls=max_polls,
        )
