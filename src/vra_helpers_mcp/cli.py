# vRA Automation Helpers MCP Server
# File: cli.py
# Version: v2

"""Command line access to the vRA helpers.

Connection details come from VRA_SERVER_URL and VRA_ACCESS_TOKEN.
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from enum import Enum
from typing import Annotated, Iterator, List, Optional

import typer

from . import __version__
from .exceptions import VraError
from .models import PropertyRecord
from .tools import tasks
from .tools.properties import inspect_properties
from .tools.request_waiter import wait_for_completion

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="vra-helpers",
    context_settings={"max_content_width": 120, "help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
    help=__doc__,
)


class OutputFormat(str, Enum):
    csv = "csv"
    json = "json"


def _version_callback(value: bool):
    if not value:
        return
    typer.echo(
        f"vra-helpers v{__version__} \nPython {sys.version_info.major}."
        f"{sys.version_info.minor} ({sys.executable}) on {sys.platform}"
    )
    raise typer.Exit()


@app.callback()
def callback(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version information and exit"),
    ] = None,
    debug: bool = typer.Option(False, help="Turn on debug logging", envvar="DEBUG"),
):
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


def _read_request_numbers() -> Iterator[int]:
    """Yield request numbers piped on stdin, one per line."""
    for line in typer.get_text_stream("stdin"):
        line = line.strip()
        if not line:
            continue
        try:
            yield int(line)
        except ValueError:
            raise typer.BadParameter(f"'{line}' is not a request number") from None


def _write_records(records: Iterator[PropertyRecord], output_format: OutputFormat) -> int:
    count = 0
    writer = None
    for record in records:
        row = record.as_dict()
        if output_format == OutputFormat.json:
            typer.echo(json.dumps(row))
        else:
            if writer is None:
                writer = csv.DictWriter(sys.stdout, fieldnames=list(row.keys()))
                writer.writeheader()
            writer.writerow(row)
        count += 1
    return count


@app.command("properties")
def properties(
    property_filter: Annotated[
        Optional[str], typer.Argument(help="Property name (pattern) to look for; empty matches all")
    ] = None,
    exact: bool = typer.Option(False, "--exact", help="Match the property name exactly instead of as a pattern"),
    output_format: OutputFormat = typer.Option(OutputFormat.json, "--format", help="Output format"),
):
    """List software component properties."""
    client = tasks._make_client()
    try:
        records = inspect_properties(client, property_filter=property_filter or "", exact_match=exact)
        count = _write_records(records, output_format)
    except (VraError, ValueError) as exc:
        raise _fail(exc)
    logger.info("Listed %d properties", count)


@app.command("wait")
def wait(
    request_numbers: Annotated[
        Optional[List[int]], typer.Argument(help="Request numbers; read from stdin when omitted")
    ] = None,
    interval: Annotated[
        Optional[int], typer.Option("--interval", min=0, help="Seconds between status polls")
    ] = None,
    max_polls: Annotated[
        Optional[int], typer.Option("--max-polls", min=0, help="Give up after this many polls per request")
    ] = None,
):
    """Wait for catalog requests to finish and print their final state."""
    client = tasks._make_client()
    if interval is None:
        interval = client.config.poll_interval_seconds
    numbers = request_numbers if request_numbers else _read_request_numbers()

    try:
        for result in wait_for_completion(client, numbers, poll_interval_seconds=interval, max_polls=max_polls):
            typer.echo(json.dumps(result.as_dict()))
    except VraError as exc:
        raise _fail(exc)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
