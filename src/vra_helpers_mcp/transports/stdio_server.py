# vRA Automation Helpers MCP Server
# File: transports/stdio_server.py
# Version: v2

"""STDIO entrypoint for the vRA helpers MCP server.

This is the script behind the ``vra-helpers-mcp`` console command.

It creates a FastMCP server, registers the vRA tools and runs the
built-in stdio transport.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from ..tools import tasks


def main() -> None:
    """Synchronous entrypoint for console_scripts."""
    mcp = FastMCP("vra-helpers-mcp")

    tasks.register_tools(mcp)

    # Let FastMCP handle stdio + event loop setup.
    mcp.run()


if __name__ == "__main__":
    main()
