# vRA Automation Helpers MCP Server
# File: transports/__init__.py
# Version: v1

"""Transports for exposing the vRA helpers over MCP."""
