"""Ads Editor MCP Server.

A Model Context Protocol server that validates campaign data and exports
Google Ads Editor import files.
"""

__version__ = "1.0.0"

from ads_editor_mcp.server import create_mcp_server

__all__ = ["create_mcp_server"]
