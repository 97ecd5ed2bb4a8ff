"""Stdio server — the input pump and server assembly."""

from p4mcp.server.app import create_dispatcher, run_stdio
from p4mcp.server.pump import StdioServer

__all__ = ["StdioServer", "create_dispatcher", "run_stdio"]
