"""MCP tool surface."""

from .app import TOOLS, create_server, dispatch, run_stdio

__all__ = ["TOOLS", "create_server", "dispatch", "run_stdio"]
