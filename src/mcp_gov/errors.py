"""Error types raised by mcp_gov."""

from __future__ import annotations

import typing as t


class MCPGovError(Exception):
    """Base class for mcp_gov errors."""


class ConfigurationError(MCPGovError, ValueError):
    """Raised when a component is constructed with invalid settings."""


class SourceError(MCPGovError):
    """An upstream source answered with an unusable response."""

    def __init__(self, source: str, message: str, status_code: t.Optional[int] = None) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.status_code = status_code
