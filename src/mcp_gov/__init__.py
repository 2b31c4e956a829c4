"""mcp_gov

An MCP server aggregating AI governance and regulatory sources (EUR-Lex, the
US Federal Register, GovInfo, RSS feeds). Every upstream lookup is memoized in
a bounded LRU cache with optional TTL expiry and hit/miss accounting.
"""

from .cache import CacheStats, LRUCache, get_or_fetch, make_key
from .errors import ConfigurationError, MCPGovError, SourceError
from .sources import GovernanceFetcher
from .utils.config import ServerConfig

__all__ = [
    "LRUCache",
    "CacheStats",
    "make_key",
    "get_or_fetch",
    "GovernanceFetcher",
    "ServerConfig",
    "MCPGovError",
    "ConfigurationError",
    "SourceError",
]

__version__ = "0.1.0"
