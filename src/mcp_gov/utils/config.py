from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..errors import ConfigurationError

ENV_PREFIX = "MCP_GOV_"


@dataclass
class CacheConfig:
    max_entries: int = 500
    ttl_seconds: Optional[float] = 30 * 60

    def __post_init__(self) -> None:
        if self.max_entries < 1:
            raise ConfigurationError(f"cache.max_entries must be >= 1, got {self.max_entries}")
        if self.ttl_seconds is not None and self.ttl_seconds <= 0:
            raise ConfigurationError(f"cache.ttl_seconds must be positive, got {self.ttl_seconds}")


@dataclass
class HttpConfig:
    timeout_seconds: float = 15.0
    rss_timeout_seconds: float = 10.0
    user_agent: str = "AI-Governance-MCP/1.0"
    govinfo_api_key: str = "DEMO_KEY"


@dataclass
class ResilienceConfig:
    circuit_breaker_enabled: bool = True
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0
    retry_max_attempts: int = 2
    retry_backoff_ms: List[int] = dataclasses.field(default_factory=lambda: [200, 1000])

    def __post_init__(self) -> None:
        if self.retry_max_attempts < 1:
            raise ConfigurationError(f"resilience.retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.failure_threshold < 1:
            raise ConfigurationError(f"resilience.failure_threshold must be >= 1, got {self.failure_threshold}")
        if self.reset_timeout_seconds <= 0:
            raise ConfigurationError(
                f"resilience.reset_timeout_seconds must be positive, got {self.reset_timeout_seconds}"
            )
        if not self.retry_backoff_ms or any(ms < 0 for ms in self.retry_backoff_ms):
            raise ConfigurationError(f"resilience.retry_backoff_ms must be non-negative, got {self.retry_backoff_ms}")


@dataclass
class ServerConfig:
    name: str = "ai-governance-mcp"
    feedback_dir: str = "logs"
    cache: CacheConfig = dataclasses.field(default_factory=CacheConfig)
    http: HttpConfig = dataclasses.field(default_factory=HttpConfig)
    resilience: ResilienceConfig = dataclasses.field(default_factory=ResilienceConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServerConfig":
        def build(dc_cls, key):
            values = data.get(key, {})
            return dc_cls(**values)

        return cls(
            name=data.get("name", cls.name),
            feedback_dir=data.get("feedback_dir", cls.feedback_dir),
            cache=build(CacheConfig, "cache"),
            http=build(HttpConfig, "http"),
            resilience=build(ResilienceConfig, "resilience"),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Read overrides from ``MCP_GOV_*`` variables.

        ``MCP_GOV_CACHE_TTL_SECONDS=0`` (or ``none``) disables expiry.
        """
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {"cache": {}, "http": {}, "resilience": {}}

        max_entries = env.get(ENV_PREFIX + "CACHE_MAX_ENTRIES")
        if max_entries is not None:
            data["cache"]["max_entries"] = _parse_int("CACHE_MAX_ENTRIES", max_entries)

        ttl = env.get(ENV_PREFIX + "CACHE_TTL_SECONDS")
        if ttl is not None:
            if ttl.strip().lower() in ("", "0", "none"):
                data["cache"]["ttl_seconds"] = None
            else:
                data["cache"]["ttl_seconds"] = _parse_float("CACHE_TTL_SECONDS", ttl)

        timeout = env.get(ENV_PREFIX + "HTTP_TIMEOUT_SECONDS")
        if timeout is not None:
            data["http"]["timeout_seconds"] = _parse_float("HTTP_TIMEOUT_SECONDS", timeout)

        user_agent = env.get(ENV_PREFIX + "USER_AGENT")
        if user_agent:
            data["http"]["user_agent"] = user_agent

        api_key = env.get(ENV_PREFIX + "GOVINFO_API_KEY")
        if api_key:
            data["http"]["govinfo_api_key"] = api_key

        attempts = env.get(ENV_PREFIX + "RETRY_MAX_ATTEMPTS")
        if attempts is not None:
            data["resilience"]["retry_max_attempts"] = _parse_int("RETRY_MAX_ATTEMPTS", attempts)

        feedback_dir = env.get(ENV_PREFIX + "FEEDBACK_DIR")
        if feedback_dir:
            data["feedback_dir"] = feedback_dir

        return cls.from_dict(data)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None
