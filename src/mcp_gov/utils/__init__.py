"""Configuration and resilience helpers."""

from .config import CacheConfig, HttpConfig, ResilienceConfig, ServerConfig
from .resilience import CircuitBreaker, CircuitBreakerConfig, CircuitOpenError, CircuitState, with_retries

__all__ = [
    "CacheConfig",
    "HttpConfig",
    "ResilienceConfig",
    "ServerConfig",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitOpenError",
    "CircuitState",
    "with_retries",
]
