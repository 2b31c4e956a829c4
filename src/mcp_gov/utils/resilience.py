from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class CircuitBreakerConfig:
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0


class CircuitState:
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(RuntimeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"circuit_open: {name}")
        self.name = name


class CircuitBreaker:
    """Stops calling an upstream source after repeated failures.

    One breaker is kept per source so a dead feed does not slow down the
    others.
    """

    def __init__(self, name: str = "default", config: Optional[CircuitBreakerConfig] = None) -> None:
        self.name = name
        self._config = config or CircuitBreakerConfig()
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at = 0.0

    @property
    def state(self) -> str:
        return self._state

    def _can_attempt(self) -> bool:
        if self._state == CircuitState.OPEN:
            if (time.monotonic() - self._opened_at) >= self._config.reset_timeout_seconds:
                self._state = CircuitState.HALF_OPEN
                return True
            return False
        return True

    def _on_success(self) -> None:
        self._state = CircuitState.CLOSED
        self._failures = 0

    def _on_failure(self) -> None:
        self._failures += 1
        if self._state == CircuitState.HALF_OPEN or self._failures >= self._config.failure_threshold:
            if self._state != CircuitState.OPEN:
                logger.warning("circuit %s opened after %d failures", self.name, self._failures)
            self._state = CircuitState.OPEN
            self._opened_at = time.monotonic()

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        if not self._can_attempt():
            raise CircuitOpenError(self.name)
        try:
            result = await fn()
        except Exception:
            self._on_failure()
            raise
        else:
            self._on_success()
            return result


async def with_retries(
    coro_factory: Callable[[], Awaitable[T]],
    attempts: int = 3,
    backoff_ms: Optional[Iterable[int]] = None,
) -> T:
    if attempts < 1:
        raise ValueError(f"attempts must be >= 1, got {attempts}")
    backoff_seq: List[int] = list(backoff_ms or [100, 500, 2000])
    attempt = 0
    while True:
        try:
            return await coro_factory()
        except Exception as exc:  # noqa: BLE001 - broad for retry wrapper
            attempt += 1
            if attempt >= attempts:
                raise
            delay_ms = backoff_seq[min(attempt - 1, len(backoff_seq) - 1)]
            logger.debug("attempt %d failed (%s), retrying in %dms", attempt, exc, delay_ms)
            await asyncio.sleep(delay_ms / 1000.0)
