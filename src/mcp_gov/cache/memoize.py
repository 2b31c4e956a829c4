from __future__ import annotations

import logging
import typing as t

from .lru_cache import LRUCache

T = t.TypeVar("T")

logger = logging.getLogger(__name__)


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace(":", "\\:").replace(",", "\\,")


def _render_part(part: t.Any) -> str:
    if part is None:
        return ""
    if isinstance(part, (list, tuple)):
        return ",".join(_render_part(p) for p in part)
    return _escape(str(part))


def make_key(namespace: str, *parts: t.Any) -> str:
    """Build a cache key such as ``"eurlex:ai act:10"``.

    Separators inside a parameter are backslash-escaped, so
    ``make_key("x", "a:b")`` and ``make_key("x", "a", "b")`` differ, as do
    ``make_key("x", ["a,b"])`` and ``make_key("x", ["a", "b"])``.

    Every parameter that changes the result must be passed, otherwise two
    different requests would share an entry.
    """
    return ":".join([namespace, *(_render_part(p) for p in parts)])


async def get_or_fetch(
    cache: LRUCache,
    key: str,
    fetch: t.Callable[[], t.Awaitable[T]],
) -> T:
    cached = cache.get(key)
    if cached is not None:
        logger.debug("cache hit key=%s", key)
        return cached

    logger.debug("cache miss key=%s", key)
    value = await fetch()
    # None cannot be told apart from a miss, so it is never stored
    if value is not None:
        cache.set(key, value)
    return value
