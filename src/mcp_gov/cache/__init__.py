from .lru_cache import DEFAULT_MAX_ENTRIES, CacheStats, LRUCache
from .memoize import get_or_fetch, make_key

__all__ = ["LRUCache", "CacheStats", "DEFAULT_MAX_ENTRIES", "make_key", "get_or_fetch"]
