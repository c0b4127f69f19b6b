"""nscache — namespaced LRU cache over pluggable async key-value storage."""

from nscache.adapters.memory import InMemoryBackend
from nscache.adapters.redis import RedisBackend
from nscache.decorators import cache_evict, cache_put, cacheable
from nscache.engine import NamespacedCache
from nscache.factory import create_cache
from nscache.logging import configure_logging
from nscache.ports.outbound import StorageBackend
from nscache.types import CachePolicy, Entry

__all__ = [
    "CachePolicy",
    "Entry",
    "InMemoryBackend",
    "NamespacedCache",
    "RedisBackend",
    "StorageBackend",
    "cache_evict",
    "cache_put",
    "cacheable",
    "configure_logging",
    "create_cache",
]
