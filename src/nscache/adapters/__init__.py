"""Storage adapters — concrete backend implementations."""

from nscache.adapters.memory import InMemoryBackend
from nscache.adapters.redis import RedisBackend

__all__ = ["InMemoryBackend", "RedisBackend"]
