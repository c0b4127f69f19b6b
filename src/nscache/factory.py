# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Build a NamespacedCache from configuration."""

from __future__ import annotations

import importlib.util

import structlog

from nscache.adapters.memory import InMemoryBackend
from nscache.config import Config
from nscache.engine import NamespacedCache
from nscache.ports.outbound import StorageBackend
from nscache.properties import CacheProperties
from nscache.types import CachePolicy

logger = structlog.get_logger("nscache.factory")


def _is_available(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except ModuleNotFoundError:
        return False


def detect_provider(properties: CacheProperties) -> str:
    """Pick the backend provider for ``provider: auto``.

    Redis is chosen only when ``redis.asyncio`` is importable and a Redis
    URL is configured; everything else gets the in-memory backend.
    """
    if properties.redis.get("url") and _is_available("redis.asyncio"):
        return "redis"
    return "memory"


def create_backend(properties: CacheProperties) -> StorageBackend:
    provider = properties.provider if properties.provider != "auto" else detect_provider(properties)

    if provider == "redis":
        import redis.asyncio as aioredis

        from nscache.adapters.redis import RedisBackend

        url = str(properties.redis.get("url", "redis://localhost:6379/0"))
        logger.info("backend_configured", provider="redis")
        return RedisBackend(aioredis.from_url(url))

    if provider != "memory":
        raise ValueError(f"Unknown cache provider '{provider}' (expected auto, memory or redis)")

    logger.info("backend_configured", provider="memory")
    return InMemoryBackend()


def create_cache(config: Config | None = None, backend: StorageBackend | None = None) -> NamespacedCache:
    """Create an uninitialized cache from ``nscache.cache.*`` settings.

    An explicit *backend* wins over the configured provider.
    """
    properties = (config if config is not None else Config.defaults()).bind(CacheProperties)
    return NamespacedCache(
        namespace=properties.namespace,
        backend=backend if backend is not None else create_backend(properties),
        policy=CachePolicy(max_entries=properties.max_entries),
    )
