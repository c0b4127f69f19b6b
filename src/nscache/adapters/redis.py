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
"""Redis-backed storage backend."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

_logger = structlog.get_logger("nscache.adapters.redis")


def _decode(raw: Any) -> str | None:
    if raw is None:
        return None
    return raw.decode() if isinstance(raw, bytes) else str(raw)


class RedisBackend:
    """Storage backend that delegates to a ``redis.asyncio.Redis``-like client.

    Values are already serialized text by the time they reach the backend,
    so they are stored as UTF-8 bytes without further encoding. Empty
    batches never hit the server.
    """

    def __init__(self, client: Any, scan_count: int = 500) -> None:
        self._client = client
        self._scan_count = scan_count

    async def get(self, key: str) -> str | None:
        return _decode(await self._client.get(key))

    async def set(self, key: str, value: str) -> None:
        await self._client.set(key, value.encode())

    async def remove(self, key: str) -> None:
        await self._client.delete(key)

    async def list_keys(self) -> list[str]:
        """Return every key in the database via SCAN."""
        keys: list[str] = []
        async for key in self._client.scan_iter(count=self._scan_count):
            keys.append(key.decode() if isinstance(key, bytes) else key)
        return keys

    async def batch_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        if not keys:
            return []
        values = await self._client.mget(list(keys))
        return [(key, _decode(raw)) for key, raw in zip(keys, values)]

    async def batch_set(self, items: Sequence[tuple[str, str]]) -> None:
        if not items:
            return
        await self._client.mset({key: value.encode() for key, value in items})

    async def batch_remove(self, keys: Sequence[str]) -> None:
        if not keys:
            return
        await self._client.delete(*keys)

    async def get_stats(self) -> dict[str, Any]:
        """Return database statistics from Redis."""
        dbsize = await self._client.dbsize()
        return {"size": dbsize, "type": "redis"}

    async def start(self) -> None:
        """Validate connectivity by pinging Redis."""
        await self._client.ping()
        _logger.debug("redis_backend_started")

    async def stop(self) -> None:
        """Close the underlying Redis connection."""
        await self._client.aclose()
