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
"""Tests for @cacheable, @cache_put and @cache_evict."""

from __future__ import annotations

import pytest

from nscache.decorators import cache_evict, cache_put, cacheable
from nscache.engine import NamespacedCache


@pytest.fixture
async def cache() -> NamespacedCache:
    c = NamespacedCache(namespace="users", max_entries=10)
    await c.initialize()
    return c


class TestCacheable:
    async def test_caches_result(self, cache):
        call_count = 0

        @cacheable(cache, key="user-{user_id}")
        async def get_user(user_id: str) -> dict:
            nonlocal call_count
            call_count += 1
            return {"id": user_id, "name": "Alice"}

        result1 = await get_user("123")
        result2 = await get_user("123")
        assert result1 == result2
        assert call_count == 1
        assert await cache.peek("user-123") == {"id": "123", "name": "Alice"}

    async def test_different_keys_not_shared(self, cache):
        call_count = 0

        @cacheable(cache, key="user-{user_id}")
        async def get_user(user_id: str) -> dict:
            nonlocal call_count
            call_count += 1
            return {"id": user_id}

        await get_user("1")
        await get_user(user_id="2")
        assert call_count == 2

    async def test_uses_default_arguments(self, cache):
        @cacheable(cache, key="page-{number}-{size}")
        async def load(number: int, size: int = 20) -> list[int]:
            return list(range(size))

        await load(1)
        assert "page-1-20" in cache

    async def test_none_result_is_a_miss(self, cache):
        call_count = 0

        @cacheable(cache, key="missing-{name}")
        async def lookup(name: str) -> None:
            nonlocal call_count
            call_count += 1
            return None

        await lookup("x")
        await lookup("x")
        assert call_count == 2


class TestCachePut:
    async def test_always_executes_and_refreshes(self, cache):
        version = 0

        @cache_put(cache, key="user-{user_id}")
        async def update_user(user_id: str) -> dict:
            nonlocal version
            version += 1
            return {"id": user_id, "version": version}

        await update_user("1")
        await update_user("1")
        assert version == 2
        assert await cache.get("user-1") == {"id": "1", "version": 2}


class TestCacheEvict:
    async def test_evicts_single_key(self, cache):
        await cache.set("user-1", {"id": "1"})
        await cache.set("user-2", {"id": "2"})

        @cache_evict(cache, key="user-{user_id}")
        async def delete_user(user_id: str) -> bool:
            return True

        assert await delete_user("1") is True
        assert await cache.get("user-1") is None
        assert await cache.get("user-2") == {"id": "2"}

    async def test_evicts_all_entries(self, cache):
        await cache.set("user-1", 1)
        await cache.set("user-2", 2)

        @cache_evict(cache, all_entries=True)
        async def reset() -> None:
            return None

        await reset()
        assert len(cache) == 0
        assert await cache.get_all() == {}
