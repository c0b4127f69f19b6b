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
"""Built-in in-memory storage backend."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class InMemoryBackend:
    """Dict-backed storage backend.

    Each instance owns its own mapping, so tests and independent runs never
    share state. Several caches may share one instance to exercise
    namespace isolation.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._store: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        """Get a raw value by key. Returns None if missing."""
        return self._store.get(key)

    async def set(self, key: str, value: str) -> None:
        self._store[key] = value

    async def remove(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        self._store.pop(key, None)

    async def list_keys(self) -> list[str]:
        return list(self._store)

    async def batch_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        """Fetch several keys, preserving order. Missing keys pair with None."""
        return [(key, self._store.get(key)) for key in keys]

    async def batch_set(self, items: Sequence[tuple[str, str]]) -> None:
        for key, value in items:
            self._store[key] = value

    async def batch_remove(self, keys: Sequence[str]) -> None:
        for key in keys:
            self._store.pop(key, None)

    async def get_stats(self) -> dict[str, Any]:
        """Return backend statistics."""
        return {"size": len(self._store), "type": "memory"}

    def get_keys(self, prefix: str = "") -> list[str]:
        """Return stored keys starting with *prefix*."""
        return [key for key in self._store if key.startswith(prefix)]
