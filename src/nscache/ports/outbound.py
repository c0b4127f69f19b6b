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
"""Storage backend protocol."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageBackend(Protocol):
    """Flat asynchronous key-value store.

    Backends know nothing about namespaces or eviction: keys and values are
    opaque strings. Any store (in-memory, Redis, browser storage, ...) that
    implements these seven operations can persist a NamespacedCache.
    """

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def list_keys(self) -> list[str]: ...

    async def batch_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]: ...

    async def batch_set(self, items: Sequence[tuple[str, str]]) -> None: ...

    async def batch_remove(self, keys: Sequence[str]) -> None: ...
