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
"""Namespaced LRU cache over a flat asynchronous storage backend."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Mapping
from typing import Any

import structlog

from nscache.adapters.memory import InMemoryBackend
from nscache.exceptions import CacheInconsistentException, CacheNotInitializedException
from nscache.keys import LEDGER_KEY, CompositeKeyScheme
from nscache.ledger import LruLedger
from nscache.ports.outbound import StorageBackend
from nscache.types import CachePolicy, Entry, decode_ledger, decode_value, encode_ledger

logger = structlog.get_logger("nscache.engine")

_UNSET: Any = object()


class NamespacedCache:
    """Size-bounded, namespaced key-value cache with LRU eviction.

    Keeps an in-memory mirror of the namespace's entries plus a recency
    ledger, both persisted to *backend*. Every mutation updates memory
    before the first ``await``, then persists in a fixed order: ledger,
    full mirror batch write, evicted keys removal.

    A backend failure during a write leaves memory ahead of the backend.
    The original exception propagates and the instance is marked as
    needing reinitialization; until :meth:`initialize` runs again every
    operation raises :class:`CacheInconsistentException`.

    Usage:
        cache = NamespacedCache(namespace="users", policy=CachePolicy(max_entries=100))
        await cache.initialize()
        await cache.set("alice", {"id": 1})
        await cache.get("alice")
    """

    def __init__(
        self,
        namespace: str = "cache",
        backend: StorageBackend | None = None,
        policy: CachePolicy | Mapping[str, Any] | None = None,
        *,
        max_entries: int | None = _UNSET,
    ) -> None:
        self._keys = CompositeKeyScheme(namespace)
        self._backend: StorageBackend = backend if backend is not None else InMemoryBackend()
        if isinstance(policy, Mapping):
            policy = CachePolicy(**policy)
        if max_entries is not _UNSET:
            policy = CachePolicy(max_entries=max_entries)
        self._policy = policy if policy is not None else CachePolicy()
        self._ledger = LruLedger()
        self._storage: dict[str, str] = {}
        self._initialized = False
        self._needs_reinitialization = False

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def namespace(self) -> str:
        return self._keys.namespace

    @property
    def policy(self) -> CachePolicy:
        return self._policy

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def needs_reinitialization(self) -> bool:
        return self._needs_reinitialization

    def __len__(self) -> int:
        return len(self._ledger)

    def __contains__(self, key: object) -> bool:
        return key in self._ledger

    def keys(self) -> list[str]:
        """Logical keys from least to most recently used."""
        return self._ledger.to_list()

    def get_stats(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "size": len(self._ledger),
            "max_entries": self._policy.max_entries,
            "backend": type(self._backend).__name__,
            "initialized": self._initialized,
            "needs_reinitialization": self._needs_reinitialization,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load the ledger and rebuild the mirror from the backend.

        Ledger keys without a stored entry are dropped and stored entries
        missing from the ledger are treated as least recently used.
        """
        ledger_key = self._keys.ledger_key
        raw_ledger = await self._backend.get(ledger_key)
        ledger_keys = decode_ledger(ledger_key, raw_ledger) if raw_ledger is not None else []

        composite_keys = [key for key in self._keys.filter(await self._backend.list_keys()) if key != ledger_key]
        storage: dict[str, str] = {}
        present: dict[str, None] = {}
        for composite_key, raw in await self._backend.batch_get(composite_keys):
            key = self._keys.parse(composite_key)
            if raw is None or key is None:
                continue
            decode_value(composite_key, raw)
            storage[composite_key] = raw
            present[key] = None

        tracked = [key for key in ledger_keys if key in present]
        tracked_set = set(tracked)
        untracked = [key for key in present if key not in tracked_set]

        self._ledger = LruLedger([*untracked, *tracked])
        self._storage = storage
        self._initialized = True
        self._needs_reinitialization = False
        logger.info(
            "cache_initialized",
            namespace=self.namespace,
            entries=len(storage),
            dropped=len(ledger_keys) - len(tracked),
            untracked=len(untracked),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Return the value for *key* and mark it most recently used.

        Returns None when the key is not cached. Misses never touch the
        backend.
        """
        self._ensure_ready()
        self._keys.validate(key)
        if key not in self._ledger:
            logger.debug("cache_miss", namespace=self.namespace, key=key)
            return None

        self._ledger.touch(key)
        async with self._write_through("get"):
            await self._save_ledger()
        return self._read(key)

    async def peek(self, key: str) -> Any | None:
        """Return the value for *key* without refreshing its recency."""
        self._ensure_ready()
        self._keys.validate(key)
        return self._read(key)

    def _read(self, key: str) -> Any | None:
        composite_key = self._keys.compose(key)
        raw = self._storage.get(composite_key)
        if raw is None:
            return None
        return decode_value(composite_key, raw)

    async def get_all(self) -> dict[str, Entry]:
        """Read every entry of the namespace straight from the backend."""
        self._ensure_consistent()
        composite_keys = self._keys.filter(await self._backend.list_keys())
        entries: dict[str, Entry] = {}
        for composite_key, raw in await self._backend.batch_get(composite_keys):
            key = self._keys.parse(composite_key)
            if key is None or key == LEDGER_KEY or raw is None:
                continue
            entries[key] = Entry.from_json(key, composite_key, raw)
        return entries

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def set(self, key: str, value: Any) -> list[str]:
        """Store *value* under *key*, evicting least recently used entries.

        Returns the logical keys evicted to make room.
        """
        self._ensure_ready()
        self._keys.validate(key)
        composite_key = self._keys.compose(key)
        raw = Entry(key=key, composite_key=composite_key, value=value).to_json()

        self._ledger.touch(key)
        victims = self._ledger.evict(self._policy.max_entries) if self._policy.bounded else []
        victim_keys = [self._keys.compose(victim) for victim in victims]
        for victim_key in victim_keys:
            self._storage.pop(victim_key, None)
        self._storage[composite_key] = raw
        to_store = list(self._storage.items())

        if victims:
            logger.debug("cache_evicted", namespace=self.namespace, keys=victims)

        async with self._write_through("set"):
            await self._save_ledger()
            if to_store:
                await self._backend.batch_set(to_store)
            if victim_keys:
                await self._backend.batch_remove(victim_keys)
        return victims

    async def remove(self, key: str) -> None:
        """Drop *key* from the cache. Absent keys are a no-op."""
        self._ensure_ready()
        self._keys.validate(key)
        composite_key = self._keys.compose(key)
        self._ledger.discard(key)
        self._storage.pop(composite_key, None)

        async with self._write_through("remove"):
            await self._save_ledger()
            await self._backend.remove(composite_key)

    async def clear(self, *, reset_memory: bool = True) -> None:
        """Remove every backend key of the namespace.

        With ``reset_memory`` (the default) the ledger and mirror are emptied
        first and the empty ledger is persisted alongside the purge, which
        also recovers an instance marked as needing reinitialization.
        Without it only the backend is purged; a non-empty mirror is then
        ahead of the backend and the instance is marked accordingly.
        """
        if not reset_memory:
            self._ensure_consistent()
            async with self._write_through("clear_namespace"):
                await self._purge_backend()
            if self._storage or len(self._ledger):
                self._mark_inconsistent("clear_namespace")
            logger.info("cache_namespace_cleared", namespace=self.namespace)
            return

        self._ledger.clear()
        self._storage = {}
        async with self._write_through("clear_all"):
            await asyncio.gather(self._purge_backend(), self._save_ledger())
        self._initialized = True
        self._needs_reinitialization = False
        logger.info("cache_cleared", namespace=self.namespace)

    async def clear_namespace(self) -> None:
        """Purge the namespace from the backend, leaving memory untouched."""
        await self.clear(reset_memory=False)

    async def clear_all(self) -> None:
        """Empty memory and the backend namespace together."""
        await self.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_ready(self) -> None:
        if not self._initialized:
            raise CacheNotInitializedException(self.namespace)
        self._ensure_consistent()

    def _ensure_consistent(self) -> None:
        if self._needs_reinitialization:
            raise CacheInconsistentException(self.namespace)

    async def _save_ledger(self) -> None:
        raw = encode_ledger(self._ledger.to_list())
        await self._backend.set(self._keys.ledger_key, raw)

    async def _purge_backend(self) -> None:
        keys = self._keys.filter(await self._backend.list_keys())
        if keys:
            await self._backend.batch_remove(keys)

    def _mark_inconsistent(self, operation: str) -> None:
        self._needs_reinitialization = True
        logger.warning("cache_needs_reinitialization", namespace=self.namespace, operation=operation)

    @contextlib.asynccontextmanager
    async def _write_through(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except Exception:
            self._mark_inconsistent(operation)
            raise
