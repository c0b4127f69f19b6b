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
"""LRU ledger — recency order of logical keys."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable, Iterator


class LruLedger:
    """Ordered set of logical keys, least recently used first.

    Backed by an ``OrderedDict`` so touch, discard and truncation from the
    head are O(1) per key while iteration keeps insertion order.
    """

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._order: OrderedDict[str, None] = OrderedDict.fromkeys(keys)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, key: object) -> bool:
        return key in self._order

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def touch(self, key: str) -> None:
        """Move *key* to the most-recently-used end, adding it if new."""
        self._order[key] = None
        self._order.move_to_end(key)

    def discard(self, key: str) -> bool:
        """Remove *key*. Returns False when it was not present."""
        if key in self._order:
            del self._order[key]
            return True
        return False

    def evict(self, max_entries: int | None) -> list[str]:
        """Truncate the oldest keys beyond *max_entries* and return them.

        ``None`` or ``0`` means unbounded and never evicts.
        """
        if not max_entries:
            return []
        victims: list[str] = []
        for _ in range(max(0, len(self._order) - max_entries)):
            key, _ = self._order.popitem(last=False)
            victims.append(key)
        return victims

    def clear(self) -> None:
        self._order.clear()

    def to_list(self) -> list[str]:
        return list(self._order)
