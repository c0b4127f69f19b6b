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
"""Cache entry and policy types, and their persisted JSON form."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from nscache.exceptions import CorruptEntryException, InvalidPolicyException

DEFAULT_MAX_ENTRIES = 50000


@dataclass(frozen=True)
class CachePolicy:
    """Eviction policy. ``max_entries`` of None or 0 disables eviction."""

    max_entries: int | None = DEFAULT_MAX_ENTRIES

    def __post_init__(self) -> None:
        if self.max_entries is None:
            return
        if isinstance(self.max_entries, bool) or not isinstance(self.max_entries, int):
            raise InvalidPolicyException(
                "max_entries must be an integer or None", {"max_entries": self.max_entries}
            )
        if self.max_entries < 0:
            raise InvalidPolicyException("max_entries must not be negative", {"max_entries": self.max_entries})

    @property
    def bounded(self) -> bool:
        return bool(self.max_entries)


@dataclass
class Entry:
    """One cached value.

    Only ``created`` and ``value`` are persisted; ``key`` and
    ``composite_key`` are recovered from the backend key on load.
    """

    key: str
    composite_key: str
    value: Any
    created: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_json(self) -> str:
        try:
            return json.dumps({"created": self.created.isoformat(), "value": self.value})
        except (TypeError, ValueError) as exc:
            raise TypeError(f"Value for cache key '{self.key}' is not JSON-serializable: {exc}") from exc

    @classmethod
    def from_json(cls, key: str, composite_key: str, raw: str) -> Entry:
        """Parse a persisted entry, failing fast on anything malformed."""
        try:
            payload = json.loads(raw)
            created = datetime.fromisoformat(payload["created"])
            value = payload["value"]
        except (json.JSONDecodeError, TypeError, KeyError, ValueError) as exc:
            raise CorruptEntryException(composite_key, str(exc)) from exc
        return cls(key=key, composite_key=composite_key, value=value, created=created)


def decode_value(composite_key: str, raw: str) -> Any:
    """Extract just the value from a persisted entry."""
    try:
        payload = json.loads(raw)
        return payload["value"]
    except (json.JSONDecodeError, TypeError, KeyError) as exc:
        raise CorruptEntryException(composite_key, str(exc)) from exc


def encode_ledger(keys: list[str]) -> str:
    return json.dumps(keys)


def decode_ledger(composite_key: str, raw: str) -> list[str]:
    try:
        keys = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorruptEntryException(composite_key, str(exc)) from exc
    if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
        raise CorruptEntryException(composite_key, "ledger must be a JSON array of strings")
    return keys
