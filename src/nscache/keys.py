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
"""Composite key scheme: ``<namespace>:<key>``."""

from __future__ import annotations

from collections.abc import Iterable

from nscache.exceptions import InvalidKeyException, InvalidNamespaceException

SEPARATOR = ":"
LEDGER_KEY = "_lru"


class CompositeKeyScheme:
    """Builds, parses and filters backend keys for one namespace.

    The separator is reserved in both namespaces and logical keys, so a
    composite key always splits into exactly two parts. Backend listings are
    filtered on ``namespace + ":"`` which keeps namespace ``a`` out of
    namespace ``ab``.
    """

    def __init__(self, namespace: str) -> None:
        if not isinstance(namespace, str) or not namespace:
            raise InvalidNamespaceException("Namespace must be a non-empty string", {"namespace": namespace})
        if SEPARATOR in namespace:
            raise InvalidNamespaceException(
                f"Namespace must not contain '{SEPARATOR}'", {"namespace": namespace}
            )
        self.namespace = namespace
        self.prefix = namespace + SEPARATOR

    @property
    def ledger_key(self) -> str:
        return self.prefix + LEDGER_KEY

    def compose(self, key: str) -> str:
        return self.prefix + key

    def parse(self, composite_key: str) -> str | None:
        """Return the logical key, or None if *composite_key* is not ours."""
        parts = composite_key.split(SEPARATOR)
        if len(parts) != 2 or parts[0] != self.namespace:
            return None
        return parts[1]

    def owns(self, composite_key: str) -> bool:
        return composite_key.startswith(self.prefix)

    def filter(self, composite_keys: Iterable[str]) -> list[str]:
        """Keep only the keys under this namespace, ledger included."""
        return [key for key in composite_keys if self.owns(key)]

    def validate(self, key: str) -> str:
        """Reject keys that cannot round-trip through :meth:`parse`."""
        if not isinstance(key, str) or not key:
            raise InvalidKeyException("Cache key must be a non-empty string", {"key": key})
        if SEPARATOR in key:
            raise InvalidKeyException(f"Cache key must not contain '{SEPARATOR}'", {"key": key})
        if key == LEDGER_KEY:
            raise InvalidKeyException(f"Cache key '{LEDGER_KEY}' is reserved", {"key": key})
        return key
