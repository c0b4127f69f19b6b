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
"""Exception hierarchy for nscache.

All library exceptions inherit from NsCacheException so callers can catch
one type for every cache-originated error. Backend I/O errors are never
wrapped: they reach the caller as whatever the backend raised.

Categories:
- BusinessException: caller mistakes (invalid keys, namespaces, policies)
- InfrastructureException: engine state problems (not initialized,
  inconsistent after a failed write, corrupt persisted data)
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class NsCacheException(Exception):
    """Base exception for all nscache errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CACHE_INVALID_KEY").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(NsCacheException):
    """Errors caused by how the cache is being used."""


class ValidationException(BusinessException):
    """Input validation failures."""


class InvalidKeyException(ValidationException):
    """A logical key is empty, contains the separator, or is reserved."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_INVALID_KEY", context=context)


class InvalidNamespaceException(ValidationException):
    """A namespace is empty or contains the separator."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_INVALID_NAMESPACE", context=context)


class InvalidPolicyException(ValidationException):
    """An eviction policy carries an unusable option."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_INVALID_POLICY", context=context)


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(NsCacheException):
    """Engine state and persistence problems."""


class CacheNotInitializedException(InfrastructureException):
    """An operation was called before ``initialize()`` completed."""

    def __init__(self, namespace: str) -> None:
        super().__init__(
            f"Cache '{namespace}' must be initialized before use",
            code="CACHE_NOT_INITIALIZED",
            context={"namespace": namespace},
        )


class CacheInconsistentException(InfrastructureException):
    """A previous backend failure left memory ahead of the backend.

    Call ``initialize()`` again to rebuild state from the backend.
    """

    def __init__(self, namespace: str) -> None:
        super().__init__(
            f"Cache '{namespace}' diverged from its backend and needs reinitialization",
            code="CACHE_NEEDS_REINITIALIZATION",
            context={"namespace": namespace},
        )


class CorruptEntryException(InfrastructureException):
    """A persisted ledger or entry could not be deserialized."""

    def __init__(self, composite_key: str, reason: str) -> None:
        super().__init__(
            f"Corrupt cache data under '{composite_key}': {reason}",
            code="CACHE_CORRUPT_ENTRY",
            context={"key": composite_key},
        )
