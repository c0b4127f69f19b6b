"""Declarative caching decorators backed by a NamespacedCache."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from nscache.engine import NamespacedCache

F = TypeVar("F", bound=Callable[..., Any])


def _resolve_key(func: Callable[..., Any], key: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    bound = inspect.signature(func).bind(*args, **kwargs)
    bound.apply_defaults()
    return key.format(**bound.arguments)


def cacheable(cache: NamespacedCache, key: str) -> Callable[[F], F]:
    """Cache the return value of an async function, skipping it on a hit.

    The `key` parameter supports format-string interpolation with function
    argument names. For example, `key="user-{user_id}"` expands `{user_id}`
    from the call's arguments. A cached ``None`` counts as a miss.

    Args:
        cache: Initialized cache to read from and write to.
        key: Key template with {param} placeholders.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            resolved_key = _resolve_key(func, key, args, kwargs)

            cached = await cache.get(resolved_key)
            if cached is not None:
                return cached

            result = await func(*args, **kwargs)
            await cache.set(resolved_key, result)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def cache_put(cache: NamespacedCache, key: str) -> Callable[[F], F]:
    """Always execute the function and cache the result.

    Useful for update operations that should refresh the cached value.

    Args:
        cache: Initialized cache to write to.
        key: Key template with {param} placeholders.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await func(*args, **kwargs)
            await cache.set(_resolve_key(func, key, args, kwargs), result)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def cache_evict(cache: NamespacedCache, key: str = "", all_entries: bool = False) -> Callable[[F], F]:
    """Remove a cache entry (or the whole namespace) after the function runs.

    Args:
        cache: Initialized cache to evict from.
        key: Key template with {param} placeholders. Ignored when *all_entries* is ``True``.
        all_entries: When ``True``, clear the whole namespace after execution.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await func(*args, **kwargs)
            if all_entries:
                await cache.clear_all()
            else:
                await cache.remove(_resolve_key(func, key, args, kwargs))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
