"""
Registry of memoized factories (config, provider clients) that must be resettable.

Tests reset them between runs so that a patched environment is picked up, and an
operator can reset them after rotating an API key without restarting the process.

Usage:
    @register_cache
    @lru_cache(maxsize=1)
    def get_provider_client():
        ...
"""

from typing import Any, Callable

_clearable_caches: list[Callable[..., Any]] = []


def register_cache(func: Callable[..., Any]) -> Callable[..., Any]:
    """Register a memoized factory. Apply on top of @lru_cache."""
    if not hasattr(func, "cache_clear"):
        raise TypeError(f"{func.__name__} must be decorated with @lru_cache first")
    if func not in _clearable_caches:
        _clearable_caches.append(func)
    return func


def clear_all_caches() -> int:
    """Drop every memoized value. Returns the number of factories reset."""
    for cached_func in _clearable_caches:
        cached_func.cache_clear()
    return len(_clearable_caches)


def get_cache_info() -> dict[str, Any]:
    """Hit/miss statistics per registered factory."""
    return {func.__name__: func.cache_info() for func in _clearable_caches}
