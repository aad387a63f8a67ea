"""Time-windowed caching of fantasy content.

This package provides :class:`WindowedCache`, which keys decoded documents
by client id, URL and epoch-aligned time window, the
:class:`CachedContentProvider` pipeline layer that consults it, and the
bounded stores it can sit on (:class:`MemoryStore`, :class:`DiskStore`).
"""

from yfantasy.cache.cache import (
    CachedContentProvider,
    CacheValue,
    ContentCache,
    WindowedCache,
)
from yfantasy.cache.stores import DiskStore, MemoryStore, Store

__all__ = [
    "CachedContentProvider",
    "CacheValue",
    "ContentCache",
    "DiskStore",
    "MemoryStore",
    "Store",
    "WindowedCache",
]
