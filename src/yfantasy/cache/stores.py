"""Bounded key/value stores backing :class:`~yfantasy.cache.cache.WindowedCache`.

A store only needs ``get(key)`` and ``set(key, value)`` and must tolerate
concurrent use.  Two implementations are provided:

- :class:`MemoryStore` -- in-process LRU map bounded by the summed
  ``size()`` of its values.  Values are kept by reference.
- :class:`DiskStore` -- :mod:`diskcache` directory shared between
  processes, bounded by entry count and in bytes, with an optional
  expiry.  Values are pickled.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from pathlib import Path
from typing import Any, Optional, Protocol

import diskcache


class Sized(Protocol):
    """A value that reports how much of a store's capacity it uses."""

    def size(self) -> int: ...


class Store(Protocol):
    """Concurrent-safe bounded key/value store."""

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """Thread-safe least-recently-used store.

    The store holds values until their summed ``size()`` would exceed
    *capacity*; inserting beyond that evicts the least recently used
    entries first.  Values without a ``size()`` method count as 1.

    Args:
        capacity: Maximum total size of the stored values.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._size = 0
        self._entries: OrderedDict[str, tuple[Any, int]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: str) -> Optional[Any]:
        """Return the value for *key* and mark it recently used, or ``None``."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            self._entries.move_to_end(key)
            return entry[0]

    def set(self, key: str, value: Any) -> None:
        """Insert or replace *key*, evicting least recently used entries when full."""
        size = _size_of(value)
        with self._lock:
            previous = self._entries.pop(key, None)
            if previous is not None:
                self._size -= previous[1]
            self._entries[key] = (value, size)
            self._size += size
            while self._size > self._capacity and len(self._entries) > 1:
                _, (_, evicted_size) = self._entries.popitem(last=False)
                self._size -= evicted_size

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()
            self._size = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class DiskStore:
    """Store backed by a :class:`diskcache.Cache` directory.

    Suitable for sharing cached content between processes.  Like
    :class:`MemoryStore` it is bounded by entry count: once *capacity*
    entries are held, each insert evicts the oldest ones (every
    :class:`~yfantasy.cache.cache.CacheValue` has size 1, so a count and a
    summed size agree).  diskcache additionally enforces *size_limit* in
    bytes with least-recently-used eviction.

    Args:
        directory: Cache directory; created if missing.
        capacity: Maximum number of entries, or ``None`` for no count bound.
        size_limit: Maximum size of the cache in bytes.
        expire: Seconds after which entries are discarded, or ``None``.
    """

    def __init__(
        self,
        directory: str | Path,
        capacity: Optional[int] = None,
        size_limit: int = 256 * 1024 * 1024,
        expire: Optional[float] = None,
    ) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._directory = Path(directory)
        self._capacity = capacity
        self._expire = expire
        self._cache = diskcache.Cache(
            str(self._directory),
            size_limit=size_limit,
            eviction_policy="least-recently-used",
        )

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    def get(self, key: str) -> Optional[Any]:
        return self._cache.get(key)

    def set(self, key: str, value: Any) -> None:
        """Insert or replace *key*, evicting the oldest entries beyond *capacity*."""
        with self._cache.transact():
            self._cache.set(key, value, expire=self._expire)
            if self._capacity is None:
                return
            while len(self._cache) > self._capacity:
                try:
                    oldest, _ = self._cache.peekitem(last=False)
                except KeyError:
                    break
                self._cache.delete(oldest)

    def clear(self) -> int:
        """Remove all entries and return how many were removed."""
        return self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return entry count, on-disk volume, and location of the cache."""
        return {
            "entries": len(self._cache),
            "volume_bytes": self._cache.volume(),
            "directory": str(self._directory),
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache`."""
        self._cache.close()

    def __len__(self) -> int:
        return len(self._cache)


def _size_of(value: Any) -> int:
    size = getattr(value, "size", None)
    if callable(size):
        return int(size())
    return 1
