"""Time-windowed caching of fantasy content.

:class:`WindowedCache` keys documents by client id, request URL, and the
epoch-aligned time window the request falls in::

    <client-id>:<url>:<floor(unix_time / window_seconds)>

With client id ``client-id-01``, URL ``key-01``, a one hour window and a
request at 2014-08-17 13:21:17 UTC (``1408281677``) the key is::

    client-id-01:key-01:391189

Windows start on multiples of ``window_seconds`` since the epoch, not at
the first request, so a document is reused for at most one window.

:class:`CachedContentProvider` puts a :class:`ContentCache` in front of
another :class:`~yfantasy.provider.ContentProvider`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from yfantasy.cache.stores import Store
from yfantasy.exceptions import ConfigError
from yfantasy.models import FantasyContent
from yfantasy.output import get_output
from yfantasy.provider import ContentProvider


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentCache(ABC):
    """Stores and retrieves fantasy content by URL and the time it was valid."""

    @abstractmethod
    def set(self, url: str, when: datetime, content: FantasyContent) -> None:
        """Record *content* as retrieved for *url* at *when*."""

    @abstractmethod
    def get(self, url: str, when: datetime) -> Optional[FantasyContent]:
        """Return the content for *url* valid at *when*, or ``None``."""


class CacheValue:
    """Wrapper stored in the backing store.

    Every value has size 1 so a size-bounded store evicts strictly by
    number of entries.
    """

    def __init__(self, content: FantasyContent) -> None:
        self.content = content

    def size(self) -> int:
        return 1


class WindowedCache(ContentCache):
    """Caches content for one client in epoch-aligned time windows.

    Args:
        client_id: Namespaces keys when several clients share *store*.
        window: Window length as a :class:`~datetime.timedelta` or whole
            seconds.
        store: Backing store, e.g. :class:`~yfantasy.cache.stores.MemoryStore`.

    Raises:
        ConfigError: If the window is shorter than one second.
    """

    def __init__(self, client_id: str, window: timedelta | int, store: Store) -> None:
        seconds = int(window.total_seconds()) if isinstance(window, timedelta) else int(window)
        if seconds < 1:
            raise ConfigError(f"Cache window must be at least one second, got {window!r}")
        self.client_id = client_id
        self.window_seconds = seconds
        self.store = store

    def set(self, url: str, when: datetime, content: FantasyContent) -> None:
        self.store.set(self.key(url, when), CacheValue(content))

    def get(self, url: str, when: datetime) -> Optional[FantasyContent]:
        value = self.store.get(self.key(url, when))
        if not isinstance(value, CacheValue):
            return None
        return value.content

    def key(self, url: str, when: datetime) -> str:
        """Return the store key for *url* in the window containing *when*."""
        period = int(when.timestamp()) // self.window_seconds
        return f"{self.client_id}:{url}:{period}"


class CachedContentProvider(ContentProvider):
    """Serves content from a :class:`ContentCache`, falling back to *delegate*.

    The cache key is fixed by the time at the start of :meth:`get`.  Only
    successful results are stored; errors from *delegate* propagate and
    leave the cache untouched.  Concurrent misses for the same key may
    each reach *delegate*.

    Args:
        delegate: Provider used on a cache miss.
        cache: Where documents are kept between requests.
        clock: Returns the current time; defaults to UTC now.
    """

    def __init__(
        self,
        delegate: ContentProvider,
        cache: ContentCache,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._delegate = delegate
        self._cache = cache
        self._clock = clock

    @property
    def request_count(self) -> int:
        return self._delegate.request_count

    def get(self, url: str) -> FantasyContent:
        now = self._clock()
        content = self._cache.get(url, now)
        if content is not None:
            get_output().debug(f"Cache hit: {url}")
            return content

        get_output().debug(f"Cache miss: {url}")
        content = self._delegate.get(url)
        self._cache.set(url, now, content)
        return content
