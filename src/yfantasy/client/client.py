"""Client facade and the factories that assemble the request pipeline.

:func:`new_client` builds the uncached chain::

    Client -> XmlContentProvider -> CountingClient -> Transport

:func:`new_cached_client` puts a
:class:`~yfantasy.cache.cache.CachedContentProvider` in front of it, and
:func:`create_client` picks one of the two from
:class:`~yfantasy.models.Settings`.
"""

from __future__ import annotations

from typing import Optional

from yfantasy.cache.cache import CachedContentProvider, ContentCache, WindowedCache
from yfantasy.cache.stores import DiskStore, MemoryStore, Store
from yfantasy.client.counting import DEFAULT_MAX_ATTEMPTS, CountingClient
from yfantasy.client.transport import Transport
from yfantasy.content.provider import XmlContentProvider
from yfantasy.models import CacheBackend, CacheConfig, FantasyContent, Settings
from yfantasy.provider import ContentProvider

YAHOO_BASE_URL = "https://fantasysports.yahooapis.com/fantasy/v2"


class Client:
    """An application authorised to use the fantasy sports API.

    Delegates everything to its :class:`~yfantasy.provider.ContentProvider`.

    Example::

        with HttpxTransport(token) as transport:
            client = new_client(transport)
            content = client.get_fantasy_content(f"{YAHOO_BASE_URL}/league/223.l.431")
            print(content.league.name)
    """

    def __init__(self, provider: ContentProvider) -> None:
        self.provider = provider

    def get_fantasy_content(self, url: str) -> FantasyContent:
        """Return the decoded document for a fantasy sports API resource URL."""
        return self.provider.get(url)

    @property
    def request_count(self) -> int:
        """Number of requests made to the API on behalf of this client."""
        return self.provider.request_count


def new_client(transport: Transport, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Client:
    """Create a :class:`Client` that fetches every request from the API."""
    return Client(XmlContentProvider(CountingClient(transport, max_attempts=max_attempts)))


def new_cached_client(
    cache: ContentCache,
    transport: Transport,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Client:
    """Create a :class:`Client` that checks and updates *cache* around API requests."""
    delegate = new_client(transport, max_attempts=max_attempts).provider
    return Client(CachedContentProvider(delegate, cache))


def create_client(
    settings: Settings,
    transport: Transport,
    store: Optional[Store] = None,
) -> Client:
    """Assemble the client described by *settings*.

    Args:
        settings: Client id, retry and cache configuration.
        transport: Performs the HTTP requests.
        store: Backing store to use instead of the one *settings* describes,
            e.g. to share one store between several clients.
    """
    max_attempts = settings.request.max_attempts
    if not settings.cache.enabled:
        return new_client(transport, max_attempts=max_attempts)

    cache = WindowedCache(
        settings.client_id,
        settings.cache.window_seconds,
        store if store is not None else build_store(settings.cache),
    )
    return new_cached_client(cache, transport, max_attempts=max_attempts)


def build_store(config: CacheConfig) -> Store:
    """Create the backing store selected by *config*."""
    if config.backend == CacheBackend.DISK:
        from yfantasy.config import get_cache_dir

        directory = config.directory or str(get_cache_dir() / "content")
        return DiskStore(
            directory,
            capacity=config.capacity,
            size_limit=config.size_limit,
            expire=config.window_seconds,
        )
    return MemoryStore(config.capacity)
