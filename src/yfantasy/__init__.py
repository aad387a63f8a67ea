"""yfantasy -- a client for the Yahoo fantasy sports XML API.

Requests go through a small pipeline of layers that share the
:class:`~yfantasy.provider.ContentProvider` interface:

1. :class:`~yfantasy.client.counting.CountingClient` sends the HTTP GET,
   counts requests and retries the API's transient
   ``consumer_key_unknown`` failure.
2. :class:`~yfantasy.content.provider.XmlContentProvider` decodes the XML
   into a :class:`~yfantasy.models.FantasyContent` and fills in numeric
   fields the API sent empty.
3. :class:`~yfantasy.cache.cache.CachedContentProvider` (optional) reuses
   documents fetched within the same time window.

Typical use::

    from yfantasy import HttpxTransport, new_client

    with HttpxTransport(token) as transport:
        client = new_client(transport)
        league = client.get_fantasy_content(url).league

Modules:
    app: Typer command line for fetching resources by URL.
    models: Pydantic document and configuration models.
    config: XDG-aware settings and credential resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"

from yfantasy.client import (  # noqa: E402
    YAHOO_BASE_URL,
    Client,
    CountingClient,
    HttpxTransport,
    create_client,
    new_cached_client,
    new_client,
)
from yfantasy.cache import (  # noqa: E402
    CachedContentProvider,
    DiskStore,
    MemoryStore,
    WindowedCache,
)
from yfantasy.content import XmlContentProvider  # noqa: E402
from yfantasy.exceptions import (  # noqa: E402
    AccessDeniedError,
    ConfigError,
    ContentError,
    FantasyError,
    ParseError,
    ReadError,
    TransportError,
)
from yfantasy.models import FantasyContent  # noqa: E402
from yfantasy.provider import ContentProvider  # noqa: E402

__all__ = [
    "YAHOO_BASE_URL",
    "AccessDeniedError",
    "CachedContentProvider",
    "Client",
    "ConfigError",
    "ContentError",
    "ContentProvider",
    "CountingClient",
    "DiskStore",
    "FantasyContent",
    "FantasyError",
    "HttpxTransport",
    "MemoryStore",
    "ParseError",
    "ReadError",
    "TransportError",
    "WindowedCache",
    "XmlContentProvider",
    "create_client",
    "new_cached_client",
    "new_client",
]
