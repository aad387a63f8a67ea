"""HTTP side of the request pipeline and the client facade.

Classes:
    :class:`HttpxTransport` -- GET requests via :mod:`httpx` with bearer auth.
    :class:`CountingClient` -- request counting and ``consumer_key_unknown`` retry.
    :class:`Client` -- facade returned by :func:`new_client`,
    :func:`new_cached_client` and :func:`create_client`.

Example::

    from yfantasy.client import HttpxTransport, new_client

    with HttpxTransport(token) as transport:
        client = new_client(transport)
        content = client.get_fantasy_content(url)
"""

from yfantasy.client.transport import HttpxTransport, Response, Transport
from yfantasy.client.counting import CountingClient
from yfantasy.client.client import (
    YAHOO_BASE_URL,
    Client,
    build_store,
    create_client,
    new_cached_client,
    new_client,
)

__all__ = [
    "YAHOO_BASE_URL",
    "Client",
    "CountingClient",
    "HttpxTransport",
    "Response",
    "Transport",
    "build_store",
    "create_client",
    "new_cached_client",
    "new_client",
]
