"""HTTP transport at the leaf of the request pipeline.

The pipeline only needs one capability from its transport: perform a GET
and hand back something whose body can be read and closed.  Any object
matching :class:`Transport` works, which keeps tests free of the network.

:class:`HttpxTransport` is the default implementation on top of
:class:`httpx.Client`.  It streams the response so the body is read by
the caller, attaches the OAuth access token, and turns HTTP error statuses
into :class:`~yfantasy.exceptions.TransportError` with the response body
in the message -- the retry logic in
:class:`~yfantasy.client.counting.CountingClient` looks for upstream error
codes in that text.

Obtaining the access token is up to the caller; see
:func:`yfantasy.config.resolve_credential`.
"""

from __future__ import annotations

from typing import Optional, Protocol

import httpx

from yfantasy.exceptions import TransportError
from yfantasy.models import RequestConfig
from yfantasy.output import get_output


class Response(Protocol):
    """A response whose body has not been consumed yet."""

    def read(self) -> bytes: ...

    def close(self) -> None: ...


class Transport(Protocol):
    """Performs a single HTTP GET."""

    def get(self, url: str) -> Response: ...


class HttpxTransport:
    """GET requests against the fantasy sports API via :class:`httpx.Client`.

    Should be used as a context manager so the connection pool is closed.

    Args:
        token: OAuth 2 access token sent as a bearer ``Authorization``
            header.  ``None`` sends no credentials.
        config: Timeout and SSL settings.
        client: Pre-built :class:`httpx.Client` to use instead of creating
            one (e.g. with a mock transport in tests).

    Example::

        with HttpxTransport(token) as transport:
            client = new_client(transport)
            content = client.get_fantasy_content(url)
    """

    def __init__(
        self,
        token: Optional[str] = None,
        config: Optional[RequestConfig] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        config = config or RequestConfig()
        headers = {"Accept": "application/xml"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._headers = headers
        self._client = client or httpx.Client(
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=True,
        )

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def get(self, url: str) -> httpx.Response:
        """Send a GET request and return the response with its body unread.

        Raises:
            TransportError: On network errors, timeouts, or an HTTP status
                of 400 or above.  For error statuses the message contains
                the response body.
        """
        request = self._client.build_request("GET", url, headers=self._headers)
        try:
            response = self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc

        if response.status_code < 400:
            return response

        try:
            body = response.read().decode("utf-8", errors="replace")
        except httpx.HTTPError as exc:
            raise TransportError(
                f"HTTP {response.status_code} for {url} (body unreadable: {exc})",
                status_code=response.status_code,
            ) from exc
        finally:
            response.close()

        get_output().debug(f"HTTP {response.status_code} for GET {url}")
        raise TransportError(
            f"HTTP {response.status_code}: {body.strip()}",
            status_code=response.status_code,
        )
