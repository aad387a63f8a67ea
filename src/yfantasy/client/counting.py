"""Request counting and retry of known transient API failures.

The fantasy sports API occasionally rejects valid consumer keys with
``consumer_key_unknown``; asking again usually succeeds.
:class:`CountingClient` hides that from the rest of the pipeline, counts
every request that reaches the API, and turns the API's permission
failure into :class:`~yfantasy.exceptions.AccessDeniedError`.
"""

from __future__ import annotations

import threading

from yfantasy.client.transport import Response, Transport
from yfantasy.exceptions import AccessDeniedError
from yfantasy.output import get_output

TRANSIENT_ERROR_MARKER = "consumer_key_unknown"
ACCESS_DENIED_MARKER = "You are not allowed to view this page"
DEFAULT_MAX_ATTEMPTS = 4


class CountingClient:
    """Wraps a :class:`~yfantasy.client.transport.Transport` with counting and retry.

    Retries are immediate.  Only failures whose message contains
    :data:`TRANSIENT_ERROR_MARKER` are retried; everything else is raised
    after the first attempt.  Safe to share between threads.

    Args:
        transport: Performs the actual HTTP GET.
        max_attempts: Total attempts for a transient failure, including the
            first one.
    """

    def __init__(self, transport: Transport, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> None:
        self._transport = transport
        self._max_attempts = max(1, max_attempts)
        self._request_count = 0
        self._lock = threading.Lock()

    @property
    def request_count(self) -> int:
        """Total number of requests sent, retries included."""
        with self._lock:
            return self._request_count

    def get(self, url: str) -> Response:
        """Return the response for *url*, retrying transient failures.

        Raises:
            AccessDeniedError: If the API reports that the user may not
                view the resource.
            Exception: Any other transport failure, unchanged -- including
                the last ``consumer_key_unknown`` failure once attempts are
                exhausted.
        """
        output = get_output()
        for attempt in range(1, self._max_attempts + 1):
            self._increment()
            try:
                return self._transport.get(url)
            except Exception as exc:
                message = str(exc)
                if TRANSIENT_ERROR_MARKER in message and attempt < self._max_attempts:
                    output.debug(
                        f"{TRANSIENT_ERROR_MARKER} for {url}, retrying "
                        f"(attempt {attempt + 1}/{self._max_attempts})"
                    )
                    continue
                if ACCESS_DENIED_MARKER in message:
                    output.debug(f"Access denied for {url}")
                    raise AccessDeniedError() from exc
                raise
        raise AssertionError("unreachable")  # pragma: no cover

    def _increment(self) -> None:
        with self._lock:
            self._request_count += 1
