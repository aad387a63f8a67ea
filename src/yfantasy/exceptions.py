"""Exception hierarchy for yfantasy.

All exceptions inherit from :class:`FantasyError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`yfantasy.exit_codes`.
The command line entry point catches ``FantasyError`` and exits with the
appropriate code; library callers catch the subclasses by type.

Subclass hierarchy::

    FantasyError            (exit 1)
    +-- ConfigError         (exit 1)
    +-- TransportError      (exit 6)
    +-- AccessDeniedError   (exit 3)
    +-- ContentError        (exit 7)
        +-- ReadError
        +-- ParseError
"""

from __future__ import annotations

from yfantasy.exit_codes import (
    EXIT_ACCESS_DENIED,
    EXIT_CONTENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_TRANSPORT_ERROR,
)


class FantasyError(Exception):
    """Base exception for all yfantasy errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(FantasyError):
    """Raised for configuration problems (invalid settings file, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE


class TransportError(FantasyError):
    """Raised when the HTTP request fails or the API answers with an error status.

    The message carries the response body when one was returned, so the
    upstream error text (e.g. ``consumer_key_unknown``) stays visible to the
    retry logic.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code, or ``None`` for network failures.
    """

    exit_code = EXIT_TRANSPORT_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AccessDeniedError(FantasyError):
    """Raised when the user does not have permission to access the requested resource.

    Every permission failure reported by the API is normalised to this one
    type, whatever the exact upstream wording was.
    """

    exit_code = EXIT_ACCESS_DENIED

    def __init__(
        self,
        message: str = "user does not have permission to access the requested resource",
    ):
        super().__init__(message)


class ContentError(FantasyError):
    """Raised when a successful response cannot be turned into fantasy content."""

    exit_code = EXIT_CONTENT_ERROR


class ReadError(ContentError):
    """Raised when the response body could not be read to completion."""


class ParseError(ContentError):
    """Raised when the response body is not a valid ``fantasy_content`` document."""
