"""Numeric process exit codes used by the ``yfantasy`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~yfantasy.exceptions.FantasyError` subclass.
Shell wrappers can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ yfantasy get https://fantasysports.yahooapis.com/fantasy/v2/league/223.l.431
    $ echo $?
    3   # EXIT_ACCESS_DENIED -- the user cannot view that league
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_ACCESS_DENIED = 3
"""The user does not have permission to view the requested resource."""

EXIT_TRANSPORT_ERROR = 6
"""A network-level error or HTTP error status was returned by the API."""

EXIT_CONTENT_ERROR = 7
"""The response body could not be read or parsed as fantasy content."""

EXIT_INTERRUPTED = 130
"""The command was cancelled with Ctrl-C."""
