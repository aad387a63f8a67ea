"""Typer application and CLI entry point for yfantasy.

The command line is a debugging aid for the library: it fetches any
fantasy sports API resource by URL through the same pipeline library
users get, and prints either the decoded document or the raw XML.

    yfantasy get https://fantasysports.yahooapis.com/fantasy/v2/league/223.l.431
    yfantasy get --raw https://fantasysports.yahooapis.com/fantasy/v2/team/223.l.431.t.1
    yfantasy cache stats

The access token is read from the settings' ``token_source`` (by default
the ``YFANTASY_TOKEN`` environment variable); obtaining it is left to the
user's OAuth tooling.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.  :class:`~yfantasy.exceptions.FantasyError` exits with
its ``exit_code``; other exceptions are written to a crash log.
"""

from __future__ import annotations

import signal
import sys
import time
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from yfantasy import __version__
from yfantasy.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="yfantasy",
    help="Fetch resources from the Yahoo fantasy sports API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

cache_app = typer.Typer(help="Inspect or clear the disk content cache.", no_args_is_help=True)
app.add_typer(cache_app, name="cache")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"yfantasy {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~yfantasy.output.OutputManager` built from
    the output flags.
    """
    from yfantasy.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@app.command("get")
def get_command(
    url: str = typer.Argument(..., help="Full fantasy sports API resource URL."),
    raw: bool = typer.Option(
        False, "--raw", help="Print the response body as received instead of decoding it."
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the content cache."),
    token_source: Optional[str] = typer.Option(
        None,
        "--token-source",
        help="Where to read the access token: env:VAR, file:/path, or prompt.",
    ),
) -> None:
    """Fetch URL and print the decoded document (or raw XML with --raw)."""
    from yfantasy.client import CountingClient, HttpxTransport, create_client
    from yfantasy.config import load_settings, resolve_credential
    from yfantasy.output import format_response, info

    settings = load_settings()
    if no_cache:
        settings.cache.enabled = False
    token = resolve_credential(token_source or settings.token_source)

    start = time.monotonic()
    with HttpxTransport(token, settings.request) as transport:
        if raw:
            counting = CountingClient(transport, max_attempts=settings.request.max_attempts)
            response = counting.get(url)
            try:
                body = response.read().decode("utf-8", errors="replace")
            finally:
                response.close()
            format_response(body, "application/xml")
            request_count = counting.request_count
        else:
            client = create_client(settings, transport)
            content = client.get_fantasy_content(url)
            format_response(content.model_dump(mode="json"))
            request_count = client.request_count

    elapsed = time.monotonic() - start
    info(f"Requests: {request_count}, time: {elapsed:.3f}s")


@cache_app.command("stats")
def cache_stats() -> None:
    """Show the size and location of the disk content cache."""
    from yfantasy.cache import DiskStore
    from yfantasy.config import get_cache_dir, load_settings
    from yfantasy.models import CacheBackend
    from yfantasy.output import info, print_table

    settings = load_settings()
    if not settings.cache.enabled or settings.cache.backend != CacheBackend.DISK:
        info(
            "No persistent cache configured "
            f"(enabled: {settings.cache.enabled}, backend: {settings.cache.backend.value})"
        )
        return
    directory = settings.cache.directory or str(get_cache_dir() / "content")
    store = DiskStore(directory, size_limit=settings.cache.size_limit)
    try:
        stats = store.stats()
    finally:
        store.close()
    print_table(
        ["Setting", "Value"],
        [
            ["backend", settings.cache.backend.value],
            ["window_seconds", str(settings.cache.window_seconds)],
            ["directory", stats["directory"]],
            ["entries", str(stats["entries"])],
            ["volume_bytes", str(stats["volume_bytes"])],
        ],
        title="Content cache",
    )


@cache_app.command("clear")
def cache_clear() -> None:
    """Remove every entry from the disk content cache."""
    from yfantasy.cache import DiskStore
    from yfantasy.config import get_cache_dir, load_settings
    from yfantasy.output import success

    settings = load_settings()
    directory = settings.cache.directory or str(get_cache_dir() / "content")
    store = DiskStore(directory, size_limit=settings.cache.size_limit)
    try:
        removed = store.clear()
    finally:
        store.close()
    success(f"Removed {removed} cached entries from {directory}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from yfantasy.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``yfantasy`` console script.

    Unhandled :class:`~yfantasy.exceptions.FantasyError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from yfantasy.exceptions import FantasyError
        from yfantasy.output import error

        if isinstance(exc, FantasyError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
