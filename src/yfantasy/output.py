"""Terminal output for the ``yfantasy`` command line and pipeline diagnostics.

Two streams, two purposes:

* stdout carries what the user asked for: a decoded document, a raw XML
  body, or the cache table.
* stderr carries everything else: the request summary, success and error
  lines, and ``--verbose`` traces from the request pipeline (retries, cache
  hits and misses, decode sizes).

Library code never prints directly; it calls ``get_output().debug(...)``,
which is silent unless the CLI installed a verbose :class:`OutputManager`
through :func:`set_output`.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How stdout data is rendered; ``AUTO`` picks ``RICH`` on a colour TTY."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Renders documents and tables to stdout and diagnostics to stderr.

    Args:
        format: stdout rendering; ``AUTO`` is resolved once, here.
        no_color: Force uncoloured output even on a terminal.
        quiet: Drop ``info`` and ``success`` lines.
        verbose: Show ``debug`` lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _color_disabled_by_env()
        self._quiet = quiet
        self._verbose = verbose
        if format == OutputFormat.AUTO:
            rich = sys.stdout.isatty() and not self._no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self._format = format
        self._console = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._err_console = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # --- stdout ---

    def format_response(self, data: Any, content_type: str = "application/json") -> None:
        """Write a document to stdout.

        *data* is either a JSON-compatible structure (a dumped
        :class:`~yfantasy.models.FantasyContent`) or a response body string;
        *content_type* selects the highlighter for strings in rich mode.
        """
        if self._format == OutputFormat.RICH:
            if isinstance(data, str):
                lexer = "xml" if "xml" in content_type else "text"
                self._console.print(Syntax(data, lexer, theme="monokai", word_wrap=True))
            else:
                self._console.print(Syntax(_to_json(data, indent=2), "json", theme="monokai"))
            return

        if isinstance(data, str):
            _write(data)
        elif self._format == OutputFormat.JSON:
            _write(_to_json(data, indent=2))
        elif isinstance(data, dict):
            # One line per top-level branch, e.g. "team\t{...}".
            for key, value in data.items():
                text = value if isinstance(value, str) else _to_json(value)
                _write(f"{key}\t{text}")
        else:
            _write(_to_json(data))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows to stdout: a list of objects (json), TSV (plain), or a Rich table."""
        if self._format == OutputFormat.JSON:
            _write(_to_json([dict(zip(headers, row)) for row in rows], indent=2))
        elif self._format == OutputFormat.PLAIN:
            for row in [headers, *rows]:
                _write("\t".join(row))
        else:
            table = Table(*headers, title=title, header_style="bold cyan")
            for row in rows:
                table.add_row(*row)
            self._console.print(table)

    # --- stderr ---

    def info(self, message: str) -> None:
        if not self._quiet:
            self._notify(message, "", "")

    def success(self, message: str) -> None:
        if not self._quiet:
            self._notify(message, "green", "")

    def error(self, message: str) -> None:
        """Report a failure; shown even in quiet mode."""
        self._notify(message, "bold red", "Error: ")

    def debug(self, message: str) -> None:
        """Report a pipeline trace; shown only in verbose mode."""
        if self._verbose:
            self._notify(message, "dim", "[debug] ")

    def _notify(self, message: str, style: str, prefix: str) -> None:
        if self._no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
        else:
            self._err_console.print(f"{prefix}{message}", style=style or None, markup=False)


def _write(text: str) -> None:
    print(text, file=sys.stdout, flush=True)


def _to_json(data: Any, indent: Optional[int] = None) -> str:
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)


def _color_disabled_by_env() -> bool:
    """``NO_COLOR`` (any value, even empty) or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- global manager ---

_current: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, or a default non-verbose one."""
    global _current
    if _current is None:
        _current = OutputManager()
    return _current


def set_output(output: OutputManager) -> None:
    global _current
    _current = output


def reset_output() -> None:
    """Forget the installed manager; the next :func:`get_output` builds a fresh one."""
    global _current
    _current = None


def format_response(data: Any, content_type: str = "application/json") -> None:
    get_output().format_response(data, content_type)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
