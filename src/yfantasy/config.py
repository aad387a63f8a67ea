"""Configuration management with XDG paths, atomic writes, and env overrides.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.yfantasy/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir`, :func:`get_data_dir`.
* **Settings** -- A single :class:`~yfantasy.models.Settings` JSON file.
  :func:`load_settings` applies ``YFANTASY_*`` environment overrides on
  top of it; :func:`save_settings` writes it atomically.
* **Credential resolution** -- :func:`resolve_credential` reads the OAuth
  access token from an env var, a file, or an interactive prompt.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional

from yfantasy.exceptions import ConfigError
from yfantasy.models import Settings

_APP_NAME = "yfantasy"
_CONFIG_FILENAME = "config.json"

ENV_CLIENT_ID = "YFANTASY_CLIENT_ID"
ENV_TOKEN_SOURCE = "YFANTASY_TOKEN_SOURCE"
ENV_CACHE_WINDOW = "YFANTASY_CACHE_WINDOW"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/yfantasy/`` (default ``~/.config/yfantasy/``).
    On macOS/Windows: ``~/.yfantasy/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Holds the disk content cache. Cached data can be safely deleted at any
    time.

    On Linux/BSD: ``$XDG_CACHE_HOME/yfantasy/`` (default ``~/.cache/yfantasy/``).
    On macOS/Windows: ``~/.yfantasy/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/yfantasy/`` (default ``~/.local/share/yfantasy/``).
    On macOS/Windows: ``~/.yfantasy/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Settings ---


def settings_path() -> Path:
    """Path to the settings file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk and apply environment overrides.

    Args:
        path: Settings file to read; defaults to :func:`settings_path`.

    Returns:
        The effective :class:`~yfantasy.models.Settings`.  A missing file
        yields the defaults.

    Raises:
        ConfigError: If the file contains invalid JSON, or the file or an
            environment override fails validation.
    """
    path = path or settings_path()
    data: dict[str, Any] = {}
    if path.is_file():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise ConfigError(f"Invalid settings file at {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid settings file at {path}: expected a JSON object")

    _apply_env_overrides(data)

    try:
        return Settings.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid settings ({path}): {exc}") from exc


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    """Persist *settings* atomically to disk."""
    payload = settings.model_dump(mode="json")
    _atomic_write(path or settings_path(), json.dumps(payload, indent=2) + "\n")


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Overlay ``YFANTASY_*`` environment variables onto raw settings data."""
    client_id = os.environ.get(ENV_CLIENT_ID)
    if client_id:
        data["client_id"] = client_id

    token_source = os.environ.get(ENV_TOKEN_SOURCE)
    if token_source:
        data["token_source"] = token_source

    window = os.environ.get(ENV_CACHE_WINDOW)
    if window:
        cache = dict(data.get("cache") or {})
        cache["window_seconds"] = window
        data["cache"] = cache


# --- Credentials ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Enter access token: ")

    raise ConfigError(f"Unknown credential source format: {source}")
