"""Configuration with XDG paths and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.curvenote/`` on macOS and Windows.  See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **User config** -- an optional ``config.json`` deserialised into
  :class:`~curvenote.models.Settings`.
* **Precedence resolution** -- :func:`resolve_settings` merges CLI flags,
  environment variables, the user config file and defaults.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Optional

from curvenote.exceptions import ConfigError
from curvenote.models import Settings

_APP_NAME = "curvenote"
_CONFIG_FILENAME = "config.json"

ENV_TOKEN = "CURVENOTE_TOKEN"
ENV_API_URL = "CURVENOTE_API_URL"
ENV_SITE_URL = "CURVENOTE_SITE_URL"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
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
    """Return the configuration directory.

    On Linux/BSD: ``$XDG_CONFIG_HOME/curvenote/`` (default ``~/.config/curvenote/``).
    On macOS/Windows: ``~/.curvenote/``.

    The directory is not created; reading config never writes to disk.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    return _fallback_base_dir()


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/curvenote/`` (default ``~/.local/share/curvenote/``).
    On macOS/Windows: ``~/.curvenote/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- User config ---


def config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_settings_file() -> Settings:
    """Load the user config file.

    Returns:
        The deserialised :class:`~curvenote.models.Settings`, or defaults
        if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            validation.
    """
    path = config_path()
    if not path.is_file():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Settings.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


# --- Precedence resolution ---


def resolve_settings(
    cli_token: Optional[str] = None,
    cli_api_url: Optional[str] = None,
    cli_site_url: Optional[str] = None,
) -> Settings:
    """Resolve the effective settings.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``CURVENOTE_TOKEN``, ``CURVENOTE_API_URL``,
           ``CURVENOTE_SITE_URL``)
        3. User config (``~/.config/curvenote/config.json``)
        4. Defaults
    """
    settings = load_settings_file()
    overrides = {
        "token": cli_token or os.environ.get(ENV_TOKEN) or None,
        "api_url": cli_api_url or os.environ.get(ENV_API_URL) or None,
        "site_url": cli_site_url or os.environ.get(ENV_SITE_URL) or None,
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    if not update:
        return settings
    return settings.model_copy(update=update)
