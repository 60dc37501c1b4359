"""Locations of orphanctl's configuration and state files.

Follows the XDG base directory layout:

- config (``config.toml``, ``theme.toml``): ``$XDG_CONFIG_HOME/orphanctl``,
  by default ``~/.config/orphanctl``
- state (``history.jsonl``): ``$XDG_STATE_HOME/orphanctl``,
  by default ``~/.local/state/orphanctl``

Environment variables are read on every call, never cached.
"""

import os
from pathlib import Path

APP_NAME = "orphanctl"

CONFIG_FILENAME = "config.toml"
THEME_FILENAME = "theme.toml"
HISTORY_FILENAME = "history.jsonl"


def _xdg_app_dir(env_var: str, fallback: str) -> Path:
    """Resolve an XDG base directory and append the application name.

    Args:
        env_var: XDG variable to honor (e.g. "XDG_STATE_HOME").
        fallback: Location under the home directory used when it is unset.
    """
    base = os.environ.get(env_var)
    root = Path(base) if base else Path.home() / fallback
    return root / APP_NAME


def get_config_dir() -> Path:
    """Directory holding config.toml and theme.toml."""
    return _xdg_app_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Directory holding the run history."""
    return _xdg_app_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Path of the cleanup configuration file."""
    return get_config_dir() / CONFIG_FILENAME


def get_theme_path() -> Path:
    """Path of the optional color theme override."""
    return get_config_dir() / THEME_FILENAME


def ensure_dir(path: Path) -> Path:
    """Create a directory and its parents if missing.

    Args:
        path: Directory to create.

    Returns:
        The directory path.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create directory {path}: {e.strerror or e}"
        raise RuntimeError(msg) from e
    return path
