"""Color theme for orphanctl output.

Every color can be overridden in ~/.config/orphanctl/theme.toml::

    [colors]
    path = "#e0e0e0"
    error = "#ff5555"

An unreadable or invalid theme file is reported as a warning and the
built-in colors are used instead.
"""

import logging
import re
import tomllib
from functools import cache
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from orphanctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


def _check_hex(value: str) -> str:
    color = value.strip()
    if not _HEX_COLOR.fullmatch(color):
        msg = f"expected #RGB or #RRGGBB, got {value!r}"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Colors used by orphanctl tables and messages."""

    model_config = ConfigDict(extra="forbid")

    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    path: HexColor = "#ffffff"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colors, applying user overrides.

    Args:
        path: Theme file; defaults to ~/.config/orphanctl/theme.toml.

    Returns:
        ThemeColors with overrides applied, or the defaults if the file
        is missing or invalid.
    """
    theme_path = path or get_theme_path()
    try:
        with open(theme_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return ThemeColors()
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        return ThemeColors()

    try:
        return ThemeColors.model_validate(data.get("colors", {}))
    except ValidationError as e:
        logger.warning("Invalid colors in %s, using defaults: %s", theme_path, e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme with the style names used across the CLI.

    Args:
        colors: Colors to use; loaded from the theme file if None.
    """
    c = colors or load_theme()
    return Theme(
        {
            "muted": c.muted,
            "dim": c.muted,
            "border": c.border,
            "bold_header": f"bold {c.header}",
            "path": c.path,
            "success": c.success,
            "warning": c.warning,
            "error": f"bold {c.error}",
            "info": c.info,
        }
    )


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return get_rich_theme()
