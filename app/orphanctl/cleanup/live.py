"""Loading of live path sets.

The set of paths reachable from valid table state is produced by the
table's metadata system. This module reads such a set from exported
files so it can be passed to a cleanup run.

Supported formats:
- ``.json``: a list of path strings, or an object with a ``files`` list
- anything else: one path per line; blank lines and ``#`` comments ignored
"""

import json
import logging
from pathlib import Path

from orphanctl.cleanup.errors import LivePathsError

logger = logging.getLogger(__name__)


def load_live_paths(*paths: Path) -> set[str]:
    """Load and merge live paths from one or more files.

    Args:
        paths: Files to read.

    Returns:
        Union of all live paths found.

    Raises:
        LivePathsError: If no file is given, or a file is missing,
            unreadable or malformed.
    """
    if not paths:
        msg = "At least one live path file is required"
        raise LivePathsError(msg)

    live: set[str] = set()
    for path in paths:
        loaded = _load_file(path)
        logger.debug("Loaded %d live paths from %s", len(loaded), path)
        live.update(loaded)
    return live


def _load_file(path: Path) -> set[str]:
    """Load live paths from a single file.

    Args:
        path: File to read.

    Returns:
        Live paths contained in the file.

    Raises:
        LivePathsError: If the file is missing, unreadable or malformed.
    """
    if not path.exists():
        raise LivePathsError(f"Live path file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LivePathsError(f"Failed to read live path file {path}: {e}") from e

    if path.suffix.lower() == ".json":
        return _parse_json(text, path)

    return {
        stripped
        for line in text.splitlines()
        if (stripped := line.strip()) and not stripped.startswith("#")
    }


def _parse_json(text: str, path: Path) -> set[str]:
    """Parse a JSON live path document.

    Args:
        text: File content.
        path: File the content came from, for error messages.

    Returns:
        Live paths contained in the document.

    Raises:
        LivePathsError: If the document has the wrong shape.
    """
    try:
        data: object = json.loads(text)
    except json.JSONDecodeError as e:
        raise LivePathsError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("files")

    if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
        msg = f"{path}: expected a list of path strings or an object with a 'files' list"
        raise LivePathsError(msg)

    return {p for p in data if p}
