"""Directory listing for storage locations.

The traversal only needs one primitive from the storage layer: list the
immediate children of a directory. ``DirectoryLister`` describes that
primitive; ``LocalDirectoryLister`` implements it for the local
filesystem, with or without a ``file:`` scheme on the paths.
"""

import logging
import os
from datetime import UTC, datetime
from typing import Protocol
from orphanctl.cleanup.errors import ListingError
from orphanctl.cleanup.models import DirEntry, file_name, split_uri

logger = logging.getLogger(__name__)

# Final path components with these prefixes are never listed or matched
HIDDEN_PREFIXES: tuple[str, ...] = (".", "_")


class DirectoryLister(Protocol):
    """Lists the immediate children of a directory."""

    def list_directory(self, path: str) -> list[DirEntry]:
        """List the children of ``path``.

        Raises:
            ListingError: If the directory cannot be listed.
        """
        ...


def is_hidden(path: str) -> bool:
    """Check if a path's final component is hidden.

    Args:
        path: Path to check.

    Returns:
        True if the final component starts with "." or "_".
    """
    return file_name(path).startswith(HIDDEN_PREFIXES)


def to_local_path(path: str) -> str:
    """Strip a ``file:`` scheme and authority from a path.

    Percent escapes are not decoded: listed child paths carry raw file
    names, so decoding would turn a file named ``a%231`` into ``a#1``.

    Args:
        path: Plain path or ``file:`` URI.

    Returns:
        Local filesystem path.

    Raises:
        ValueError: If the path carries a scheme other than ``file``.
    """
    scheme, rest = split_uri(path)
    if not scheme:
        return path
    if scheme != "file":
        msg = f"Unsupported scheme for local storage: {scheme!r}"
        raise ValueError(msg)
    return rest or "/"


def child_path(parent: str, name: str) -> str:
    """Join a child name onto a parent path, keeping the parent's prefix."""
    return f"{parent.rstrip('/')}/{name}"


class LocalDirectoryLister:
    """Lists directories on the local filesystem.

    Child paths keep the form of the listed path, so listing
    ``file:///data/t`` yields ``file:///data/t/<name>`` entries.
    Symlinks are followed. Entries that are neither files nor
    directories (sockets, dead links) are skipped.

    Instances hold no state and can be shipped to worker processes.
    """

    def list_directory(self, path: str) -> list[DirEntry]:
        """List the immediate children of a local directory.

        Args:
            path: Directory path or ``file:`` URI.

        Returns:
            One DirEntry per file or directory child.

        Raises:
            ListingError: If the directory or one of its children
                cannot be read.
        """
        try:
            local = to_local_path(path)
        except ValueError as e:
            raise ListingError(str(e)) from e

        entries: list[DirEntry] = []
        try:
            with os.scandir(local) as it:
                for item in it:
                    is_dir = item.is_dir()
                    if not is_dir and not item.is_file():
                        logger.debug("Skipping special entry: %s", item.path)
                        continue
                    try:
                        stat = item.stat()
                    except FileNotFoundError:
                        # Removed between listing and stat
                        continue
                    mtime = datetime.fromtimestamp(stat.st_mtime, tz=UTC)
                    entries.append(
                        DirEntry(
                            path=child_path(path, item.name),
                            is_directory=is_dir,
                            modified_at=mtime,
                        )
                    )
        except OSError as e:
            msg = f"Cannot list directory {path}: {e}"
            raise ListingError(msg) from e

        return entries
