"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import threading
from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta

import pytest
from orphanctl.cleanup.errors import ListingError
from orphanctl.cleanup.models import DirEntry

# Reference time for in-memory trees
NOW = datetime(2026, 1, 31, 12, 0, tzinfo=UTC)


class InMemoryLister:
    """Directory lister backed by a dict of file path to mtime.

    Every ancestor of a file is a directory. Extra (empty) directories
    can be added explicitly. Listing a path in ``failing`` raises
    ListingError. Every listed path is recorded in ``calls``.
    """

    def __init__(
        self,
        files: dict[str, datetime],
        dirs: Iterable[str] = (),
        failing: Iterable[str] = (),
    ) -> None:
        self._children: dict[str, dict[str, DirEntry]] = {}
        self._failing = set(failing)
        self._lock = threading.Lock()
        self.calls: list[str] = []

        for directory in dirs:
            self._add_dir(directory.rstrip("/"))
        for path, mtime in files.items():
            parent = self._add_dir(path.rsplit("/", 1)[0])
            self._children[parent][path] = DirEntry(path, False, mtime)

    def _add_dir(self, path: str) -> str:
        missing: list[str] = []
        current = path
        while current and current not in self._children:
            missing.append(current)
            parent = current.rsplit("/", 1)[0]
            if parent == current:
                break
            current = parent
        for directory in missing:
            self._children[directory] = {}
        for directory in missing:
            parent = directory.rsplit("/", 1)[0]
            if parent and parent != directory:
                self._children[parent][directory] = DirEntry(directory, True, NOW)
        return path

    def list_directory(self, path: str) -> list[DirEntry]:
        with self._lock:
            self.calls.append(path)
        if path in self._failing:
            raise ListingError(f"Cannot list directory {path}: access denied")
        if path not in self._children:
            raise ListingError(f"Cannot list directory {path}: not found")
        return list(self._children[path].values())


@pytest.fixture
def now() -> datetime:
    """Fixed reference time."""
    return NOW


@pytest.fixture
def old() -> datetime:
    """A modification time well past the default retention period."""
    return NOW - timedelta(days=30)


@pytest.fixture
def fresh() -> datetime:
    """A modification time inside the default retention period."""
    return NOW - timedelta(hours=1)


@pytest.fixture
def make_lister() -> Callable[..., InMemoryLister]:
    """Factory for in-memory listers."""

    def _make(
        files: dict[str, datetime],
        dirs: Iterable[str] = (),
        failing: Iterable[str] = (),
    ) -> InMemoryLister:
        return InMemoryLister(files, dirs=dirs, failing=failing)

    return _make


@pytest.fixture
def wide_tree(old: datetime) -> dict[str, datetime]:
    """A table root with one narrow and one wide partition level.

    ``/t/data`` has 11 partition directories (one more than the default
    fanout limit), each holding two data files. ``/t/metadata`` holds
    one file directly.
    """
    files = {"/t/metadata/v1.json": old}
    for i in range(11):
        files[f"/t/data/p={i}/a.parquet"] = old
        files[f"/t/data/p={i}/b.parquet"] = old
    return files
