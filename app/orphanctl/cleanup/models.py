"""Data structures for orphan file discovery and deletion.

This module defines the immutable records passed between the traversal,
reconciliation and deletion stages of a cleanup run. None of them are
persisted; they live for the duration of a single invocation.
"""

import re
import sys
from dataclasses import dataclass, field
from datetime import datetime


def file_name(path: str) -> str:
    """Return the final component of a path.

    Args:
        path: Slash-separated path, optionally with a scheme prefix.

    Returns:
        Everything after the last "/", or the whole string if there is none.
    """
    return path.rsplit("/", 1)[-1]


# Scheme plus optional "//authority"; one-letter schemes are drive letters
_URI_PREFIX = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.-]+):(?://[^/]*)?")


def split_uri(path: str) -> tuple[str, str]:
    """Split a path into its lowercased scheme and the part after the authority.

    The remainder is taken verbatim: "#", "?" and "%" are ordinary file
    name characters here, never a fragment, a query or an escape.

    >>> split_uri("file:///t/keep#1")
    ('file', '/t/keep#1')
    >>> split_uri("/t/a")
    ('', '/t/a')
    """
    match = _URI_PREFIX.match(path)
    if match is None:
        return "", path
    return match["scheme"].lower(), path[match.end() :]


@dataclass(frozen=True, slots=True)
class DirEntry:
    """A single child returned by a directory listing.

    Attributes:
        path: Full path of the child, in the same form as its parent.
        is_directory: True for directories, False for regular files.
        modified_at: Last modification time (timezone-aware, UTC).
    """

    path: str
    is_directory: bool
    modified_at: datetime

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.modified_at.utcoffset() is None:
            msg = f"Modification time of {self.path} must be timezone-aware"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Final path component of this entry."""
        return file_name(self.path)


@dataclass(frozen=True, slots=True)
class TraversalBudget:
    """Limits applied to a single directory walk.

    Attributes:
        max_depth: Directory levels that may be listed below the root.
        max_direct_subdirs: Largest number of direct subdirectories a
            directory may have before all of them are deferred.
    """

    max_depth: int
    max_direct_subdirs: int

    def __post_init__(self) -> None:
        """Validate budget values after initialization."""
        if self.max_depth < 0:
            msg = f"max_depth must be non-negative, got {self.max_depth}"
            raise ValueError(msg)
        if self.max_direct_subdirs < 1:
            msg = f"max_direct_subdirs must be at least 1, got {self.max_direct_subdirs}"
            raise ValueError(msg)


# Coordinator phase: at most 3 levels, only dirs with <= 10 direct subdirs
BOUNDED_BUDGET = TraversalBudget(max_depth=3, max_direct_subdirs=10)

# Worker phase: the depth cap is a safety ceiling, not a real limit
UNBOUNDED_BUDGET = TraversalBudget(max_depth=2000, max_direct_subdirs=sys.maxsize)


@dataclass(frozen=True, slots=True)
class TraversalResult:
    """Outcome of one directory walk.

    Attributes:
        matches: Files that passed the walk predicate.
        deferred: Directories left unlisted because the budget ran out.
    """

    matches: tuple[DirEntry, ...] = ()
    deferred: tuple[str, ...] = ()

    @property
    def paths(self) -> list[str]:
        """Paths of all matching files."""
        return [entry.path for entry in self.matches]


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of a single delete attempt.

    Attributes:
        path: Path that was operated on.
        success: Whether the delete operation completed.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether the delete was only simulated.
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the delete attempt failed."""
        return not self.success


@dataclass(frozen=True, slots=True)
class DeletionReport:
    """Per-file outcomes of a deletion batch.

    Every candidate appears exactly once, whether or not its delete
    succeeded.
    """

    outcomes: tuple[DeletionOutcome, ...] = ()

    @property
    def attempted(self) -> list[str]:
        """All paths a delete was attempted (or simulated) for."""
        return [o.path for o in self.outcomes]

    @property
    def deleted(self) -> list[str]:
        """Paths whose delete succeeded."""
        return [o.path for o in self.outcomes if o.success]

    @property
    def failures(self) -> list[DeletionOutcome]:
        """Outcomes of failed deletes."""
        return [o for o in self.outcomes if o.failed]

    @property
    def failed_count(self) -> int:
        """Number of failed deletes."""
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def has_failures(self) -> bool:
        """Check if any delete failed."""
        return any(o.failed for o in self.outcomes)


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Summary of a complete orphan cleanup run.

    Attributes:
        location: Root location that was scanned.
        older_than: Retention cutoff; only files modified before it qualify.
        orphans: Orphan candidates, each attempted once.
        report: Per-file deletion outcomes (empty when only planning).
        coordinator_files: Matching files found by the bounded walk.
        deferred_dirs: Directories handed over to worker traversal.
        worker_files: Matching files found by worker traversal.
    """

    location: str
    older_than: datetime
    orphans: tuple[DirEntry, ...]
    report: DeletionReport = field(default_factory=DeletionReport)
    coordinator_files: int = 0
    deferred_dirs: int = 0
    worker_files: int = 0

    @property
    def orphan_paths(self) -> list[str]:
        """Paths of all orphan candidates."""
        return [entry.path for entry in self.orphans]

    @property
    def scanned_files(self) -> int:
        """Total matching files found across both traversal phases."""
        return self.coordinator_files + self.worker_files
