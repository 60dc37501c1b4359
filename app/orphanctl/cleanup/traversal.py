"""Budgeted directory walk.

One walk algorithm serves both traversal phases. The coordinator runs it
with a small budget to resolve shallow, narrow parts of the tree cheaply
and defers the rest; workers run it with an effectively unbounded budget
on the deferred subtrees.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from orphanctl.cleanup.errors import ListingError
from orphanctl.cleanup.listing import DirectoryLister, is_hidden
from orphanctl.cleanup.models import BOUNDED_BUDGET, DirEntry, TraversalBudget, TraversalResult

logger = logging.getLogger(__name__)

EntryPredicate = Callable[[DirEntry], bool]


@dataclass(frozen=True, slots=True)
class ModifiedBefore:
    """Predicate accepting files modified strictly before a cutoff.

    A plain dataclass rather than a closure so it can be pickled for
    process-based workers.
    """

    cutoff: datetime

    def __call__(self, entry: DirEntry) -> bool:
        return entry.modified_at < self.cutoff


def walk(
    root: str,
    budget: TraversalBudget,
    predicate: EntryPredicate,
    lister: DirectoryLister,
) -> TraversalResult:
    """Walk a directory tree within a budget.

    Each directory is listed once. Hidden children are skipped, files
    passing ``predicate`` are collected, and subdirectories are walked
    with one less level of depth. Two conditions stop the descent and
    defer work instead:

    - a directory reached with no depth left is deferred unlisted;
    - a directory with more than ``budget.max_direct_subdirs`` direct
      subdirectories defers all of them.

    Args:
        root: Directory to start from.
        budget: Depth and fanout limits for this walk.
        predicate: Filter applied to every file found.
        lister: Storage listing primitive.

    Returns:
        TraversalResult with matching files and deferred directories.

    Raises:
        ListingError: If any directory cannot be listed.
    """
    matches: list[DirEntry] = []
    deferred: list[str] = []
    listed = 0

    # Explicit stack: worker budgets go deeper than the recursion limit
    stack: list[tuple[str, int]] = [(root, budget.max_depth)]
    while stack:
        directory, depth = stack.pop()

        if depth <= 0:
            deferred.append(directory)
            continue

        try:
            children = lister.list_directory(directory)
        except ListingError:
            raise
        except (OSError, ValueError) as e:
            # ValueError: the lister built an invalid DirEntry
            msg = f"Cannot list directory {directory}: {e}"
            raise ListingError(msg) from e
        listed += 1

        subdirs: list[str] = []
        for child in children:
            if is_hidden(child.path):
                continue
            if child.is_directory:
                subdirs.append(child.path)
            elif predicate(child):
                matches.append(child)

        if len(subdirs) > budget.max_direct_subdirs:
            logger.debug(
                "Deferring %d subdirectories of %s (limit %d)",
                len(subdirs),
                directory,
                budget.max_direct_subdirs,
            )
            deferred.extend(subdirs)
            continue

        # Reversed so siblings are visited in listing order
        stack.extend((subdir, depth - 1) for subdir in reversed(subdirs))

    logger.debug(
        "Walked %s: %d directories listed, %d files matched, %d deferred",
        root,
        listed,
        len(matches),
        len(deferred),
    )
    return TraversalResult(matches=tuple(matches), deferred=tuple(deferred))


def bounded_walk(
    root: str,
    older_than: datetime,
    lister: DirectoryLister,
    budget: TraversalBudget = BOUNDED_BUDGET,
) -> TraversalResult:
    """Run the coordinator phase of a traversal.

    Args:
        root: Root location to scan.
        older_than: Only files modified strictly before this are matched.
        lister: Storage listing primitive.
        budget: Coordinator budget (small depth and fanout).

    Returns:
        Files found directly plus the subtrees left for workers.

    Raises:
        ListingError: If any directory cannot be listed.
    """
    return walk(root, budget, ModifiedBefore(older_than), lister)
