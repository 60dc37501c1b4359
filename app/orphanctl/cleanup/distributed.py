"""Parallel traversal of deferred subtrees.

Subtrees deferred by the coordinator walk are split into groups and
walked to completion on independent workers. Workers share nothing but
their read-only arguments; each returns its own tuple of matching files
and the coordinator merges them (fan-out/fan-in).
"""

import logging
from collections.abc import Sequence
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from datetime import datetime
from typing import Literal, TypeVar

from orphanctl.cleanup.errors import TraversalDepthExceededError
from orphanctl.cleanup.listing import DirectoryLister
from orphanctl.cleanup.models import UNBOUNDED_BUDGET, DirEntry, TraversalBudget
from orphanctl.cleanup.traversal import ModifiedBefore, walk

logger = logging.getLogger(__name__)

ExecutorKind = Literal["thread", "process"]

T = TypeVar("T")


def partition(items: Sequence[T], parts: int) -> list[list[T]]:
    """Split items into contiguous, near-equal groups.

    Never produces more groups than items, and never an empty group.

    Args:
        items: Items to split.
        parts: Maximum number of groups.

    Returns:
        List of ``min(len(items), parts)`` groups preserving item order.

    Raises:
        ValueError: If parts is less than 1.
    """
    if parts < 1:
        msg = f"parts must be at least 1, got {parts}"
        raise ValueError(msg)

    total = len(items)
    count = min(total, parts)
    return [list(items[i * total // count : (i + 1) * total // count]) for i in range(count)]


def walk_group(
    directories: Sequence[str],
    older_than: datetime,
    lister: DirectoryLister,
    budget: TraversalBudget = UNBOUNDED_BUDGET,
) -> tuple[DirEntry, ...]:
    """Walk every directory of one group to completion.

    This is the unit of work shipped to a worker.

    Args:
        directories: Deferred subtree roots assigned to this worker.
        older_than: Only files modified strictly before this are matched.
        lister: Storage listing primitive.
        budget: Worker budget; its depth is a safety cap.

    Returns:
        Matching files from all directories in the group.

    Raises:
        ListingError: If any directory cannot be listed.
        TraversalDepthExceededError: If a walk hit the depth cap.
    """
    predicate = ModifiedBefore(older_than)
    files: list[DirEntry] = []

    for directory in directories:
        result = walk(directory, budget, predicate, lister)
        if result.deferred:
            msg = (
                "Could not list subdirectories, reached maximum subdirectory "
                f"depth: {budget.max_depth} (under {directory})"
            )
            raise TraversalDepthExceededError(msg)
        files.extend(result.matches)

    return tuple(files)


def distributed_walk(
    pending: Sequence[str],
    older_than: datetime,
    lister: DirectoryLister,
    *,
    parallelism: int,
    executor: ExecutorKind = "thread",
    budget: TraversalBudget = UNBOUNDED_BUDGET,
) -> list[DirEntry]:
    """Walk deferred subtrees in parallel.

    The pending directories are split into at most ``parallelism`` groups
    and each group is walked by its own worker. The first worker failure
    cancels groups that have not started and is re-raised.

    Args:
        pending: Subtree roots deferred by the coordinator walk.
        older_than: Only files modified strictly before this are matched.
        lister: Storage listing primitive, shared read-only by workers.
            Must be picklable when ``executor`` is "process".
        parallelism: Maximum number of concurrent workers.
        executor: Run workers on threads or on processes.
        budget: Worker budget.

    Returns:
        Matching files from all subtrees, in no particular order.

    Raises:
        ListingError: If any directory cannot be listed.
        TraversalDepthExceededError: If any worker hit the depth cap.
    """
    if not pending:
        return []

    groups = partition(pending, parallelism)
    logger.info(
        "Listing %d deferred directories with %d %s worker(s)",
        len(pending),
        len(groups),
        executor,
    )

    pool: Executor
    if executor == "process":
        pool = ProcessPoolExecutor(max_workers=len(groups))
    else:
        pool = ThreadPoolExecutor(max_workers=len(groups), thread_name_prefix="orphanctl-list")

    files: list[DirEntry] = []
    with pool:
        futures: list[Future[tuple[DirEntry, ...]]] = [
            pool.submit(walk_group, group, older_than, lister, budget) for group in groups
        ]
        try:
            for future in futures:
                files.extend(future.result())
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    logger.debug("Worker traversal matched %d files", len(files))
    return files
