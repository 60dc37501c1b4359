"""Remove orphan files from a table storage location.

Lists the location, compares the files found with the paths referenced
by valid table metadata, and deletes unreferenced files older than a
retention cutoff (3 days by default).

Listing happens in two phases: the coordinator walks the top of the
tree within a small budget, then deferred subtrees are walked in
parallel. Both phases feed one file set, which is reconciled against
the live paths before any file is deleted.

Using a short retention period is dangerous: a concurrent writer may
still be about to reference a freshly written file.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from orphanctl.cleanup.config import CleanupConfig
from orphanctl.cleanup.distributed import distributed_walk
from orphanctl.cleanup.errors import PreconditionError
from orphanctl.cleanup.listing import DirectoryLister, LocalDirectoryLister
from orphanctl.cleanup.models import CleanupResult, DirEntry
from orphanctl.cleanup.operator import DeleteOp, DeletionExecutor
from orphanctl.cleanup.reconciler import select_orphans
from orphanctl.cleanup.traversal import bounded_walk

logger = logging.getLogger(__name__)

LivePathSource = Iterable[str] | Callable[[], Iterable[str]]


class RemoveOrphanFiles:
    """Configurable orphan file removal for one storage location.

    Setters return ``self`` so a run can be configured by chaining::

        result = (
            RemoveOrphanFiles("/warehouse/db/events", live_paths)
            .older_than(cutoff)
            .delete_with(store.delete)
            .execute()
        )

    Args:
        location: Root location to clean.
        live_paths: Paths referenced by valid table metadata, or a
            callable producing them. A callable is only invoked after
            the preconditions have been checked.
        config: Cleanup settings; defaults to CleanupConfig().
        lister: Storage listing primitive; defaults to local listing.
    """

    def __init__(
        self,
        location: str,
        live_paths: LivePathSource,
        *,
        config: CleanupConfig | None = None,
        lister: DirectoryLister | None = None,
    ) -> None:
        self._config = config or CleanupConfig()
        self._location = location
        self._live_paths = live_paths
        self._lister = lister or LocalDirectoryLister()
        self._older_than: datetime | None = None
        self._delete_op: DeleteOp | None = None
        self._parallelism = self._config.parallelism
        self._dry_run = False
        self._gc_enabled = self._config.gc_enabled

    def location(self, new_location: str) -> "RemoveOrphanFiles":
        """Clean the given location instead of the default one."""
        self._location = new_location
        return self

    def older_than(self, timestamp: datetime) -> "RemoveOrphanFiles":
        """Only remove files modified strictly before ``timestamp``."""
        self._older_than = timestamp
        return self

    def delete_with(self, delete_op: DeleteOp) -> "RemoveOrphanFiles":
        """Use an alternative delete operation for orphan files."""
        self._delete_op = delete_op
        return self

    def parallelism(self, workers: int) -> "RemoveOrphanFiles":
        """Set the maximum number of listing workers."""
        if workers < 1:
            msg = f"parallelism must be at least 1, got {workers}"
            raise ValueError(msg)
        self._parallelism = workers
        return self

    def dry_run(self, enabled: bool = True) -> "RemoveOrphanFiles":
        """Report orphan files without deleting them."""
        self._dry_run = enabled
        return self

    def gc_enabled(self, enabled: bool) -> "RemoveOrphanFiles":
        """Override whether deleting files under the location is allowed."""
        self._gc_enabled = enabled
        return self

    @property
    def cutoff(self) -> datetime:
        """Effective retention cutoff for this run."""
        if self._older_than is not None:
            return self._older_than
        return self._config.cutoff()

    def plan(self) -> CleanupResult:
        """Find orphan files without deleting anything.

        Returns:
            CleanupResult with orphan candidates and an empty report.

        Raises:
            PreconditionError: If the run is not permitted.
            ListingError: If any directory cannot be listed.
            TraversalDepthExceededError: If a worker hit the depth cap.
        """
        cutoff = self.cutoff
        self._check_preconditions(cutoff)
        logger.info("Listing %s for files older than %s", self._location, cutoff.isoformat())

        coordinator = bounded_walk(
            self._location,
            cutoff,
            self._lister,
            budget=self._config.bounded_budget,
        )
        worker_files = distributed_walk(
            coordinator.deferred,
            cutoff,
            self._lister,
            parallelism=self._parallelism,
            executor=self._config.executor,
            budget=self._config.worker_budget,
        )

        actual_files: list[DirEntry] = [*coordinator.matches, *worker_files]
        live = self._resolve_live_paths()
        orphans = select_orphans(actual_files, live, cutoff, self._config.match_mode)
        logger.info(
            "Found %d orphan files among %d candidates (%d live paths)",
            len(orphans),
            len(actual_files),
            len(live),
        )

        return CleanupResult(
            location=self._location,
            older_than=cutoff,
            orphans=tuple(orphans),
            coordinator_files=len(coordinator.matches),
            deferred_dirs=len(coordinator.deferred),
            worker_files=len(worker_files),
        )

    def execute(self) -> CleanupResult:
        """Find and delete orphan files.

        Individual delete failures are recorded in the result's report
        and never abort the run.

        Returns:
            CleanupResult with orphan candidates and per-file outcomes.

        Raises:
            PreconditionError: If the run is not permitted.
            ListingError: If any directory cannot be listed.
            TraversalDepthExceededError: If a worker hit the depth cap.
        """
        return self.delete(self.plan())

    def delete(self, planned: CleanupResult) -> CleanupResult:
        """Delete the orphan candidates of a planned run.

        Lets a caller review the result of ``plan()`` before anything
        is removed.

        Args:
            planned: Result returned by ``plan()``.

        Returns:
            The planned result with per-file deletion outcomes attached.
        """
        executor = DeletionExecutor(
            self._delete_op,
            dry_run=self._dry_run,
            max_workers=self._config.delete_workers,
        )
        report = executor.delete_all(planned.orphan_paths)
        return replace(planned, report=report)

    def _check_preconditions(self, cutoff: datetime) -> None:
        """Verify the run may start.

        Args:
            cutoff: Retention cutoff the run would use.

        Raises:
            PreconditionError: If GC is disabled, no location is set, or
                the cutoff is not timezone-aware.
        """
        if not self._gc_enabled:
            msg = (
                "Cannot remove orphan files: GC is disabled "
                "(deleting files may corrupt other tables)"
            )
            raise PreconditionError(msg)
        if not self._location:
            msg = "Cannot remove orphan files: no location given"
            raise PreconditionError(msg)
        if cutoff.tzinfo is None:
            msg = "Cannot remove orphan files: cutoff timestamp must be timezone-aware"
            raise PreconditionError(msg)

    def _resolve_live_paths(self) -> set[str]:
        """Materialize the live path set."""
        source = self._live_paths
        paths = source() if callable(source) else source
        return set(paths)


def remove_orphan_files(
    location: str,
    older_than: datetime | None = None,
    delete_op: DeleteOp | None = None,
    *,
    live_paths: LivePathSource,
    config: CleanupConfig | None = None,
    lister: DirectoryLister | None = None,
) -> CleanupResult:
    """Remove orphan files under a location in one call.

    Args:
        location: Root location to clean.
        older_than: Retention cutoff; defaults to now minus the configured
            retention period (3 days unless configured otherwise).
        delete_op: Delete operation; defaults to local file removal.
        live_paths: Paths referenced by valid table metadata.
        config: Cleanup settings.
        lister: Storage listing primitive.

    Returns:
        CleanupResult; ``result.orphan_paths`` lists every attempted
        path and ``result.report.failures`` the failed ones.
    """
    action = RemoveOrphanFiles(location, live_paths, config=config, lister=lister)
    if older_than is not None:
        action.older_than(older_than)
    if delete_op is not None:
        action.delete_with(delete_op)
    return action.execute()
