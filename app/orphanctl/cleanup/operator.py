"""Deletion of orphan candidates.

Each candidate is handed to the delete operation exactly once. A failed
delete is recorded in the report and logged, and the batch carries on
with the next candidate.
"""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from orphanctl.cleanup.errors import DeletionError
from orphanctl.cleanup.listing import to_local_path
from orphanctl.cleanup.models import DeletionOutcome, DeletionReport

logger = logging.getLogger(__name__)

DeleteOp = Callable[[str], None]


def delete_local_file(path: str) -> None:
    """Delete a single file from the local filesystem.

    Args:
        path: File path or ``file:`` URI.

    Raises:
        DeletionError: If the file cannot be removed.
    """
    try:
        Path(to_local_path(path)).unlink()
    except (OSError, ValueError) as e:
        msg = f"Cannot delete {path}: {e}"
        raise DeletionError(msg) from e


class DeletionExecutor:
    """Deletes orphan candidates with per-file failure isolation.

    Deletes run sequentially unless ``max_workers`` is above one, in
    which case they are spread over a thread pool. Either way every
    candidate yields exactly one DeletionOutcome and no delete is retried.

    Attributes:
        _delete_op: Callable removing one path; raises on failure.
        _dry_run: If True, report candidates without deleting them.
        _max_workers: Number of concurrent delete threads.
    """

    def __init__(
        self,
        delete_op: DeleteOp | None = None,
        *,
        dry_run: bool = False,
        max_workers: int = 1,
    ) -> None:
        """Initialize the DeletionExecutor.

        Args:
            delete_op: Delete operation; defaults to local file removal.
            dry_run: If True, report what would be deleted without deleting.
            max_workers: Number of concurrent delete threads.

        Raises:
            ValueError: If max_workers is less than 1.
        """
        if max_workers < 1:
            msg = f"max_workers must be at least 1, got {max_workers}"
            raise ValueError(msg)
        self._delete_op = delete_op or delete_local_file
        self._dry_run = dry_run
        self._max_workers = max_workers

    def delete_all(self, candidates: Sequence[str]) -> DeletionReport:
        """Delete every candidate and report per-file outcomes.

        Args:
            candidates: Paths to delete.

        Returns:
            DeletionReport with one outcome per candidate, in input order.
        """
        if not candidates:
            return DeletionReport()

        if self._max_workers == 1 or len(candidates) == 1:
            outcomes = [self._delete_single(path) for path in candidates]
        else:
            workers = min(self._max_workers, len(candidates))
            with ThreadPoolExecutor(
                max_workers=workers,
                thread_name_prefix="orphanctl-delete",
            ) as pool:
                outcomes = list(pool.map(self._delete_single, candidates))

        report = DeletionReport(outcomes=tuple(outcomes))
        if report.has_failures:
            logger.warning(
                "%d of %d deletes failed",
                report.failed_count,
                len(report.outcomes),
            )
        return report

    def _delete_single(self, path: str) -> DeletionOutcome:
        """Delete one candidate, converting any failure into an outcome.

        The delete operation is pluggable, so any exception it raises
        counts as a failure of this path only.

        Args:
            path: Path to delete.

        Returns:
            DeletionOutcome indicating success or failure.
        """
        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return DeletionOutcome(path=path, success=True, dry_run=True)

        try:
            self._delete_op(path)
        except Exception as e:
            logger.warning("Failed to delete file: %s", path, exc_info=True)
            return DeletionOutcome(path=path, success=False, error=str(e) or type(e).__name__)

        logger.debug("Deleted %s", path)
        return DeletionOutcome(path=path, success=True)
