"""Exception hierarchy for orphan file cleanup.

Fatal errors (listing failures, exceeded traversal depth, failed
preconditions) abort a run. Deletion errors are isolated per file and
reported instead of raised across the batch.
"""


class OrphanCleanupError(Exception):
    """Base exception for orphan cleanup errors."""


class ListingError(OrphanCleanupError):
    """Raised when a directory cannot be listed.

    A partial listing makes the discovered file set unsound, so this
    always aborts the whole run.
    """


class TraversalDepthExceededError(OrphanCleanupError):
    """Raised when a worker traversal reaches the maximum depth.

    Usually means an unexpectedly deep tree or a symlink cycle.
    """


class DeletionError(OrphanCleanupError):
    """Raised by a delete operation that could not remove a file."""


class PreconditionError(OrphanCleanupError):
    """Raised when a cleanup run is not permitted to start."""


class LivePathsError(PreconditionError):
    """Raised when the live path set cannot be loaded."""
