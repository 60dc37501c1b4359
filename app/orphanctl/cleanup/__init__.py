"""Orphan file discovery and cleanup.

This package provides the budgeted directory walk, the parallel walk of
deferred subtrees, reconciliation against live paths, and isolated
per-file deletion for table storage locations.
"""

from orphanctl.cleanup.action import RemoveOrphanFiles, remove_orphan_files
from orphanctl.cleanup.config import (
    CleanupConfig,
    ConfigError,
    ConfigParseError,
    load_config,
    save_config,
)
from orphanctl.cleanup.distributed import distributed_walk, partition
from orphanctl.cleanup.errors import (
    DeletionError,
    ListingError,
    LivePathsError,
    OrphanCleanupError,
    PreconditionError,
    TraversalDepthExceededError,
)
from orphanctl.cleanup.listing import DirectoryLister, LocalDirectoryLister
from orphanctl.cleanup.live import load_live_paths
from orphanctl.cleanup.models import (
    BOUNDED_BUDGET,
    UNBOUNDED_BUDGET,
    CleanupResult,
    DeletionOutcome,
    DeletionReport,
    DirEntry,
    TraversalBudget,
    TraversalResult,
)
from orphanctl.cleanup.operator import DeletionExecutor, delete_local_file
from orphanctl.cleanup.reconciler import MatchMode, path_matches, reconcile, select_orphans
from orphanctl.cleanup.traversal import ModifiedBefore, bounded_walk, walk

__all__ = [
    "BOUNDED_BUDGET",
    "UNBOUNDED_BUDGET",
    "CleanupConfig",
    "CleanupResult",
    "ConfigError",
    "ConfigParseError",
    "DeletionError",
    "DeletionExecutor",
    "DeletionOutcome",
    "DeletionReport",
    "DirEntry",
    "DirectoryLister",
    "ListingError",
    "LivePathsError",
    "LocalDirectoryLister",
    "MatchMode",
    "ModifiedBefore",
    "OrphanCleanupError",
    "PreconditionError",
    "RemoveOrphanFiles",
    "TraversalBudget",
    "TraversalDepthExceededError",
    "TraversalResult",
    "bounded_walk",
    "delete_local_file",
    "distributed_walk",
    "load_config",
    "load_live_paths",
    "partition",
    "path_matches",
    "reconcile",
    "remove_orphan_files",
    "save_config",
    "select_orphans",
    "walk",
]
