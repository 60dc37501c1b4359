"""Reconciliation of listed files against live paths.

A listed file is live when some live path matches it. The default
``contains`` rule accepts a live path whose final component equals the
file's and whose full string occurs inside the file's path, which
tolerates live paths recorded without the scheme and authority the
listing adds. It can miss matches whose recorded form differs in other
ways, and can in rare cases accept an unrelated live path that shares a
file name. The ``exact`` rule compares canonical paths instead.
"""

import logging
import posixpath
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from orphanctl.cleanup.models import DirEntry, file_name, split_uri

logger = logging.getLogger(__name__)


class MatchMode(str, Enum):
    """How a listed path is matched against live paths.

    Attributes:
        CONTAINS: Same file name and the live path is a substring.
        EXACT: Same canonical path (scheme and authority ignored).
    """

    CONTAINS = "contains"
    EXACT = "exact"


def canonical_path(path: str) -> str:
    """Normalize a path for exact comparison.

    Drops any scheme and authority and collapses redundant separators
    and "." components.

    Args:
        path: Plain path or URI.

    Returns:
        Normalized path component.
    """
    _, raw = split_uri(path)
    return posixpath.normpath(raw) if raw else raw


def path_matches(actual: str, live: str, mode: MatchMode = MatchMode.CONTAINS) -> bool:
    """Check whether a listed path corresponds to a live path.

    Args:
        actual: Path found by listing the storage location.
        live: Path referenced by table metadata.
        mode: Matching rule to apply.

    Returns:
        True if ``live`` refers to ``actual``.
    """
    if mode == MatchMode.EXACT:
        return canonical_path(actual) == canonical_path(live)
    return file_name(actual) == file_name(live) and live in actual


def reconcile(
    actual_paths: Iterable[str],
    live_paths: Iterable[str],
    mode: MatchMode = MatchMode.CONTAINS,
) -> list[str]:
    """Return every listed path with no matching live path.

    Live paths are indexed by file name (or by canonical path in exact
    mode), so each listed path is only compared with live paths that
    can possibly match it.

    Args:
        actual_paths: Paths found by listing the storage location.
        live_paths: Paths referenced by valid table metadata.
        mode: Matching rule to apply.

    Returns:
        Unmatched listed paths, in input order.
    """
    if mode == MatchMode.EXACT:
        live_canonical = {canonical_path(v) for v in live_paths}
        return [a for a in actual_paths if canonical_path(a) not in live_canonical]

    by_name: dict[str, list[str]] = defaultdict(list)
    for live in live_paths:
        by_name[file_name(live)].append(live)

    orphans: list[str] = []
    for actual in actual_paths:
        candidates = by_name.get(file_name(actual), [])
        if not any(live in actual for live in candidates):
            orphans.append(actual)
    return orphans


def select_orphans(
    entries: Iterable[DirEntry],
    live_paths: Iterable[str],
    older_than: datetime,
    mode: MatchMode = MatchMode.CONTAINS,
) -> list[DirEntry]:
    """Select orphan candidates from listed files.

    A file is an orphan candidate only if it was modified strictly
    before ``older_than`` AND no live path matches it. The age check is
    repeated here even though traversal already applies it.

    Args:
        entries: Files found by traversal.
        live_paths: Paths referenced by valid table metadata.
        older_than: Retention cutoff.
        mode: Matching rule to apply.

    Returns:
        Orphan candidates, in input order.
    """
    aged: dict[str, DirEntry] = {}
    for entry in entries:
        if entry.is_directory or entry.modified_at >= older_than:
            continue
        aged[entry.path] = entry

    orphan_paths = reconcile(aged.keys(), live_paths, mode)
    logger.debug("%d of %d aged files are orphans", len(orphan_paths), len(aged))
    return [aged[path] for path in orphan_paths]
