"""Shared Rich display functions for orphan listings and results.

Provides table builders and summary printers used by the scan and
clean commands.
"""

from rich.table import Table

from orphanctl.cleanup.models import CleanupResult, DeletionReport, DirEntry
from orphanctl.utils.formatting import (
    console,
    count_noun,
    print_info,
    print_success,
    print_warning,
)


def create_orphans_table(orphans: list[DirEntry], dry_run: bool = False) -> Table:
    """Create a Rich table listing orphan candidates.

    Args:
        orphans: Orphan candidates to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table with Path and Modified columns.
    """
    title = "Orphan Files (Dry Run)" if dry_run else "Orphan Files"
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="path", overflow="fold")
    table.add_column("Modified (UTC)", style="muted", width=17)

    for entry in orphans:
        table.add_row(entry.path, entry.modified_at.strftime("%Y-%m-%d %H:%M"))

    return table


def create_results_table(report: DeletionReport) -> Table:
    """Create a Rich table displaying per-file deletion outcomes.

    Args:
        report: Deletion report to display.

    Returns:
        Rich Table with Status, Path and Details columns.
    """
    table = Table(
        title="Deletion Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", overflow="fold")
    table.add_column("Details")

    for outcome in report.outcomes:
        if outcome.dry_run:
            status = "[info]dry-run[/]"
            detail = "Would delete"
        elif outcome.success:
            status = "[success]OK[/]"
            detail = ""
        else:
            status = "[error]FAIL[/]"
            detail = outcome.error or "Unknown error"
        table.add_row(status, outcome.path, f"[muted]{detail}[/muted]")

    return table


def print_traversal_summary(result: CleanupResult) -> None:
    """Print how the listing work was split and what it found.

    Args:
        result: Planned or executed cleanup result.
    """
    found = count_noun(result.scanned_files, "file")
    deferred = count_noun(result.deferred_dirs, "deferred directory", "deferred directories")
    console.print(
        f"\n[dim]Scanned {result.location}: {found} older than "
        f"{result.older_than:%Y-%m-%d %H:%M} "
        f"({result.coordinator_files} listed directly, {result.worker_files} from {deferred})[/dim]"
    )


def print_results_summary(report: DeletionReport) -> None:
    """Print a summary of deletion outcomes.

    Args:
        report: Deletion report to summarize.
    """
    dry_count = sum(1 for o in report.outcomes if o.dry_run)
    success_count = len(report.deleted)

    if dry_count:
        print_info(f"Dry-run: {count_noun(dry_count, 'file')} would be deleted.")
    elif report.has_failures:
        print_warning(f"{success_count} deleted, {report.failed_count} failed")
    else:
        print_success(f"Deleted {count_noun(success_count, 'orphan file')}.")
