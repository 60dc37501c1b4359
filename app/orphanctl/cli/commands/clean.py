"""Clean command for deleting orphan files.

Finds orphan files under a storage location, asks for confirmation, and
deletes them. Individual delete failures are reported but do not stop
the run; successful runs are recorded to the history file.
"""

from typing import Annotated

import typer

from orphanctl.cleanup.errors import OrphanCleanupError
from orphanctl.cli.display import (
    create_orphans_table,
    create_results_table,
    print_results_summary,
    print_traversal_summary,
)
from orphanctl.cli.types import (
    LiveOpt,
    LocationArg,
    MatchModeOpt,
    OlderThanDaysOpt,
    OlderThanOpt,
    ParallelismOpt,
    build_action,
    get_config,
)
from orphanctl.core.state import StateManager
from orphanctl.models.history import create_run_record
from orphanctl.utils.formatting import (
    console,
    count_noun,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def clean(
    ctx: typer.Context,
    location: LocationArg,
    live: LiveOpt,
    older_than_days: OlderThanDaysOpt = None,
    older_than: OlderThanOpt = None,
    parallelism: ParallelismOpt = None,
    match_mode: MatchModeOpt = None,
    delete_workers: Annotated[
        int | None,
        typer.Option("--delete-workers", min=1, help="Concurrent delete threads."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete orphan files older than the retention period.

    Examples:
        orphanctl clean /warehouse/db/events --live live.txt --dry-run
        orphanctl clean /warehouse/db/events --live live.txt -d 7 --yes
    """
    config = get_config(
        ctx,
        older_than_days=older_than_days,
        parallelism=parallelism,
        match_mode=match_mode,
        delete_workers=delete_workers,
    )
    action = build_action(config, location, live, older_than).dry_run(dry_run)

    try:
        planned = action.plan()
    except OrphanCleanupError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not planned.orphans:
        print_success("No orphan files found.")
        return

    console.print(create_orphans_table(list(planned.orphans), dry_run=dry_run))
    print_traversal_summary(planned)

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with deleting {count_noun(len(planned.orphans), 'file')}?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    result = action.delete(planned)

    console.print(create_results_table(result.report))
    print_results_summary(result.report)

    # Record to history (only actual deletions, not dry-run)
    if not dry_run and result.report.outcomes:
        try:
            record = create_run_record(
                result,
                metadata={"command": "orphanctl clean", "match_mode": config.match_mode.value},
            )
            StateManager().record_run(record)
            print_info("Run recorded to history.")
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    if result.report.has_failures:
        raise typer.Exit(code=1)
