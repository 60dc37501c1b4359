"""Scan command for finding orphan files.

Lists a storage location and reports files that no live path refers
to, without deleting anything.
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from orphanctl.cleanup.errors import OrphanCleanupError
from orphanctl.cleanup.models import DirEntry
from orphanctl.cli.display import create_orphans_table, print_traversal_summary
from orphanctl.cli.types import (
    LiveOpt,
    LocationArg,
    MatchModeOpt,
    OlderThanDaysOpt,
    OlderThanOpt,
    OutputFormat,
    ParallelismOpt,
    build_action,
    get_config,
)
from orphanctl.utils.formatting import (
    console,
    count_noun,
    print_error,
    print_info,
    print_success,
)


def scan(
    ctx: typer.Context,
    location: LocationArg,
    live: LiveOpt,
    older_than_days: OlderThanDaysOpt = None,
    older_than: OlderThanOpt = None,
    parallelism: ParallelismOpt = None,
    match_mode: MatchModeOpt = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export results to JSON file.",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            help="Limit number of results.",
        ),
    ] = None,
) -> None:
    """Scan a storage location for orphan files.

    Examples:
        orphanctl scan /warehouse/db/events --live live.txt
        orphanctl scan file:///data/t --live live.json -d 7 --format json
    """
    config = get_config(
        ctx,
        older_than_days=older_than_days,
        parallelism=parallelism,
        match_mode=match_mode,
    )
    action = build_action(config, location, live, older_than)

    try:
        result = action.plan()
    except OrphanCleanupError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    orphans = list(result.orphans)

    if export_path is not None:
        _export_results(orphans, export_path)  # Export ALL, not limited

    if not orphans:
        if output_format == OutputFormat.JSON:
            console.print_json(json.dumps([]))
        else:
            print_success("No orphan files found.")
        return

    display_orphans = orphans[:limit] if limit else orphans

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(_to_records(display_orphans)))
        return

    console.print(create_orphans_table(display_orphans))
    print_traversal_summary(result)
    console.print(f"[dim]Found {count_noun(len(orphans), 'orphan file')}[/dim]")
    if limit and len(display_orphans) < len(orphans):
        console.print(
            f"[dim](showing {len(display_orphans)} of {len(orphans)}, limited to {limit})[/dim]"
        )


def _to_records(orphans: list[DirEntry]) -> list[dict[str, Any]]:
    """Convert orphan entries to JSON-serializable records."""
    return [{"path": e.path, "modified_at": e.modified_at.isoformat()} for e in orphans]


def _export_results(orphans: list[DirEntry], export_path: Path) -> None:
    """Export orphan results to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(_to_records(orphans), indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
