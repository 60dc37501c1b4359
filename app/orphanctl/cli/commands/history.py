"""`orphanctl history`: list recorded cleanup runs or inspect one of them."""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from orphanctl.core.state import StateManager
from orphanctl.models.history import RunRecord
from orphanctl.utils.formatting import console, print_error, print_info

app = typer.Typer(
    name="history",
    help="View history of cleanup runs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of runs to show.",
        ),
    ] = 20,
    run_id: Annotated[
        str | None,
        typer.Option(
            "--id",
            help="Show the files of a single run (ID or ID prefix).",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of cleanup runs.

    Examples:
        orphanctl history              # Show last 20 runs
        orphanctl history -n 50        # Show last 50 runs
        orphanctl history --id 3fa2c1  # Files deleted by one run
        orphanctl history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    state = StateManager()

    if run_id is not None:
        record = state.get_record_by_id(run_id)
        if record is None:
            print_error(f"No run found with ID: {run_id}")
            raise typer.Exit(code=1)
        if json_output:
            console.print_json(json.dumps(record.to_dict()))
        else:
            _print_record(record)
        return

    records = state.get_history(limit=limit)
    if not records:
        print_info("No cleanup runs recorded.")
        return

    if json_output:
        console.print_json(json.dumps([r.to_dict() for r in records]))
    else:
        _print_table(records)


def _print_table(records: list[RunRecord]) -> None:
    """One row per run, newest first."""
    table = Table(title="Cleanup History")
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="info")
    table.add_column("Location", style="path", overflow="fold")
    table.add_column("Deleted", justify="right", style="success")
    table.add_column("Failed", justify="right")

    for record in records:
        failed = len(record.failed)
        table.add_row(
            record.id[:8],
            _format_timestamp(record.timestamp),
            record.location,
            str(len(record.deleted)),
            f"[error]{failed}[/]" if failed else "0",
        )

    console.print(table)


def _print_record(record: RunRecord) -> None:
    """Print the files touched by a single run.

    Args:
        record: Run record to display.
    """
    console.print(
        f"[bold_header]Run {record.id}[/] at {_format_timestamp(record.timestamp)} "
        f"on {record.location} (older than {_format_timestamp(record.older_than)})"
    )
    table = Table(show_header=True, header_style="bold_header")
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", overflow="fold")
    table.add_column("Details", style="muted")

    for path in record.deleted:
        table.add_row("[success]OK[/]", path, "")
    for path, error in record.failed.items():
        table.add_row("[error]FAIL[/]", path, error)

    console.print(table)


def _format_timestamp(value: str) -> str:
    """Shorten a stored ISO 8601 timestamp to minute precision."""
    return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")
