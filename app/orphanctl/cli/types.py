"""Shared options and helpers for CLI commands.

This module provides the option types and the run builder used by both
the scan and clean commands to avoid code duplication.
"""

from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from orphanctl.cleanup.action import RemoveOrphanFiles
from orphanctl.cleanup.config import CleanupConfig, ConfigError, load_config
from orphanctl.cleanup.errors import LivePathsError
from orphanctl.cleanup.live import load_live_paths
from orphanctl.cleanup.reconciler import MatchMode
from orphanctl.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for orphan listings."""

    TABLE = "table"
    JSON = "json"


LocationArg = Annotated[
    str,
    typer.Argument(help="Root storage location to scan (path or file: URI)."),
]
LiveOpt = Annotated[
    list[Path],
    typer.Option(
        "--live",
        "-L",
        help="File listing live paths (JSON or one path per line). Repeatable.",
    ),
]
OlderThanDaysOpt = Annotated[
    float | None,
    typer.Option(
        "--older-than-days",
        "-d",
        min=0,
        help="Only consider files older than this many days.",
    ),
]
OlderThanOpt = Annotated[
    str | None,
    typer.Option(
        "--older-than",
        help="Only consider files modified before this ISO timestamp (UTC if no offset).",
    ),
]
ParallelismOpt = Annotated[
    int | None,
    typer.Option("--parallelism", "-p", min=1, help="Maximum listing workers."),
]
MatchModeOpt = Annotated[
    MatchMode | None,
    typer.Option("--match", help="Live path matching rule.", case_sensitive=False),
]


def get_config(ctx: typer.Context, **overrides: Any) -> CleanupConfig:
    """Load the configuration and apply per-run overrides.

    Args:
        ctx: Typer context carrying the global --config path.
        overrides: Field values to override; None values are ignored.

    Returns:
        Validated CleanupConfig.

    Raises:
        typer.Exit: If the configuration is invalid.
    """
    obj = ctx.obj or {}
    try:
        config = load_config(obj.get("config_path"))
        updates = {k: v for k, v in overrides.items() if v is not None}
        if updates:
            config = CleanupConfig.model_validate({**config.model_dump(), **updates})
    except (ConfigError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return config


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp given on the command line.

    Args:
        value: ISO 8601 date or datetime.

    Returns:
        Timezone-aware datetime; naive input is taken as UTC.

    Raises:
        typer.Exit: If the value cannot be parsed.
    """
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        print_error(f"Invalid timestamp: {value}. Use ISO 8601, e.g. 2026-01-31T12:00:00.")
        raise typer.Exit(code=1) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def build_action(
    config: CleanupConfig,
    location: str,
    live_files: list[Path],
    older_than: str | None = None,
) -> RemoveOrphanFiles:
    """Create a configured RemoveOrphanFiles action.

    Args:
        config: Effective configuration for the run.
        location: Root storage location.
        live_files: Files holding the live path set.
        older_than: Optional explicit cutoff overriding the retention period.

    Returns:
        Action ready to plan or execute.

    Raises:
        typer.Exit: If the live path files cannot be loaded.
    """
    try:
        live = load_live_paths(*live_files)
    except LivePathsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    action = RemoveOrphanFiles(location, live, config=config)
    if older_than is not None:
        action.older_than(parse_timestamp(older_than))
    return action
