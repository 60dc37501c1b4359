"""Configuration commands.

Provides commands to show, create and locate the cleanup configuration
file.
"""

from typing import Annotated

import typer

from orphanctl.cleanup.config import (
    CleanupConfig,
    ConfigError,
    config_to_dict,
    load_config,
    save_config,
)
from orphanctl.core.paths import get_config_path
from orphanctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    name="config",
    help="Show and manage the cleanup configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    path = (ctx.obj or {}).get("config_path") or get_config_path()
    try:
        config = load_config(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else "defaults (no config file)"
    console.print(f"[dim]Source: {source}[/dim]")
    for key, value in config_to_dict(config).items():
        console.print(f"[info]{key}[/] = {value!r}")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    path = (ctx.obj or {}).get("config_path") or get_config_path()
    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        saved = save_config(CleanupConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {saved}")


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the config file path."""
    config_path = (ctx.obj or {}).get("config_path") or get_config_path()
    typer.echo(str(config_path))
