"""CLI package for orphanctl.

This package contains the Typer application and all subcommands.
"""

from orphanctl.cli.main import app

__all__ = ["app"]
