"""CLI commands for orphanctl.

This package contains all subcommand implementations.
"""

from orphanctl.cli.commands import clean, config, history, scan

__all__ = ["clean", "config", "history", "scan"]
