"""Rich console output helpers.

Results go to ``console`` (stdout). Warnings, errors and log records go
to ``err_console`` (stderr), so ``--format json`` output stays parseable.
"""

import sys

from rich.console import Console

from orphanctl.core.theme import get_theme


def _make_console(stderr: bool = False) -> Console:
    """Create a themed console.

    Interactive terminals get truecolor so hex theme colors render
    exactly; redirected output is left uncolored.
    """
    stream = sys.stderr if stderr else sys.stdout
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def count_noun(count: int, singular: str, plural: str | None = None) -> str:
    """Format a count with the matching noun form.

    >>> count_noun(1, "file")
    '1 file'
    >>> count_noun(3, "directory", "directories")
    '3 directories'
    """
    noun = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {noun}"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[error]Error:[/] {message}")
