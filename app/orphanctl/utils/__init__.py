"""Utility modules for orphanctl.

This module exports commonly used utility functions.
"""

from orphanctl.utils.formatting import (
    console,
    count_noun,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "count_noun",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
