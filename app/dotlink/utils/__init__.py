"""Utility modules for dotlink.

This module exports commonly used utility functions.
"""

from dotlink.utils.formatting import (
    console,
    create_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from dotlink.utils.log import setup_logging

__all__ = [
    "console",
    "create_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
