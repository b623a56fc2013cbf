"""Utility modules for cjsmirror.

This module exports commonly used utility functions.
"""

from cjsmirror.utils.formatting import (
    console,
    create_version_table,
    err_console,
    print_error,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from cjsmirror.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_version_table",
    "err_console",
    "print_error",
    "print_info",
    "print_step",
    "print_success",
    "print_warning",
    "run_command",
]
