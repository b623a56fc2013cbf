"""CLI commands for cjsmirror.

This package contains all subcommand implementations.
"""

from cjsmirror.cli.commands import config, pending, run

__all__ = ["config", "pending", "run"]
