"""CLI commands for dotlink.

This package contains all subcommand implementations.
"""

from dotlink.cli.commands import add, fix, link, unlink, validate

__all__ = ["add", "fix", "link", "unlink", "validate"]
