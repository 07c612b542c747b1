"""CLI package for dotlink.

This package contains the Typer application and all subcommands.
"""

from dotlink.cli.main import app

__all__ = ["app"]
