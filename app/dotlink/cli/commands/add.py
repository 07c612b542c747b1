"""Add command implementation.

Moves files into the store, links them back and records them in the manifest.
"""

from pathlib import Path
from typing import Annotated

import typer

from dotlink.cli.display import create_add_table
from dotlink.cli.session import fatal_errors, open_reconciler
from dotlink.utils.formatting import console, print_info, print_success


def add(
    ctx: typer.Context,
    patterns: Annotated[
        list[str],
        typer.Argument(help="Files or glob patterns to add to the store."),
    ],
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Store root to use instead of the configured one.",
        ),
    ] = None,
) -> None:
    """Add the specified files to the store.

    Each file is moved into the store root and replaced by a symlink. The
    manifest is saved after every file.

    Examples:
        dotlink add ~/.vimrc
        dotlink add '~/.config/fish/*.fish' --root ~/dotfiles
    """
    with fatal_errors():
        results = open_reconciler(ctx).add(patterns, root=root)

    if not results:
        print_info("No files matched the given patterns.")
        return

    console.print(create_add_table(results))
    added = sum(1 for r in results if r.outcome.is_added)
    if added:
        print_success(f"Added {added} file(s) to the store.")
    else:
        print_info("Nothing was added.")
