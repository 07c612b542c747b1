"""Unlink command implementation.

Moves tracked files back out of the store and removes them from the manifest.
"""

from typing import Annotated

import typer
from rich.markup import escape

from dotlink.cli.display import create_unlink_table
from dotlink.cli.session import fatal_errors, open_reconciler
from dotlink.utils.formatting import console, print_info, print_success, print_warning


def unlink(
    ctx: typer.Context,
    patterns: Annotated[
        list[str],
        typer.Argument(help="Link targets or store files to unlink (globs allowed)."),
    ],
) -> None:
    """Unlink entries and restore the files to their targets.

    Examples:
        dotlink unlink ~/.vimrc
    """
    with fatal_errors():
        report = open_reconciler(ctx).unlink(patterns)

    if not report.candidates:
        print_info("No valid targets found to unlink.")
        return
    if not report.matched:
        print_info("No matching entries found in config for the given paths.")
        return

    console.print(create_unlink_table(report))
    kept = [r for r in report.results if not r.removed]
    for result in kept:
        entry = result.entry
        print_warning(
            f"{escape(entry.key)} kept in config; resolve {escape(entry.target)} manually."
        )
    if len(kept) < len(report.results):
        print_success("Unlink operation complete.")
