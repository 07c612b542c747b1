"""Link command implementation.

Creates the symlink for a single entry looked up by name.
"""

from typing import Annotated

import typer
from rich.markup import escape

from dotlink.cli.display import create_status_table
from dotlink.cli.session import fatal_errors, open_reconciler
from dotlink.models.link import LinkState
from dotlink.utils.formatting import console, print_error, print_success, print_warning


def link(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Base name of the target or store file, e.g. .bashrc."),
    ],
) -> None:
    """Create the link for one entry.

    Examples:
        dotlink link .bashrc
    """
    with fatal_errors():
        statuses = open_reconciler(ctx).link(name)

    if not statuses:
        print_error(f"No entry named {escape(name)}")
        raise typer.Exit(code=1)

    console.print(create_status_table(statuses, f"Link: {escape(name)}"))
    for status in statuses:
        if status.repaired:
            print_success(f"Created link {escape(status.entry.target)}")
        elif status.state.is_failure:
            print_warning(f"{escape(status.entry.key)} needs manual attention")
        elif status.state == LinkState.CORRECT_LINK:
            print_success(f"{escape(status.entry.target)} is already linked")
