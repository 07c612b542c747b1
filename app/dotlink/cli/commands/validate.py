"""Validate command implementation.

Reports the state of every manifest entry without touching the filesystem.
"""

import typer

from dotlink.cli.display import print_report
from dotlink.cli.session import fatal_errors, open_reconciler


def validate(ctx: typer.Context) -> None:
    """Check every entry and report problems. Changes nothing.

    Examples:
        dotlink validate
        dotlink -c ~/dotfiles/Link.toml validate
    """
    with fatal_errors():
        report = open_reconciler(ctx).validate()

    print_report(report, "Link Status")
