"""Fix command implementation.

Creates missing links and reports every entry that needs manual attention.
"""

import typer

from dotlink.cli.display import print_report
from dotlink.cli.session import fatal_errors, open_reconciler
from dotlink.utils.formatting import print_info


def fix(ctx: typer.Context) -> None:
    """Create missing links and validate existing ones.

    Mismatched links and files occupying a target are reported and never
    overwritten.
    """
    print_info("Checking and fixing links...")
    with fatal_errors():
        report = open_reconciler(ctx).fix()

    print_report(report, "Link Status")
