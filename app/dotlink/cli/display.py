"""Shared Rich display functions for reconciliation results.

Provides the table builders and summary printers used by the validate,
fix, link, add and unlink commands.
"""

from rich.markup import escape
from rich.table import Table

from dotlink.core.theme import state_style
from dotlink.models.link import (
    AddOutcome,
    AddResult,
    EntryStatus,
    LinkState,
    ReconcileReport,
    UnlinkReport,
)
from dotlink.utils.formatting import (
    console,
    create_table,
    print_info,
    print_success,
    print_warning,
)

_STATE_LABELS: dict[LinkState, str] = {
    LinkState.CORRECT_LINK: "ok",
    LinkState.TARGET_MISSING: "missing",
    LinkState.MISMATCHED_LINK: "mismatch",
    LinkState.CONFLICT: "conflict",
    LinkState.SOURCE_MISSING: "no source",
}


def _describe(status: EntryStatus) -> str:
    """One-line explanation of an entry state."""
    entry = status.entry
    if status.state == LinkState.SOURCE_MISSING:
        return f"Source missing: {entry.source}"
    if status.state == LinkState.CONFLICT:
        return "Exists and is not a symlink"
    if status.state == LinkState.MISMATCHED_LINK:
        return f"Points to {status.actual}, expected {entry.source}"
    if status.state == LinkState.TARGET_MISSING:
        return "Link created" if status.repaired else "Will be created"
    return ""


def create_status_table(statuses: tuple[EntryStatus, ...] | list[EntryStatus], title: str) -> Table:
    """Create a Rich table of entry states.

    Args:
        statuses: Statuses to display.
        title: Table title.

    Returns:
        Rich Table with State, Entry, Target and Details columns.
    """
    table = create_table(title)
    table.add_column("State", width=10)
    table.add_column("Entry", no_wrap=True)
    table.add_column("Target", style="path")
    table.add_column("Details", style="muted")

    for status in statuses:
        style = state_style(status.state)
        label = _STATE_LABELS[status.state]
        if status.repaired:
            label = "linked"
            style = state_style(LinkState.CORRECT_LINK)
        table.add_row(
            f"[{style}]{label}[/{style}]",
            escape(status.entry.key),
            escape(status.entry.target),
            escape(_describe(status)),
        )

    return table


def print_report(report: ReconcileReport, title: str) -> None:
    """Print a validate or fix report followed by its verdict."""
    if not report.statuses:
        print_info("No entries in manifest.")
        return

    console.print(create_status_table(report.statuses, title))

    if report.repaired:
        print_info(f"Created {len(report.repaired)} link(s).")
    if report.ok:
        print_success("All entries validated successfully.")
    else:
        print_warning(f"{len(report.failures)} entry(ies) need manual attention.")


def create_add_table(results: list[AddResult]) -> Table:
    """Create a Rich table of add results.

    Args:
        results: Results to display.

    Returns:
        Rich Table with Status, Path, Store and Details columns.
    """
    table = create_table("Added Entries")
    table.add_column("Status", width=10)
    table.add_column("Path", style="path")
    table.add_column("Store", style="muted")
    table.add_column("Details", style="muted")

    for result in results:
        if result.outcome == AddOutcome.ADDED:
            status, detail = "[added]+added[/added]", "Moved and linked"
        elif result.outcome == AddOutcome.LINK_SKIPPED:
            status, detail = "[info]+added[/info]", "Original path occupied, link skipped"
        elif result.outcome == AddOutcome.COLLISION:
            status, detail = "[warning]skipped[/warning]", "Already exists in config"
        else:
            status, detail = "[warning]skipped[/warning]", "Does not exist"
        table.add_row(
            status,
            escape(str(result.target or result.candidate)),
            escape(str(result.source)) if result.source else "-",
            detail,
        )

    return table


def create_unlink_table(report: UnlinkReport) -> Table:
    """Create a Rich table of unlink results.

    Args:
        report: Unlink report to display.

    Returns:
        Rich Table with Status, Entry, Target and Details columns.
    """
    table = create_table("Unlinked Entries")
    table.add_column("Status", width=10)
    table.add_column("Entry", no_wrap=True)
    table.add_column("Target", style="path")
    table.add_column("Details", style="muted")

    for result in report.results:
        if not result.removed:
            status = "[error]kept[/error]"
        elif result.warnings:
            status = "[warning]-removed[/warning]"
        else:
            status = "[removed]-removed[/removed]"
        details = "; ".join(result.warnings) or ("Restored" if result.restored else "")
        table.add_row(
            status,
            escape(result.entry.key),
            escape(str(result.entry.target_path)),
            escape(details),
        )

    return table
