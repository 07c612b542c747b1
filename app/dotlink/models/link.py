"""Link domain models for reconciliation.

This module defines the data structures produced while reconciling the
manifest with the filesystem: resolved entries, their observed state,
and the results of the add and unlink actions.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class LinkState(str, Enum):
    """Observed state of a manifest entry.

    Attributes:
        SOURCE_MISSING: The file is missing from the store.
        TARGET_MISSING: Nothing exists at the target; the link can be created.
        CORRECT_LINK: The target is a symlink pointing at the store file.
        MISMATCHED_LINK: The target is a symlink pointing somewhere else.
        CONFLICT: The target exists and is not a symlink.
    """

    SOURCE_MISSING = "source_missing"
    TARGET_MISSING = "target_missing"
    CORRECT_LINK = "ok"
    MISMATCHED_LINK = "mismatch"
    CONFLICT = "conflict"

    @property
    def is_failure(self) -> bool:
        """Whether this state fails validation."""
        return self in (LinkState.SOURCE_MISSING, LinkState.MISMATCHED_LINK, LinkState.CONFLICT)


@dataclass(frozen=True, slots=True)
class LinkEntry:
    """A manifest entry resolved against the store root and home directory.

    Attributes:
        key: Manifest key, verbatim.
        source: Absolute path of the file in the store.
        target: Declared target, verbatim (may start with ``~``).
        target_path: Target with ``~`` expanded and cleaned, not canonicalized.
    """

    key: str
    source: Path
    target: str
    target_path: Path

    @property
    def name(self) -> str:
        """Base name of the store file."""
        return Path(self.key).name or self.key


@dataclass(frozen=True, slots=True)
class EntryStatus:
    """Classification of a single entry.

    Attributes:
        entry: The classified entry.
        state: State observed before any repair.
        actual: Link value read from the target, for symlink states.
        repaired: Whether a missing link was created for this entry.
    """

    entry: LinkEntry
    state: LinkState
    actual: str | None = None
    repaired: bool = False


@dataclass(frozen=True, slots=True)
class ReconcileReport:
    """Aggregate result of a validate or fix run.

    Attributes:
        statuses: One status per manifest entry.
    """

    statuses: tuple[EntryStatus, ...]

    @property
    def ok(self) -> bool:
        """True if no entry is missing its source, mismatched or in conflict."""
        return not self.failures

    @property
    def failures(self) -> tuple[EntryStatus, ...]:
        """Statuses in a failing state."""
        return tuple(s for s in self.statuses if s.state.is_failure)

    @property
    def repaired(self) -> tuple[EntryStatus, ...]:
        """Statuses whose link was created during this run."""
        return tuple(s for s in self.statuses if s.repaired)

    def count(self, state: LinkState) -> int:
        """Number of entries observed in the given state."""
        return sum(1 for s in self.statuses if s.state == state)


class AddOutcome(str, Enum):
    """Outcome of adding a single candidate path.

    Attributes:
        ADDED: Moved into the store and linked back.
        LINK_SKIPPED: Moved into the store; the original location was occupied.
        MISSING: The candidate does not exist.
        COLLISION: The store destination is already tracked.
    """

    ADDED = "added"
    LINK_SKIPPED = "link_skipped"
    MISSING = "missing"
    COLLISION = "collision"

    @property
    def is_added(self) -> bool:
        """Whether the candidate ended up tracked in the manifest."""
        return self in (AddOutcome.ADDED, AddOutcome.LINK_SKIPPED)


@dataclass(frozen=True, slots=True)
class AddResult:
    """Result of adding one candidate.

    Attributes:
        candidate: Path as produced by pattern expansion.
        outcome: What happened to the candidate.
        source: Destination in the store, when one was computed.
        target: Canonical original location, when the candidate existed.
    """

    candidate: Path
    outcome: AddOutcome
    source: Path | None = None
    target: Path | None = None


@dataclass(frozen=True, slots=True)
class UnlinkResult:
    """Result of unlinking one entry.

    Attributes:
        entry: The matched entry.
        link_removed: Whether a symlink was removed at the target.
        restored: Whether the store file was moved back to the target.
        removed: Whether the entry was dropped from the manifest.
        warnings: Problems that need manual attention.
    """

    entry: LinkEntry
    link_removed: bool
    restored: bool
    removed: bool
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class UnlinkReport:
    """Aggregate result of an unlink batch.

    Attributes:
        candidates: Paths the patterns resolved to.
        results: One result per matched entry.
    """

    candidates: tuple[Path, ...] = ()
    results: tuple[UnlinkResult, ...] = ()

    @property
    def matched(self) -> bool:
        """Whether any manifest entry matched the patterns."""
        return bool(self.results)
