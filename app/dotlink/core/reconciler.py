"""Reconciliation engine for dotlink.

This module provides the Reconciler class that compares the entries
declared in a manifest with the links actually present on disk, and
performs the actions that bring the two together.

Each entry is classified by probing its store file and its target:

    SOURCE_MISSING   store file does not exist
    TARGET_MISSING   nothing exists at the target
    CORRECT_LINK     target is a symlink to the store file
    MISMATCHED_LINK  target is a symlink to something else
    CONFLICT         target exists and is not a symlink

Mutating actions persist the manifest themselves: add after every
candidate it tracks, unlink once after the whole batch.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from dotlink.core.context import LinkContext
from dotlink.core.manifest import save_manifest
from dotlink.core.paths import (
    PathError,
    PathNotFoundError,
    RootUnresolvableError,
    canonicalize,
    clean,
    expand_home,
    resolve_root,
)
from dotlink.core.patterns import expand_patterns
from dotlink.models.link import (
    AddOutcome,
    AddResult,
    EntryStatus,
    LinkEntry,
    LinkState,
    ReconcileReport,
    UnlinkReport,
    UnlinkResult,
)
from dotlink.models.manifest import Manifest

logger = logging.getLogger(__name__)


class Reconciler:
    """Reconciles manifest entries with the filesystem.

    The reconciler owns the in-memory manifest for the duration of one
    invocation. It never terminates the process: fatal conditions are
    raised as PathError or ManifestError subclasses, and unexpected I/O
    failures propagate as OSError, aborting the current batch.

    Example:
        >>> context = LinkContext.from_environment(path, manifest)
        >>> report = Reconciler(manifest, context).fix()
        >>> report.ok
        True
    """

    def __init__(self, manifest: Manifest, context: LinkContext) -> None:
        """Initialize the Reconciler.

        Args:
            manifest: Loaded manifest; mutated in place by add and unlink.
            context: Runtime values (manifest path, roots, home directory).
        """
        self._manifest = manifest
        self._context = context

    @property
    def manifest(self) -> Manifest:
        """The manifest being reconciled."""
        return self._manifest

    # =========================================================================
    # Classification
    # =========================================================================

    def entries(self, root: Path | None = None) -> list[LinkEntry]:
        """Resolve every manifest entry, sorted by source key.

        Args:
            root: Store root to resolve relative keys against. If None,
                uses the context root.

        Returns:
            Resolved entries.
        """
        base = root or self._context.root
        return [
            self._resolve_entry(key, target, base)
            for key, target in sorted(self._manifest.entries.items())
        ]

    def classify(self, entry: LinkEntry) -> EntryStatus:
        """Observe the filesystem state of one entry without changing it.

        Args:
            entry: The entry to classify.

        Returns:
            EntryStatus carrying the observed state.
        """
        if not entry.source.exists():
            return EntryStatus(entry=entry, state=LinkState.SOURCE_MISSING)

        target = entry.target_path
        if target.is_symlink():
            actual = str(target.readlink())
            state = (
                LinkState.CORRECT_LINK if actual == str(entry.source) else LinkState.MISMATCHED_LINK
            )
            return EntryStatus(entry=entry, state=state, actual=actual)

        if target.exists():
            return EntryStatus(entry=entry, state=LinkState.CONFLICT)
        return EntryStatus(entry=entry, state=LinkState.TARGET_MISSING)

    # =========================================================================
    # Actions
    # =========================================================================

    def validate(self) -> ReconcileReport:
        """Classify every entry. Nothing on disk or in the manifest changes.

        Returns:
            Report whose ``ok`` is False if any entry is missing its source,
            points elsewhere, or conflicts with an existing file.
        """
        return ReconcileReport(statuses=self._reconcile(self.entries(), repair=False))

    def fix(self) -> ReconcileReport:
        """Create every missing link and report all other states.

        Mismatched links and conflicts are never overwritten. The report
        reflects the states observed before any link was created.

        Returns:
            Report of the run; repaired entries have ``repaired`` set.
        """
        return ReconcileReport(statuses=self._reconcile(self.entries(), repair=True))

    def link(self, name: str) -> list[EntryStatus]:
        """Create the link for the entries matching a single name.

        An entry matches when the base name of its target or of its store
        file equals ``name``.

        Args:
            name: Base name to look up, e.g. ".bashrc" or "bashrc".

        Returns:
            Statuses of the matching entries, empty if nothing matched.
        """
        matches = [e for e in self.entries() if name in (e.target_path.name, e.name)]
        if not matches:
            logger.debug("No entry named %s", name)
        return list(self._reconcile(matches, repair=True))

    def add(self, patterns: Iterable[str], root: Path | None = None) -> list[AddResult]:
        """Move matching files into the store and link them back.

        The manifest is saved after every candidate that gets tracked, so
        an I/O failure midway leaves it reflecting all earlier candidates.
        There is no rollback.

        Args:
            patterns: Glob patterns naming the files to add.
            root: Store root overriding the configured one.

        Returns:
            One result per candidate path.

        Raises:
            RootUnresolvableError: If the effective root does not exist.
        """
        if root is not None:
            effective_root = resolve_root(root, None, self._context.home)
            tracked_root = self._configured_root()
        else:
            effective_root = self._context.root
            tracked_root = effective_root

        return [
            self._add_one(candidate, effective_root, tracked_root)
            for candidate in expand_patterns(patterns, self._context.home)
        ]

    def unlink(self, patterns: Iterable[str]) -> UnlinkReport:
        """Move tracked files back out of the store and forget them.

        An entry matches when its store file or its target is among the
        paths the patterns resolve to. The manifest is saved once, after
        the whole batch.

        Args:
            patterns: Glob patterns naming store files or link targets.

        Returns:
            Report with one result per matched entry.
        """
        candidates = expand_patterns(patterns, self._context.home)
        wanted: set[Path] = set()
        for candidate in candidates:
            try:
                wanted.add(canonicalize(candidate))
            except PathNotFoundError:
                # Dangling link
                wanted.add(clean(candidate.absolute()))

        if not wanted:
            logger.debug("No paths to unlink")
            return UnlinkReport()

        results: list[UnlinkResult] = []
        for entry in self.entries():
            if entry.source in wanted or entry.target_path in wanted:
                results.append(self._unlink_one(entry))

        removed = [r.entry.key for r in results if r.removed]
        if removed:
            for key in removed:
                del self._manifest.entries[key]
            self._persist()

        return UnlinkReport(candidates=tuple(candidates), results=tuple(results))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _resolve_entry(self, key: str, target: str, root: Path) -> LinkEntry:
        return LinkEntry(
            key=key,
            source=root / clean(key),
            target=target,
            target_path=clean(expand_home(target, self._context.home)),
        )

    def _reconcile(self, entries: list[LinkEntry], repair: bool) -> tuple[EntryStatus, ...]:
        statuses: list[EntryStatus] = []
        for entry in entries:
            status = self.classify(entry)
            logger.debug("%s -> %s: %s", entry.key, entry.target, status.state.value)
            if repair and status.state == LinkState.TARGET_MISSING:
                self._create_link(entry.target_path, entry.source)
                status = replace(status, repaired=True)
            statuses.append(status)
        return tuple(statuses)

    def _add_one(self, candidate: Path, root: Path, tracked_root: Path | None) -> AddResult:
        """Track a single candidate.

        Args:
            candidate: Path produced by pattern expansion.
            root: Store root the file is moved into.
            tracked_root: Root that relative manifest keys resolve against,
                None if the configured root is unusable.
        """
        if not candidate.exists():
            logger.warning("Target %s does not exist", candidate)
            return AddResult(candidate=candidate, outcome=AddOutcome.MISSING)

        original = clean(canonicalize(candidate))
        dest = root / self._store_name(original)

        tracked = {e.source for e in self.entries(tracked_root or root)}
        if dest in tracked or dest.exists() or dest.is_symlink():
            logger.warning("Target entry for %s already exists in config", dest)
            return AddResult(
                candidate=candidate,
                outcome=AddOutcome.COLLISION,
                source=dest,
                target=original,
            )

        logger.info("Moving %s -> %s", original, dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        original.rename(dest)

        self._manifest.entries[self._store_key(dest, tracked_root)] = str(original)

        if original.exists() or original.is_symlink():
            logger.info("Symlink target %s already exists, skipping", original)
            outcome = AddOutcome.LINK_SKIPPED
        else:
            self._create_link(original, dest)
            outcome = AddOutcome.ADDED

        self._persist()
        return AddResult(candidate=candidate, outcome=outcome, source=dest, target=original)

    def _unlink_one(self, entry: LinkEntry) -> UnlinkResult:
        target = entry.target_path
        warnings: list[str] = []
        link_removed = False

        if target.is_symlink():
            logger.info("Removing symlink at %s", target)
            target.unlink()
            link_removed = True
        elif target.exists():
            # Keep the entry: moving the store file here would overwrite it
            warnings.append(f"{target} is not a symlink but is the target for this entry")
            return UnlinkResult(
                entry=entry,
                link_removed=False,
                restored=False,
                removed=False,
                warnings=tuple(warnings),
            )

        restored = False
        if entry.source.exists() or entry.source.is_symlink():
            logger.info("Moving %s -> %s", entry.source, target)
            target.parent.mkdir(parents=True, exist_ok=True)
            entry.source.rename(target)
            restored = True
        else:
            warnings.append(f"Source file {entry.source} does not exist in the store")

        return UnlinkResult(
            entry=entry,
            link_removed=link_removed,
            restored=restored,
            removed=True,
            warnings=tuple(warnings),
        )

    def _create_link(self, link: Path, source: Path) -> None:
        logger.info("Linking %s -> %s", source, link)
        link.parent.mkdir(parents=True, exist_ok=True)
        link.symlink_to(source)

    def _store_name(self, original: Path) -> Path:
        """Path of a new store file relative to the root, per collision policy."""
        if self._manifest.settings.collision_key == "path":
            home = self._canonical_home()
            if home is not None and original.is_relative_to(home) and original != home:
                return original.relative_to(home)
            return original.relative_to(original.anchor)

        if not original.name:
            raise PathError(f"Could not determine file name for {original}")
        return Path(original.name)

    def _store_key(self, dest: Path, tracked_root: Path | None) -> str:
        if tracked_root is not None and dest.is_relative_to(tracked_root):
            return dest.relative_to(tracked_root).as_posix()
        return str(dest)

    def _configured_root(self) -> Path | None:
        try:
            return self._context.root
        except RootUnresolvableError:
            logger.debug("No configured root; new entries get absolute keys")
            return None

    def _canonical_home(self) -> Path | None:
        home = self._context.home
        if home is None:
            return None
        try:
            return canonicalize(home)
        except PathNotFoundError:
            return clean(home)

    def _persist(self) -> None:
        logger.debug("Saving manifest to %s", self._context.manifest_path)
        save_manifest(self._manifest, self._context.manifest_path)
