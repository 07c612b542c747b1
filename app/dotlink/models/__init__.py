"""Data models for dotlink.

This module exports the manifest and link models.
"""

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
from dotlink.models.manifest import CollisionKeyType, Manifest, Settings

__all__ = [
    "AddOutcome",
    "AddResult",
    "CollisionKeyType",
    "EntryStatus",
    "LinkEntry",
    "LinkState",
    "Manifest",
    "ReconcileReport",
    "Settings",
    "UnlinkReport",
    "UnlinkResult",
]
