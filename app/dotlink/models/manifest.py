"""Manifest models for declarative link configuration.

This module defines the Pydantic models representing the Link.toml
structure that maps files in the store to their symlink targets.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# How Add derives a store destination and detects collisions
CollisionKeyType = Literal["basename", "path"]


class Settings(BaseModel):
    """Settings section of the manifest.

    Attributes:
        dotlink_root: Store root directory. Falls back to DOTLINK_ROOT if unset.
        collision_key: Store naming policy used by Add. "basename" stores a file
            under its base name, "path" under its path relative to home.
    """

    model_config = ConfigDict(extra="forbid")

    dotlink_root: Annotated[str | None, Field(description="Store root directory")] = None
    collision_key: Annotated[
        CollisionKeyType,
        Field(description="Store naming and collision policy for add"),
    ] = "basename"


class Manifest(BaseModel):
    """Complete manifest mapping store files to link targets.

    Entry keys are store-relative source paths, values are the declared
    target paths exactly as written by the user (``~`` allowed).

    Attributes:
        settings: Settings section.
        entries: Mapping of source path to declared target path.
    """

    model_config = ConfigDict(extra="forbid")

    settings: Annotated[Settings, Field(default_factory=Settings, description="Settings")]
    entries: Annotated[
        dict[str, str],
        Field(default_factory=dict, description="Source path to target path"),
    ]

    @field_validator("entries")
    @classmethod
    def validate_entries(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject empty source or target paths."""
        for source, target in v.items():
            if not source.strip():
                msg = "Entry source path cannot be empty"
                raise ValueError(msg)
            if not target.strip():
                msg = f"Entry target path cannot be empty for {source!r}"
                raise ValueError(msg)
        return v

    @property
    def entry_count(self) -> int:
        """Total number of entries tracked in the manifest."""
        return len(self.entries)
