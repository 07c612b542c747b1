"""Manifest file I/O operations.

This module provides functions for locating, loading and saving
Link.toml manifests in TOML format with validation using Pydantic models.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from dotlink.core.paths import MANIFEST_FILENAME, ROOT_ENV_VAR
from dotlink.models.manifest import Manifest, Settings


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when manifest file is not found."""


class ManifestParseError(ManifestError):
    """Raised when manifest file cannot be parsed."""


class ManifestValidationError(ManifestError):
    """Raised when manifest content is invalid."""


def find_manifest(
    explicit: Path | None = None,
    cwd: Path | None = None,
    env_root: str | None = None,
) -> Path:
    """Locate the manifest file.

    Lookup order:
    1. The explicitly given path.
    2. Link.toml in the working directory.
    3. Link.toml in the directory named by DOTLINK_ROOT.

    Args:
        explicit: Path given on the command line, if any.
        cwd: Working directory. If None, uses the process working directory.
        env_root: Value of DOTLINK_ROOT, if set.

    Returns:
        Path to an existing manifest file.

    Raises:
        ManifestNotFoundError: If no manifest exists at any candidate location.
    """
    first = explicit or (cwd or Path.cwd()) / MANIFEST_FILENAME
    if first.exists():
        return first

    if not env_root:
        raise ManifestNotFoundError(f"Manifest not found at {first} and {ROOT_ENV_VAR} is not set")

    alternative = Path(env_root).expanduser() / MANIFEST_FILENAME
    if alternative.exists():
        return alternative

    raise ManifestNotFoundError(f"Manifest not found at {first} or {alternative}")


def load_manifest(path: Path) -> Manifest:
    """Load and validate a manifest from a TOML file.

    Args:
        path: Path to the manifest file.

    Returns:
        Validated Manifest object.

    Raises:
        ManifestNotFoundError: If the manifest file doesn't exist.
        ManifestParseError: If the TOML syntax is invalid.
        ManifestValidationError: If the content doesn't match the schema.
    """
    if not path.exists():
        raise ManifestNotFoundError(f"Manifest not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read manifest: {e}") from e

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise ManifestValidationError(f"Invalid manifest content: {e}") from e


def save_manifest(manifest: Manifest, path: Path) -> Path:
    """Save a manifest to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.
    The temporary file is cleaned up on failure.

    Args:
        manifest: The Manifest object to save.
        path: Path to save the manifest.

    Returns:
        Path where the manifest was saved.

    Raises:
        ManifestError: If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _manifest_to_dict(manifest)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ManifestError(f"Failed to write manifest: {e}") from e

    return path


def _manifest_to_dict(manifest: Manifest) -> dict[str, Any]:
    """Convert a Manifest to a dictionary suitable for TOML serialization.

    Settings left at their defaults are omitted so hand-written manifests
    stay small. Entries are sorted by source path and written verbatim.

    Args:
        manifest: The Manifest object to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    settings = manifest.settings
    defaults = Settings()
    return {
        "settings": {
            **({"dotlink_root": settings.dotlink_root} if settings.dotlink_root else {}),
            **(
                {"collision_key": settings.collision_key}
                if settings.collision_key != defaults.collision_key
                else {}
            ),
        },
        "entries": dict(sorted(manifest.entries.items())),
    }
