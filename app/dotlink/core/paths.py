"""Path resolution for dotlink.

This module provides the pure path helpers the reconciler relies on:
lexical cleaning, home-directory expansion, canonicalization and store
root resolution. It also exposes the fixed names dotlink looks for on
disk and in the environment.
"""

import os
from pathlib import Path

# Manifest file searched in the working directory and the store root
MANIFEST_FILENAME = "Link.toml"

# Environment variable naming the store root
ROOT_ENV_VAR = "DOTLINK_ROOT"

HOME_ENV_VAR = "HOME"

HOME_MARKER = "~"


class PathError(Exception):
    """Base exception for path resolution errors."""


class HomeUnresolvableError(PathError):
    """Raised when a path needs tilde expansion but no home is known."""


class PathNotFoundError(PathError):
    """Raised when a path cannot be canonicalized because it does not exist."""


class RootUnresolvableError(PathError):
    """Raised when the store root is unset or is not an existing directory."""


def clean(path: str | Path) -> Path:
    """Normalize a path lexically without touching the filesystem.

    Collapses redundant separators and resolves ``.`` and ``..`` segments.
    A leading ``~`` is kept as-is.

    Args:
        path: Path to normalize.

    Returns:
        The normalized path.
    """
    return Path(os.path.normpath(os.fspath(path)))


def expand_home(path: str | Path, home: Path | None) -> Path:
    """Replace a leading ``~`` with the given home directory.

    Args:
        path: Path that may start with ``~``.
        home: Home directory to substitute, or None if unknown.

    Returns:
        The expanded path, or the path unchanged when it has no marker.

    Raises:
        HomeUnresolvableError: If the path starts with ``~`` and home is None.
    """
    text = os.fspath(path)
    if text != HOME_MARKER and not text.startswith(HOME_MARKER + "/"):
        return Path(text)

    if home is None:
        msg = f"Cannot expand '~' in {text}: {HOME_ENV_VAR} is not set"
        raise HomeUnresolvableError(msg)

    return Path(home) / text[2:] if len(text) > 1 else Path(home)


def canonicalize(path: str | Path) -> Path:
    """Resolve symlinks and relative segments against the filesystem.

    Args:
        path: Path to resolve.

    Returns:
        The absolute canonical path.

    Raises:
        PathNotFoundError: If the path does not exist.
    """
    try:
        return Path(path).resolve(strict=True)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise PathNotFoundError(f"Path does not exist: {path}") from e
    except (OSError, RuntimeError) as e:
        # Symlink loop: RuntimeError before Python 3.13, ELOOP after
        raise PathNotFoundError(f"Cannot resolve {path}: {e}") from e


def resolve_root(
    declared_root: str | Path | None,
    env_root: str | Path | None,
    home: Path | None = None,
) -> Path:
    """Resolve the store root directory.

    The root declared in the manifest wins over the environment value.

    Args:
        declared_root: Root from the manifest settings, if any.
        env_root: Root from the DOTLINK_ROOT environment variable, if any.
        home: Home directory used to expand a leading ``~``.

    Returns:
        Canonical path of the store root.

    Raises:
        RootUnresolvableError: If no root is configured, or the chosen value
            is not an existing directory.
    """
    chosen = declared_root if declared_root else env_root
    if not chosen:
        msg = f"Specify 'dotlink_root' in the manifest settings or the {ROOT_ENV_VAR} variable"
        raise RootUnresolvableError(msg)

    try:
        root = canonicalize(expand_home(chosen, home))
    except PathError as e:
        raise RootUnresolvableError(f"Store root {chosen} cannot be resolved: {e}") from e

    if not root.is_dir():
        raise RootUnresolvableError(f"Store root is not a directory: {root}")
    return root
