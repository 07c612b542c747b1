"""Glob pattern expansion for add and unlink.

Turns user-supplied patterns into the concrete filesystem paths they
match. A pattern without wildcards matches itself when something exists
at that location, including a dangling symlink.
"""

import glob
import logging
from collections.abc import Iterable
from pathlib import Path

from dotlink.core.paths import expand_home

logger = logging.getLogger(__name__)


def expand_pattern(pattern: str, home: Path | None = None) -> list[Path]:
    """Expand one glob pattern.

    Args:
        pattern: Glob pattern, optionally starting with ``~``.
        home: Home directory used to expand a leading ``~``.

    Returns:
        Sorted list of matching paths.

    Raises:
        HomeUnresolvableError: If the pattern starts with ``~`` and home is None.
    """
    expanded = str(expand_home(pattern, home))
    matches = sorted(glob.glob(expanded, recursive=True, include_hidden=True))
    if not matches:
        logger.debug("Pattern matched nothing: %s", pattern)
    return [Path(m) for m in matches]


def expand_patterns(patterns: Iterable[str], home: Path | None = None) -> list[Path]:
    """Expand several glob patterns, dropping duplicates.

    Args:
        patterns: Glob patterns in the order given by the user.
        home: Home directory used to expand a leading ``~``.

    Returns:
        Matching paths in pattern order, each listed once.
    """
    seen: set[Path] = set()
    paths: list[Path] = []
    for pattern in patterns:
        for path in expand_pattern(pattern, home):
            if path not in seen:
                seen.add(path)
                paths.append(path)
    return paths
