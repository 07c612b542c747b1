"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. Every test
gets its own home directory and store root under ``tmp_path``; both are
canonical so link values compare equal to resolved paths.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from dotlink.core.context import LinkContext
from dotlink.core.manifest import save_manifest
from dotlink.core.reconciler import Reconciler
from dotlink.models.manifest import CollisionKeyType, Manifest, Settings
from dotlink.utils.log import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_dotlink_logger() -> Iterator[None]:
    """Drop handlers installed by CLI invocations between tests."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Empty home directory."""
    path = tmp_path.resolve() / "home"
    path.mkdir()
    return path


@pytest.fixture
def store(tmp_path: Path) -> Path:
    """Empty store root."""
    path = tmp_path.resolve() / "store"
    path.mkdir()
    return path


@pytest.fixture
def manifest_path(store: Path) -> Path:
    """Manifest location inside the store."""
    return store / "Link.toml"


@pytest.fixture
def make_reconciler(
    home: Path, store: Path, manifest_path: Path
) -> Callable[..., Reconciler]:
    """Factory building a reconciler over a freshly saved manifest."""

    def _make(
        entries: dict[str, str] | None = None,
        collision_key: CollisionKeyType = "basename",
        declared_root: bool = True,
    ) -> Reconciler:
        manifest = Manifest(
            settings=Settings(
                dotlink_root=str(store) if declared_root else None,
                collision_key=collision_key,
            ),
            entries=dict(entries or {}),
        )
        save_manifest(manifest, manifest_path)
        context = LinkContext.from_environment(
            manifest_path, manifest, environ={"HOME": str(home)}
        )
        return Reconciler(manifest, context)

    return _make
