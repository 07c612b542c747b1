"""Fixtures for CLI command tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from dotlink.cli.main import app
from dotlink.core.manifest import save_manifest
from dotlink.models.manifest import Manifest, Settings
from typer.testing import CliRunner, Result

runner = CliRunner()


@pytest.fixture
def write_manifest(store: Path, manifest_path: Path) -> Callable[..., Path]:
    """Write a Link.toml rooted at the test store."""

    def _write(entries: dict[str, str] | None = None) -> Path:
        manifest = Manifest(
            settings=Settings(dotlink_root=str(store)),
            entries=dict(entries or {}),
        )
        return save_manifest(manifest, manifest_path)

    return _write


@pytest.fixture
def invoke(home: Path, manifest_path: Path) -> Callable[..., Result]:
    """Run the CLI against the test manifest with an isolated environment."""

    def _invoke(*args: str, config: Path | None = None) -> Result:
        return runner.invoke(
            app,
            ["-c", str(config or manifest_path), *args],
            env={"HOME": str(home), "DOTLINK_ROOT": None},
        )

    return _invoke
