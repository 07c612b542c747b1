"""Unit tests for add command."""

from collections.abc import Callable
from pathlib import Path

from dotlink.core.manifest import load_manifest
from typer.testing import Result


class TestAddCommand:
    """Tests for dotlink add command."""

    def test_adds_file(
        self,
        invoke: Callable[..., Result],
        write_manifest: Callable[..., Path],
        store: Path,
        home: Path,
        manifest_path: Path,
    ) -> None:
        """The file is moved, linked and recorded."""
        write_manifest()
        (home / ".vimrc").write_text("set nu")

        result = invoke("add", str(home / ".vimrc"))

        assert result.exit_code == 0
        assert "Added 1 file(s) to the store." in result.output
        assert (store / ".vimrc").read_text() == "set nu"
        assert (home / ".vimrc").readlink() == store / ".vimrc"
        assert load_manifest(manifest_path).entries == {".vimrc": str(home / ".vimrc")}

    def test_adds_glob(
        self,
        invoke: Callable[..., Result],
        write_manifest: Callable[..., Path],
        store: Path,
        home: Path,
    ) -> None:
        """A glob pattern adds every match."""
        write_manifest()
        fish = home / ".config" / "fish"
        fish.mkdir(parents=True)
        (fish / "config.fish").write_text("a")
        (fish / "aliases.fish").write_text("b")

        result = invoke("add", str(fish / "*.fish"))

        assert result.exit_code == 0
        assert "Added 2 file(s) to the store." in result.output
        assert (store / "config.fish").exists()
        assert (store / "aliases.fish").exists()

    def test_no_matches(
        self,
        invoke: Callable[..., Result],
        write_manifest: Callable[..., Path],
        home: Path,
    ) -> None:
        """A pattern matching nothing is reported."""
        write_manifest()

        result = invoke("add", str(home / "*.nothing"))

        assert result.exit_code == 0
        assert "No files matched the given patterns." in result.output

    def test_collision_adds_nothing(
        self,
        invoke: Callable[..., Result],
        write_manifest: Callable[..., Path],
        store: Path,
        home: Path,
        manifest_path: Path,
    ) -> None:
        """A file whose store name is tracked is skipped."""
        (store / ".vimrc").write_text("tracked")
        write_manifest({".vimrc": "~/.vimrc"})
        other = home / "work"
        other.mkdir()
        (other / ".vimrc").write_text("other")

        result = invoke("add", str(other / ".vimrc"))

        assert result.exit_code == 0
        assert "Nothing was added." in result.output
        assert (other / ".vimrc").read_text() == "other"
        assert load_manifest(manifest_path).entries == {".vimrc": "~/.vimrc"}

    def test_root_override(
        self,
        invoke: Callable[..., Result],
        write_manifest: Callable[..., Path],
        tmp_path: Path,
        home: Path,
    ) -> None:
        """--root moves the file into the given directory."""
        write_manifest()
        other_root = tmp_path.resolve() / "other"
        other_root.mkdir()
        (home / ".gitconfig").write_text("x")

        result = invoke("add", str(home / ".gitconfig"), "--root", str(other_root))

        assert result.exit_code == 0
        assert (other_root / ".gitconfig").exists()
        assert (home / ".gitconfig").readlink() == other_root / ".gitconfig"

    def test_requires_pattern(self, invoke: Callable[..., Result]) -> None:
        """add without arguments is a usage error."""
        result = invoke("add")

        assert result.exit_code == 2
