"""Unit tests for path resolution.

Tests for clean, expand_home, canonicalize and resolve_root.
"""

from pathlib import Path

import pytest
from dotlink.core.paths import (
    HomeUnresolvableError,
    PathNotFoundError,
    RootUnresolvableError,
    canonicalize,
    clean,
    expand_home,
    resolve_root,
)


class TestClean:
    """Tests for clean function."""

    def test_removes_dot_segments(self) -> None:
        """clean resolves '.' and '..' lexically."""
        assert clean("/a/./b/../c") == Path("/a/c")

    def test_collapses_separators(self) -> None:
        """clean collapses repeated separators and trailing slashes."""
        assert clean("/a//b/") == Path("/a/b")

    def test_keeps_tilde(self) -> None:
        """clean leaves a leading '~' untouched."""
        assert clean("~/./.bashrc") == Path("~/.bashrc")

    def test_does_not_touch_filesystem(self, tmp_path: Path) -> None:
        """clean does not follow symlinks."""
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        link.symlink_to(real)

        assert clean(link / "x") == link / "x"


class TestExpandHome:
    """Tests for expand_home function."""

    def test_expands_leading_tilde(self) -> None:
        """A leading '~/' is replaced by the home directory."""
        assert expand_home("~/.bashrc", Path("/home/u")) == Path("/home/u/.bashrc")

    def test_expands_bare_tilde(self) -> None:
        """A bare '~' becomes the home directory."""
        assert expand_home("~", Path("/home/u")) == Path("/home/u")

    def test_leaves_other_paths(self) -> None:
        """Paths without the marker are returned unchanged."""
        assert expand_home("/etc/hosts", None) == Path("/etc/hosts")
        assert expand_home("a/~/b", None) == Path("a/~/b")

    def test_tilde_user_not_expanded(self) -> None:
        """'~user' forms are not treated as the home marker."""
        assert expand_home("~other/x", Path("/home/u")) == Path("~other/x")

    def test_raises_without_home(self) -> None:
        """Expansion without a home directory raises HomeUnresolvableError."""
        with pytest.raises(HomeUnresolvableError, match="HOME"):
            expand_home("~/.bashrc", None)


class TestCanonicalize:
    """Tests for canonicalize function."""

    def test_resolves_symlinks(self, tmp_path: Path) -> None:
        """canonicalize follows symlinks to the real path."""
        real = tmp_path / "real.txt"
        real.write_text("x")
        link = tmp_path / "link.txt"
        link.symlink_to(real)

        assert canonicalize(link) == real.resolve()

    def test_raises_for_missing_path(self, tmp_path: Path) -> None:
        """canonicalize raises PathNotFoundError for a missing path."""
        with pytest.raises(PathNotFoundError):
            canonicalize(tmp_path / "missing")

    def test_raises_for_dangling_symlink(self, tmp_path: Path) -> None:
        """A dangling symlink cannot be canonicalized."""
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "nowhere")

        with pytest.raises(PathNotFoundError):
            canonicalize(link)


class TestResolveRoot:
    """Tests for resolve_root function."""

    def test_prefers_declared_root(self, tmp_path: Path) -> None:
        """The declared root wins over the environment root."""
        declared = tmp_path / "declared"
        declared.mkdir()
        env = tmp_path / "env"
        env.mkdir()

        assert resolve_root(str(declared), str(env)) == declared.resolve()

    def test_falls_back_to_env_root(self, tmp_path: Path) -> None:
        """The environment root is used when nothing is declared."""
        assert resolve_root(None, str(tmp_path)) == tmp_path.resolve()

    def test_expands_tilde_in_root(self, tmp_path: Path) -> None:
        """A '~' in the root is expanded with the given home."""
        (tmp_path / "dotfiles").mkdir()

        result = resolve_root("~/dotfiles", None, home=tmp_path)

        assert result == (tmp_path / "dotfiles").resolve()

    def test_raises_when_unset(self) -> None:
        """Neither declared nor environment root raises RootUnresolvableError."""
        with pytest.raises(RootUnresolvableError, match="DOTLINK_ROOT"):
            resolve_root(None, None)

    def test_raises_when_missing(self, tmp_path: Path) -> None:
        """A root that does not exist raises RootUnresolvableError."""
        with pytest.raises(RootUnresolvableError):
            resolve_root(str(tmp_path / "missing"), None)

    def test_raises_when_not_directory(self, tmp_path: Path) -> None:
        """A root that is a file raises RootUnresolvableError."""
        file = tmp_path / "file"
        file.write_text("x")

        with pytest.raises(RootUnresolvableError, match="not a directory"):
            resolve_root(str(file), None)
