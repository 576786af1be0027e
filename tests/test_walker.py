"""Tests for lib/walker.py - File traversal."""

import os

import pytest

from lib.walker import has_extension, walk_files


class TestHasExtension:
    """Tests for has_extension()."""

    def test_case_insensitive(self):
        """Should compare extensions case-insensitively."""
        assert has_extension("App.TSX", {".tsx"})

    def test_no_extension(self):
        """Files without an extension never match."""
        assert not has_extension("Makefile", {".ts"})


class TestWalkFiles:
    """Tests for walk_files()."""

    def test_missing_root_yields_nothing(self, tmp_path):
        """A missing root is an empty walk."""
        assert list(walk_files(tmp_path / "missing")) == []

    def test_lexicographic_order(self, write_file, tmp_path):
        """Should yield files in stable lexicographic order."""
        for rel in ("b/z.ts", "a.ts", "b/a.ts", "c.ts"):
            write_file(rel)
        assert [f.rel_path for f in walk_files(tmp_path)] == ["a.ts", "b/a.ts", "b/z.ts", "c.ts"]

    def test_ignored_directories_not_entered(self, write_file, tmp_path):
        """Should never descend into ignored directories."""
        write_file("node_modules/lib/index.js")
        write_file(".git/hooks/pre-commit")
        write_file("src/index.ts")
        files = [f.rel_path for f in walk_files(tmp_path, {"node_modules", ".git"})]
        assert files == ["src/index.ts"]

    def test_extension_filter(self, write_file, tmp_path):
        """Should keep only allowed extensions."""
        write_file("a.ts")
        write_file("b.md")
        assert [f.name for f in walk_files(tmp_path, extensions={".ts"})] == ["a.ts"]

    def test_depth_and_rel_dir(self, write_file, tmp_path):
        """Should track directory depth relative to the root."""
        write_file("top.ts")
        write_file("src/a/b/deep.ts")
        files = {f.name: f for f in walk_files(tmp_path)}
        assert files["top.ts"].depth == 0
        assert files["top.ts"].rel_dir == "."
        assert files["deep.ts"].depth == 3
        assert files["deep.ts"].rel_dir == "src/a/b"

    def test_walk_is_lazy(self, write_file, tmp_path):
        """Should return a generator."""
        write_file("a.ts")
        walker = walk_files(tmp_path)
        assert next(walker).name == "a.ts"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_directory_symlinks_not_followed(self, write_file, tmp_path):
        """Should not follow symlinked directories."""
        write_file("real/a.ts")
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)
        assert [f.rel_path for f in walk_files(tmp_path)] == ["real/a.ts"]
