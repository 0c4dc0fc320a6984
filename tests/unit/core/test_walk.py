"""Tests for the ignore-aware directory walk."""
from __future__ import annotations

import os
from pathlib import Path
from typing import List

import pytest

from cargo_member.core.walk import walk


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _rel(root: Path, **kwargs) -> List[str]:
    return [e.path.relative_to(root).as_posix() + ("/" if e.is_dir else "") for e in walk(root, **kwargs)]


class TestWalk:
    def test_depth_first_sorted(self, tmp_path: Path) -> None:
        _touch(tmp_path / "b" / "x.rs")
        _touch(tmp_path / "a.txt")
        _touch(tmp_path / "c" / "d" / "y.rs")

        assert _rel(tmp_path) == ["a.txt", "b/", "b/x.rs", "c/", "c/d/", "c/d/y.rs"]

    def test_hidden_entries_skipped_by_default(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".hidden" / "Cargo.toml")
        _touch(tmp_path / ".env")
        _touch(tmp_path / "visible")

        assert _rel(tmp_path) == ["visible"]
        assert _rel(tmp_path, hidden=True) == [".env", ".hidden/", ".hidden/Cargo.toml", "visible"]

    def test_gitignore_patterns_apply(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".gitignore", "target/\n*.log\n")
        _touch(tmp_path / "target" / "debug" / "out")
        _touch(tmp_path / "build.log")
        _touch(tmp_path / "src" / "lib.rs")
        _touch(tmp_path / "src" / "trace.log")

        assert _rel(tmp_path) == ["src/", "src/lib.rs"]

    def test_nested_ignore_files_are_relative_to_their_directory(self, tmp_path: Path) -> None:
        _touch(tmp_path / "crates" / ".ignore", "/generated\n")
        _touch(tmp_path / "crates" / "generated" / "Cargo.toml")
        _touch(tmp_path / "generated" / "Cargo.toml")

        assert _rel(tmp_path) == ["crates/", "generated/", "generated/Cargo.toml"]

    def test_ancestor_ignore_files_apply_below_ignore_root(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".gitignore", "*.log\n")
        _touch(tmp_path / "crates" / ".ignore", "/scratch\n")
        _touch(tmp_path / "crates" / "b" / "trace.log")
        _touch(tmp_path / "crates" / "b" / "src" / "lib.rs")
        pkg = tmp_path / "crates" / "b"

        assert _rel(pkg, ignore_root=tmp_path) == ["src/", "src/lib.rs"]
        assert _rel(pkg) == ["src/", "src/lib.rs", "trace.log"]

    def test_ancestors_above_ignore_root_are_not_read(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".gitignore", "*.log\n")
        _touch(tmp_path / "ws" / "b" / "trace.log")

        assert _rel(tmp_path / "ws" / "b", ignore_root=tmp_path / "ws") == ["trace.log"]

    def test_directory_only_pattern_keeps_files(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".gitignore", "out/\n")
        _touch(tmp_path / "out")

        assert _rel(tmp_path) == ["out"]

    def test_ignore_files_can_be_disabled(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".gitignore", "target/\n")
        _touch(tmp_path / "target" / "x")

        assert _rel(tmp_path, ignore_files=()) == ["target/", "target/x"]

    def test_symlinked_directory_is_not_followed(self, tmp_path: Path) -> None:
        _touch(tmp_path / "real" / "file")
        os.symlink(tmp_path / "real", tmp_path / "link")

        entries = {e.path.name: e.is_dir for e in walk(tmp_path)}
        assert entries["link"] is False
        assert "link/file" not in _rel(tmp_path)

    def test_unreadable_directory_goes_to_onerror(self, tmp_path: Path) -> None:
        errors: List[OSError] = []

        assert list(walk(tmp_path / "missing", onerror=errors.append)) == []
        assert len(errors) == 1

    def test_unreadable_directory_raises_without_onerror(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            list(walk(tmp_path / "missing"))
