"""End-to-end runs against a real ``cargo`` executable."""
from __future__ import annotations

from pathlib import Path

import pytest
import tomlkit

from cargo_member.cli._dispatcher import main
from helpers.workspace import make_package, make_workspace, read_manifest

pytestmark = [pytest.mark.integration, pytest.mark.requires_cargo]


def _arrays(root: Path):
    ws = tomlkit.parse(read_manifest(root))["workspace"]
    return list(ws.get("members", [])), list(ws.get("exclude", []))


@pytest.fixture
def root(tmp_path: Path, real_cargo: str, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("CARGO", real_cargo)
    monkeypatch.setenv("CARGO_TARGET_DIR", str(tmp_path / "target"))
    ws = make_workspace(tmp_path / "ws", members=["a", "b"], packages=["a", "b"])
    (ws / "Cargo.toml").write_text('[workspace]\nresolver = "2"\nmembers = ["a", "b"]\n', encoding="utf-8")
    monkeypatch.chdir(ws)
    return ws


def test_exclude_and_include_round(root: Path) -> None:
    assert main(["member", "exclude", "-p", "b"]) == 0
    assert _arrays(root) == (["a"], ["b"])

    assert main(["member", "include", "--offline", "b"]) == 0
    assert _arrays(root) == (["a", "b"], [])


def test_focus_excludes_siblings(root: Path) -> None:
    make_package(root / "crates" / "c")

    assert main(["member", "focus", "--offline", "a"]) == 0
    assert _arrays(root) == (["a"], ["b", "crates/c"])


def test_mv_with_rename(root: Path) -> None:
    assert main(["member", "mv", "--rename", "b", "c"]) == 0

    assert not (root / "b").exists()
    assert _arrays(root)[0] == ["a", "c"]
    assert 'name = "c"' in (root / "c" / "Cargo.toml").read_text(encoding="utf-8")


def test_new_registers_package(root: Path) -> None:
    assert main(["member", "new", "--offline", "--lib", "--vcs", "none", "d"]) == 0

    assert (root / "d" / "src" / "lib.rs").exists()
    assert _arrays(root)[0] == ["a", "b", "d"]


def test_include_non_package_fails(root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (root / "plain").mkdir()

    assert main(["member", "include", "plain"]) == 101
    assert "does not seem to be a package" in capsys.readouterr().err
