from __future__ import annotations

import pytest

from cargo_member.core.exceptions import RootIsNotAMemberError
from cargo_member.core.operations import DeactivateOptions, ExcludeOptions, deactivate, exclude
from helpers.workspace import read_manifest


class TestExclude:
    def test_moves_member_to_exclude(self, workspace, ctx, status, fake_cargo) -> None:
        root = workspace(members=["a", "b"], exclude=[], packages=["a", "b"])

        assert exclude(ExcludeOptions(root, [root / "b"]), ctx) is True

        assert read_manifest(root) == '[workspace]\nmembers = ["a"]\nexclude = ["b"]\n'
        assert status.events == [
            ("status", "Removing", '"b" from `workspace.members`'),
            ("status", "Adding", '"b" to `workspace.exclude`'),
        ]
        assert len(fake_cargo.calls_to("metadata")) == 1

    def test_validation_skipped_for_empty_workspace(self, workspace, ctx, fake_cargo) -> None:
        root = workspace(members=["b"], packages=["b"])

        exclude(ExcludeOptions(root, [root / "b"]), ctx)

        assert read_manifest(root) == '[workspace]\nmembers = []\nexclude = ["b"]\n'
        assert fake_cargo.calls == []

    def test_path_need_not_be_a_package(self, workspace, ctx) -> None:
        root = workspace(members=["a"], packages=["a"])

        exclude(ExcludeOptions(root, [root / "vendor" / "x"]), ctx)

        assert read_manifest(root) == '[workspace]\nmembers = ["a"]\nexclude = ["vendor/x"]\n'

    def test_already_excluded_warns_unchanged(self, workspace, ctx, status) -> None:
        root = workspace(members=["a"], exclude=["b"], packages=["a"])

        assert exclude(ExcludeOptions(root, [root / "b"]), ctx) is False
        assert status.messages("warning") == ["`workspace` unchanged"]

    def test_dry_run(self, workspace, ctx, status, fake_cargo) -> None:
        root = workspace(members=["a", "b"], packages=["a", "b"])
        before = read_manifest(root)

        exclude(ExcludeOptions(root, [root / "b"], dry_run=True), ctx)

        assert read_manifest(root) == before
        assert status.messages("warning") == ["not modifying the manifest due to dry run"]
        assert fake_cargo.calls == []

    def test_root_is_rejected(self, workspace, ctx) -> None:
        root = workspace(members=["a"])

        with pytest.raises(RootIsNotAMemberError):
            exclude(ExcludeOptions(root, [root / "a", root]), ctx)
        assert read_manifest(root) == '[workspace]\nmembers = ["a"]\n'


class TestDeactivate:
    def test_removes_from_both_arrays(self, workspace, ctx, status) -> None:
        root = workspace(members=["a", "b"], exclude=["c"], packages=["a", "b", "c"])

        assert deactivate(DeactivateOptions(root, [root / "b", root / "c"]), ctx) is True

        assert read_manifest(root) == '[workspace]\nmembers = ["a"]\nexclude = []\n'
        assert status.messages() == ['"b" from `workspace.members`', '"c" from `workspace.exclude`']

    def test_unknown_path_is_unchanged(self, workspace, ctx, status) -> None:
        root = workspace(members=["a"], packages=["a"])

        assert deactivate(DeactivateOptions(root, [root / "zzz"]), ctx) is False
        assert status.messages("warning") == ["`workspace` unchanged"]
