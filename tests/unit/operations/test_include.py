from __future__ import annotations

from pathlib import Path

import pytest

from cargo_member.core.exceptions import MetadataError, NotAPackageError, RootIsNotAMemberError, UsageError
from cargo_member.core.metadata import Cargo
from cargo_member.core.operations import IncludeOptions, OperationContext, include
from helpers.workspace import read_manifest


class TestInclude:
    def test_adds_package_and_validates(self, workspace, ctx, status, fake_cargo) -> None:
        root = workspace(members=["a"], packages=["a", "b"])

        changed = include(IncludeOptions(root, [root / "b"], offline=True), ctx)

        assert changed is True
        assert read_manifest(root) == '[workspace]\nmembers = ["a", "b"]\n'
        assert status.events == [("status", "Adding", '"b" to `workspace.members`')]
        assert fake_cargo.calls_to("metadata") == [
            {"manifest_path": root / "Cargo.toml", "cwd": root, "offline": True}
        ]

    def test_drops_path_from_exclude(self, workspace, ctx, status) -> None:
        root = workspace(members=[], exclude=["b"], packages=["b"])

        include(IncludeOptions(root, [root / "b"]), ctx)

        assert read_manifest(root) == '[workspace]\nmembers = ["b"]\nexclude = []\n'
        assert status.messages() == ['"b" to `workspace.members`', '"b" from `workspace.exclude`']

    def test_requires_package_marker(self, workspace, ctx, fake_cargo) -> None:
        root = workspace(members=[])
        (root / "plain").mkdir()
        before = read_manifest(root)

        with pytest.raises(NotAPackageError, match="enable `--force` to add") as exc:
            include(IncludeOptions(root, [root / "plain"]), ctx)

        assert str(exc.value.__cause__) == f"`{root / 'plain' / 'Cargo.toml'}` does not exist"
        assert read_manifest(root) == before
        assert fake_cargo.calls == []

    def test_force_skips_marker_and_tolerates_validation_failure(self, workspace, ctx, fake_cargo) -> None:
        root = workspace(members=[])
        fake_cargo.metadata_error = "error: failed to load manifest for workspace member"

        assert include(IncludeOptions(root, [root / "later"], force=True), ctx) is True
        assert read_manifest(root) == '[workspace]\nmembers = ["later"]\n'
        assert len(fake_cargo.calls_to("metadata")) == 1

    def test_force_tolerates_missing_cargo_executable(self, workspace, settings, status) -> None:
        root = workspace(members=[])
        ctx = OperationContext(settings, status, cargo=Cargo(str(root.parent / "no-such-cargo")))

        assert include(IncludeOptions(root, [root / "later"], force=True), ctx) is True
        assert read_manifest(root) == '[workspace]\nmembers = ["later"]\n'

    def test_missing_cargo_executable_fails_without_force(self, workspace, settings, status) -> None:
        root = workspace(members=[], packages=["b"])
        ctx = OperationContext(settings, status, cargo=Cargo(str(root.parent / "no-such-cargo")))

        with pytest.raises(MetadataError, match="failed to execute") as exc:
            include(IncludeOptions(root, [root / "b"]), ctx)
        assert isinstance(exc.value.__cause__, OSError)

    def test_validation_failure_propagates_without_force(self, workspace, ctx, fake_cargo) -> None:
        root = workspace(members=[], packages=["b"])
        fake_cargo.metadata_error = "error: boom"

        with pytest.raises(MetadataError, match="boom"):
            include(IncludeOptions(root, [root / "b"]), ctx)

    def test_already_included_warns_unchanged(self, workspace, ctx, status) -> None:
        root = workspace(members=["b"], packages=["b"])

        assert include(IncludeOptions(root, [root / "b"]), ctx) is False
        assert status.messages("warning") == ["`workspace` unchanged"]

    def test_dry_run_reports_without_writing(self, workspace, ctx, status, fake_cargo) -> None:
        root = workspace(members=[], packages=["b"])
        before = read_manifest(root)

        assert include(IncludeOptions(root, [root / "b"], dry_run=True), ctx) is True

        assert read_manifest(root) == before
        assert status.messages() == ['"b" to `workspace.members`']
        assert status.messages("warning") == ["not modifying the manifest due to dry run"]
        assert fake_cargo.calls == []

    def test_each_path_is_applied_in_order(self, workspace, ctx) -> None:
        root = workspace(members=[], packages=["c", "b"])

        include(IncludeOptions(root, [root / "c", root / "b"]), ctx)

        assert read_manifest(root) == '[workspace]\nmembers = ["c", "b"]\n'

    def test_root_is_rejected_before_any_io(self, tmp_path: Path, ctx, fake_cargo) -> None:
        with pytest.raises(RootIsNotAMemberError):
            include(IncludeOptions(tmp_path, [tmp_path]), ctx)
        assert fake_cargo.calls == []

    def test_options_require_absolute_paths(self, tmp_path: Path) -> None:
        with pytest.raises(UsageError, match="must be absolute"):
            IncludeOptions(tmp_path, [Path("relative")])
