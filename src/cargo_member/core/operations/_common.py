"""Shared plumbing for the operation functions."""
from __future__ import annotations

import logging
import os
from pathlib import Path, PurePath
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from cargo_member.core.config import Settings
from cargo_member.core.exceptions import MetadataError, NotAPackageError, RootIsNotAMemberError
from cargo_member.core.metadata import Cargo, MemberResolver
from cargo_member.core.paths import ensure_absolute
from cargo_member.core.relocation import RelocationEngine
from cargo_member.core.status import StatusStream

logger = logging.getLogger(__name__)

UNCHANGED = "`workspace` unchanged"
DRY_RUN_MANIFEST = "not modifying the manifest due to dry run"


class OperationContext:
    """Collaborators every operation needs.

    ``cargo`` is resolved on first use so dry-run invocations that never
    talk to Cargo do not require it.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        status: Optional[StatusStream] = None,
        *,
        cargo: Optional[Cargo] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.status = status or StatusStream()
        self.environ = environ
        self._cargo = cargo

    @property
    def cargo(self) -> Cargo:
        if self._cargo is None:
            self._cargo = Cargo.from_settings(self.settings, self.environ)
        return self._cargo

    @property
    def resolver(self) -> MemberResolver:
        return MemberResolver(self.cargo)

    @property
    def relocation(self) -> RelocationEngine:
        return RelocationEngine(self.settings, self.status)

    def manifest_path(self, workspace_root: Path) -> Path:
        return Path(workspace_root) / self.settings.manifest_file_name


def absolute_paths(paths: Iterable[os.PathLike]) -> Tuple[Path, ...]:
    return tuple(ensure_absolute(p) for p in paths)


def reject_root(workspace_root: Path, paths: Sequence[PurePath]) -> None:
    root = PurePath(workspace_root)
    for path in paths:
        if PurePath(path) == root:
            raise RootIsNotAMemberError(f"`{root}` is the workspace root")


def ensure_package(ctx: OperationContext, path: Path, verb: str) -> None:
    manifest = ctx.manifest_path(path)
    if not manifest.exists():
        cause = FileNotFoundError(f"`{manifest}` does not exist")
        raise NotAPackageError(
            f"`{path}` does not seem to be a package. enable `--force` to {verb}",
            context={"path": str(path)},
        ) from cause


def finish(ctx: OperationContext, modified: bool, dry_run: bool) -> None:
    if not modified:
        ctx.status.warn(UNCHANGED)
    if dry_run:
        ctx.status.warn(DRY_RUN_MANIFEST)


def validate(
    ctx: OperationContext,
    workspace_root: Path,
    *,
    offline: bool = False,
    force: bool = False,
    unless_empty: bool = False,
) -> None:
    """Run ``cargo metadata`` against the edited workspace.

    With ``force`` a failing run is logged and ignored.
    """
    manifest = ctx.manifest_path(workspace_root)
    try:
        if unless_empty:
            ctx.cargo.metadata_unless_empty(manifest, cwd=workspace_root, offline=offline)
        else:
            ctx.cargo.metadata(manifest, cwd=workspace_root, offline=offline)
    except MetadataError as err:
        if not force:
            raise
        logger.debug("ignoring failed validation of %s: %s", manifest, err)


__all__ = [
    "OperationContext",
    "absolute_paths",
    "reject_root",
    "ensure_package",
    "finish",
    "validate",
    "UNCHANGED",
    "DRY_RUN_MANIFEST",
]
