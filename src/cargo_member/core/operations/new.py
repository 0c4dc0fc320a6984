"""Create a package with ``cargo new`` and register it as a member."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cargo_member.core.manifest import modify_members
from cargo_member.core.paths import ensure_absolute

from ._common import OperationContext, finish, reject_root

DRY_RUN_NEW = "not creating a new package due to dry run"


@dataclass(frozen=True)
class NewOptions:
    workspace_root: Path
    path: Path
    registry: Optional[str] = None
    vcs: Optional[str] = None
    lib: bool = False
    name: Optional[str] = None
    offline: bool = False
    dry_run: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "workspace_root", ensure_absolute(self.workspace_root))
        object.__setattr__(self, "path", ensure_absolute(self.path))


def new(options: NewOptions, ctx: Optional[OperationContext] = None) -> bool:
    """Register ``path`` in ``members`` first, then let Cargo create it there.

    The membership edit comes first so ``cargo new`` sees the package as a
    member and does not print its "not a member" hint.
    """
    ctx = ctx or OperationContext()
    root, path = options.workspace_root, options.path
    reject_root(root, [path])

    modified = modify_members(
        root,
        add_members=[path],
        rm_exclude=[path],
        dry_run=options.dry_run,
        status=ctx.status,
        settings=ctx.settings,
    )
    finish(ctx, modified, options.dry_run)

    if options.dry_run:
        ctx.status.warn(DRY_RUN_NEW)
        return modified

    ctx.cargo.new(
        path,
        cwd=root,
        registry=options.registry,
        vcs=options.vcs,
        lib=options.lib,
        name=options.name,
        offline=options.offline,
        on_stderr=ctx.status.raw,
    )
    ctx.cargo.metadata(cwd=root, offline=options.offline)
    return modified


__all__ = ["NewOptions", "new"]
