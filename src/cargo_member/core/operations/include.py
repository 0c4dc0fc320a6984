"""Add package directories to ``workspace.members``."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from cargo_member.core.manifest import modify_members
from cargo_member.core.paths import ensure_absolute

from ._common import OperationContext, absolute_paths, ensure_package, finish, reject_root, validate


@dataclass(frozen=True)
class IncludeOptions:
    workspace_root: Path
    paths: Sequence[Path]
    force: bool = False
    dry_run: bool = False
    offline: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "workspace_root", ensure_absolute(self.workspace_root))
        object.__setattr__(self, "paths", absolute_paths(self.paths))


def include(options: IncludeOptions, ctx: Optional[OperationContext] = None) -> bool:
    """Add each path to ``members`` and drop it from ``exclude``.

    Without ``force`` each path must already hold a ``Cargo.toml`` and the
    edited workspace must pass ``cargo metadata``.
    """
    ctx = ctx or OperationContext()
    root = options.workspace_root
    reject_root(root, options.paths)

    modified = False
    for path in options.paths:
        if not options.force:
            ensure_package(ctx, path, "add")
        modified |= modify_members(
            root,
            add_members=[path],
            rm_exclude=[path],
            dry_run=options.dry_run,
            status=ctx.status,
            settings=ctx.settings,
        )

    finish(ctx, modified, options.dry_run)
    if not options.dry_run:
        validate(ctx, root, offline=options.offline, force=options.force)
    return modified


__all__ = ["IncludeOptions", "include"]
