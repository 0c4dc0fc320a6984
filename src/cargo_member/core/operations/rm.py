"""Delete package directories and forget them in the workspace."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from cargo_member.core.manifest import modify_members
from cargo_member.core.paths import ensure_absolute

from ._common import OperationContext, absolute_paths, finish, reject_root, validate


@dataclass(frozen=True)
class RemoveOptions:
    workspace_root: Path
    paths: Sequence[Path]
    force: bool = False
    dry_run: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "workspace_root", ensure_absolute(self.workspace_root))
        object.__setattr__(self, "paths", absolute_paths(self.paths))


def rm(options: RemoveOptions, ctx: Optional[OperationContext] = None) -> bool:
    """Remove each directory, then drop it from ``members`` and ``exclude``.

    ``force`` lets directories without a ``Cargo.toml`` (or missing ones)
    through and ignores a failing validation afterwards.
    """
    ctx = ctx or OperationContext()
    root = options.workspace_root
    reject_root(root, options.paths)

    engine = ctx.relocation
    modified = False
    for path in options.paths:
        engine.remove(path, force=options.force, dry_run=options.dry_run)
        modified |= modify_members(
            root,
            rm_members=[path],
            rm_exclude=[path],
            dry_run=options.dry_run,
            status=ctx.status,
            settings=ctx.settings,
        )

    finish(ctx, modified, options.dry_run)
    if not options.dry_run:
        validate(ctx, root, force=options.force, unless_empty=True)
    return modified


__all__ = ["RemoveOptions", "rm"]
