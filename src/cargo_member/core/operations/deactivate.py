"""Drop package directories from both ``members`` and ``exclude``."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from cargo_member.core.manifest import modify_members
from cargo_member.core.paths import ensure_absolute

from ._common import OperationContext, absolute_paths, finish, reject_root, validate


@dataclass(frozen=True)
class DeactivateOptions:
    workspace_root: Path
    paths: Sequence[Path]
    dry_run: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "workspace_root", ensure_absolute(self.workspace_root))
        object.__setattr__(self, "paths", absolute_paths(self.paths))


def deactivate(options: DeactivateOptions, ctx: Optional[OperationContext] = None) -> bool:
    ctx = ctx or OperationContext()
    root = options.workspace_root
    reject_root(root, options.paths)

    modified = False
    for path in options.paths:
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
        validate(ctx, root, unless_empty=True)
    return modified


__all__ = ["DeactivateOptions", "deactivate"]
