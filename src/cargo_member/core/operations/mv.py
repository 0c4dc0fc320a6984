"""Move a package: copy it, then remove the original.

Not atomic. If the removal fails, both trees stay on disk and the error is
raised as is.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cargo_member.core.paths import ensure_absolute

from ._common import OperationContext, reject_root
from .cp import CopyOptions, cp
from .rm import RemoveOptions, rm


@dataclass(frozen=True)
class MoveOptions:
    workspace_root: Path
    src: Path
    dst: Path
    rename: bool = False
    dry_run: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "workspace_root", ensure_absolute(self.workspace_root))
        object.__setattr__(self, "src", ensure_absolute(self.src))
        object.__setattr__(self, "dst", ensure_absolute(self.dst))


def mv(options: MoveOptions, ctx: Optional[OperationContext] = None) -> Path:
    ctx = ctx or OperationContext()
    reject_root(options.workspace_root, [options.src])
    dst = cp(CopyOptions(options.src, options.dst, rename=options.rename, dry_run=options.dry_run), ctx)
    rm(RemoveOptions(options.workspace_root, [options.src], dry_run=options.dry_run), ctx)
    return dst


__all__ = ["MoveOptions", "mv"]
