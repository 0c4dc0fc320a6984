"""Copy a package to a new location."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cargo_member.core.paths import ensure_absolute

from ._common import OperationContext

DRY_RUN_COPY = "not copying due to dry run"


@dataclass(frozen=True)
class CopyOptions:
    src: Path
    dst: Path
    rename: bool = False
    dry_run: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "src", ensure_absolute(self.src))
        object.__setattr__(self, "dst", ensure_absolute(self.dst))


def cp(options: CopyOptions, ctx: Optional[OperationContext] = None) -> Path:
    """Copy the package at ``src``; returns where it ended up."""
    ctx = ctx or OperationContext()
    dst = ctx.relocation.copy(options.src, options.dst, rename=options.rename, dry_run=options.dry_run)
    if options.dry_run:
        ctx.status.warn(DRY_RUN_COPY)
    return dst


__all__ = ["CopyOptions", "cp"]
