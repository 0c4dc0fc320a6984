"""Make one package the only active member of its workspace."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import List, Optional

from cargo_member.core.manifest import modify_members
from cargo_member.core.paths import ensure_absolute
from cargo_member.core.walk import walk

from ._common import OperationContext, reject_root, validate

DRY_RUN_WORKSPACE = "not modifying `workspace` due to dry run"


@dataclass(frozen=True)
class FocusOptions:
    workspace_root: Path
    path: Path
    dry_run: bool = False
    offline: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "workspace_root", ensure_absolute(self.workspace_root))
        object.__setattr__(self, "path", ensure_absolute(self.path))


def other_packages(ctx: OperationContext, workspace_root: Path, keep: Path) -> List[Path]:
    """Directories under ``workspace_root`` holding a manifest, minus the root and ``keep``.

    Hidden directories and anything matched by ignore files are skipped.
    """
    skip = {PurePath(workspace_root), PurePath(keep)}
    found: List[Path] = []
    for entry in walk(
        workspace_root,
        ignore_files=ctx.settings.ignore_files,
        onerror=lambda err: ctx.status.warn(str(err)),
    ):
        if entry.is_dir or entry.path.name != ctx.settings.manifest_file_name:
            continue
        directory = entry.path.parent
        if PurePath(directory) not in skip:
            found.append(directory)
    return found


def focus(options: FocusOptions, ctx: Optional[OperationContext] = None) -> bool:
    """Include ``path`` and exclude every other package found under the root."""
    ctx = ctx or OperationContext()
    root, path = options.workspace_root, options.path
    reject_root(root, [path])

    others = other_packages(ctx, root, path)
    modified = modify_members(
        root,
        add_members=[path],
        add_exclude=others,
        rm_members=others,
        rm_exclude=[path],
        dry_run=options.dry_run,
        status=ctx.status,
        settings=ctx.settings,
    )

    if options.dry_run:
        ctx.status.warn(DRY_RUN_WORKSPACE)
    else:
        validate(ctx, root, offline=options.offline)
    return modified


__all__ = ["FocusOptions", "focus", "other_packages"]
