"""Copying and removing package directories.

A copy skips the source's VCS metadata, strips ``package.workspace`` from
the copied manifest, optionally renames the package after the destination
directory, and writes the manifest last.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import tomlkit
from tomlkit.items import InlineTable, Table

from cargo_member.core.config import Settings
from cargo_member.core.exceptions import (
    DestinationExistsError,
    ManifestError,
    NonUtf8NameError,
    NotAPackageError,
)
from cargo_member.core.io import copy_file, create_dir_all, read_toml_document, remove_dir_all, write_text
from cargo_member.core.manifest import modify_members
from cargo_member.core.status import StatusStream
from cargo_member.core.walk import walk

logger = logging.getLogger(__name__)


class RelocationEngine:
    def __init__(self, settings: Optional[Settings] = None, status: Optional[StatusStream] = None) -> None:
        self.settings = settings or Settings()
        self.status = status or StatusStream()

    # ---- helpers -----------------------------------------------------------

    def manifest_path(self, directory: Path) -> Path:
        return Path(directory) / self.settings.manifest_file_name

    def is_package(self, directory: Path) -> bool:
        return self.manifest_path(directory).exists()

    def effective_destination(self, src: Path, dst: Path) -> Path:
        """``dst/<name of src>`` when ``dst`` is an existing directory, else ``dst``."""
        if Path(dst).is_dir():
            return Path(dst) / Path(src).name
        return Path(dst)

    def enclosing_workspaces(self, path: Path) -> List[Path]:
        """Ancestors of ``path`` (``path`` excluded) that hold a manifest."""
        return [d for d in Path(os.path.normpath(path)).parents if self.manifest_path(d).exists()]

    def _in_vcs_dir(self, rel: Path) -> bool:
        return bool(rel.parts) and rel.parts[0] in self.settings.vcs_dirs

    def _detached_manifest(self, src: Path, dst: Path, rename: bool) -> str:
        try:
            document = read_toml_document(self.manifest_path(src))
        except ManifestError as err:
            raise NotAPackageError(f"`{src}` does not seem to be a package") from err

        package = document.get(self.settings.package_table)
        if isinstance(package, (Table, InlineTable)):
            package.pop(self.settings.package_workspace_field, None)
            if rename:
                name = dst.name
                try:
                    name.encode("utf-8")
                except UnicodeEncodeError as err:
                    raise NonUtf8NameError(f"{name!r} is not valid UTF-8") from err
                package[self.settings.package_name_field] = name
        return tomlkit.dumps(document)

    # ---- operations --------------------------------------------------------

    def copy(self, src: Path, dst: Path, *, rename: bool = False, dry_run: bool = False) -> Path:
        """Copy the package at ``src`` to ``dst``.

        Returns the effective destination. If it lands inside exactly one
        enclosing workspace, that workspace gets it added to ``members`` and
        dropped from ``exclude``. Ignore files of the directories between the
        outermost workspace enclosing ``src`` and ``src`` also apply.

        Raises:
            DestinationExistsError: If the effective destination exists.
            NotAPackageError: If ``src`` has no readable manifest.
            NonUtf8NameError: If ``rename`` is set and the new name is not UTF-8.
        """
        src, dst = Path(src), self.effective_destination(src, dst)
        if dst.exists():
            raise DestinationExistsError(f"`{dst}` exists", context={"dst": str(dst)})

        manifest = self._detached_manifest(src, dst, rename)

        self.status.status("Copying", f"`{src}` to `{dst}`")

        source = Path(os.path.normpath(src))
        src_manifest = self.manifest_path(source)
        source_workspaces = self.enclosing_workspaces(source)
        created = set()
        for entry in walk(
            source,
            hidden=True,
            ignore_files=self.settings.ignore_files,
            ignore_root=source_workspaces[-1] if source_workspaces else None,
            onerror=lambda err: self.status.warn(str(err)),
        ):
            rel = entry.path.relative_to(source)
            if entry.is_dir or entry.path == src_manifest or self._in_vcs_dir(rel):
                continue
            target = dst / rel
            parent = target.parent
            if parent not in created and not parent.exists():
                create_dir_all(parent, dry_run=dry_run)
            created.update([parent, *parent.parents])
            copy_file(entry.path, target, dry_run=dry_run)

        if dst not in created and not dst.exists():
            create_dir_all(dst, dry_run=dry_run)
        write_text(self.manifest_path(dst), manifest, dry_run=dry_run)

        located = Path(os.path.normpath(dst))
        workspaces = self.enclosing_workspaces(located)
        if len(workspaces) == 1:
            (workspace_root,) = workspaces
            self.status.status("Found", f"workspace at {workspace_root}", color="cyan")
            modify_members(
                workspace_root,
                add_members=[located],
                rm_exclude=[located],
                dry_run=dry_run,
                status=self.status,
                settings=self.settings,
            )
        else:
            logger.debug("%d enclosing workspaces for %s; not registering it", len(workspaces), dst)
        return dst

    def remove(self, path: Path, *, force: bool = False, dry_run: bool = False) -> bool:
        """Delete the package directory at ``path``.

        Without ``force`` the directory must hold a manifest. With ``force`` a
        missing directory is not an error. Returns whether anything was (or
        would be) removed.
        """
        path = Path(path)
        if not force and not self.is_package(path):
            cause = FileNotFoundError(f"`{self.manifest_path(path)}` does not exist")
            raise NotAPackageError(
                f"`{path}` does not seem to be a package. enable `--force` to remove",
                context={"path": str(path)},
            ) from cause
        if not path.exists():
            logger.debug("%s does not exist; nothing to remove", path)
            return False
        self.status.status("Removing", f"directory `{path}`", color="red")
        remove_dir_all(path, dry_run=dry_run)
        return True


__all__ = ["RelocationEngine"]
