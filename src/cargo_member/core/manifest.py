"""Formatting-preserving edits of ``workspace.members`` / ``workspace.exclude``.

The manifest is parsed with :mod:`tomlkit`, which keeps comments, key order
and whitespace. Only four primitives mutate it (:meth:`ManifestDocument.array`,
:meth:`~ManifestDocument.push`, :meth:`~ManifestDocument.remove_at` and
:meth:`~ManifestDocument.serialize`); everything else is built on top.
"""
from __future__ import annotations

import logging
from pathlib import Path, PurePath
from typing import Iterable, List, Optional, Sequence

import tomlkit
from tomlkit.items import Array, InlineTable, Table
from tomlkit.toml_document import TOMLDocument

from cargo_member.core.config import Settings
from cargo_member.core.exceptions import ManifestError, NotAnArrayError, RootIsNotAMemberError
from cargo_member.core.io import read_text, parse_toml, write_text
from cargo_member.core.paths import relative_to_root, same_location
from cargo_member.core.status import StatusStream, quote

logger = logging.getLogger(__name__)


class ManifestDocument:
    """A parsed ``Cargo.toml`` plus the text it was read from."""

    def __init__(self, path: Path, text: str, settings: Optional[Settings] = None) -> None:
        self.path = Path(path)
        self.original = text
        self.settings = settings or Settings()
        self.document: TOMLDocument = parse_toml(text, self.path)

    @classmethod
    def load(cls, path: Path, settings: Optional[Settings] = None) -> "ManifestDocument":
        doc = cls(path, read_text(path), settings)
        logger.debug("Read the TOML file at %s", path)
        return doc

    # ---- tables -----------------------------------------------------------

    def _workspace(self, create: bool) -> Optional[Table]:
        key = self.settings.workspace_table
        table = self.document.get(key)
        if table is None:
            if not create:
                return None
            self.document[key] = tomlkit.table()
            table = self.document[key]
        if not isinstance(table, (Table, InlineTable)):
            raise ManifestError(f"`{key}` must be a table")
        return table

    def has_package(self) -> bool:
        return self.settings.package_table in self.document

    # ---- mutation primitives ---------------------------------------------

    def array(self, field: str, *, create: bool = True) -> Optional[Array]:
        """Return ``workspace.<field>``, creating an empty array when asked."""
        workspace = self._workspace(create)
        if workspace is None:
            return None
        value = workspace.get(field)
        if value is None:
            if not create:
                return None
            workspace[field] = tomlkit.array()
            value = workspace[field]
        if not isinstance(value, Array):
            raise NotAnArrayError(f"`{self.settings.field_name(field)}` must be an array")
        return value

    def push(self, field: str, value: str) -> None:
        array = self.array(field)
        assert array is not None
        array.append(value)

    def remove_at(self, field: str, index: int) -> None:
        array = self.array(field, create=False)
        if array is None:
            raise IndexError(index)
        del array[index]

    def serialize(self) -> str:
        return tomlkit.dumps(self.document)

    # ---- queries -----------------------------------------------------------

    def entries(self, field: str) -> List[Optional[str]]:
        """String entries of ``workspace.<field>``; non-strings come back as ``None``."""
        array = self.array(field, create=False)
        if array is None:
            return []
        return [str(item) if isinstance(item, str) else None for item in array]

    def members(self) -> List[str]:
        return [e for e in self.entries(self.settings.members_field) if e is not None]

    @property
    def modified(self) -> bool:
        return self.serialize() != self.original

    def save(self, *, dry_run: bool = False) -> bool:
        """Write the document back if its text changed. Returns whether it did."""
        text = self.serialize()
        if text == self.original:
            return False
        write_text(self.path, text, dry_run=dry_run)
        return True


def _find(entries: Sequence[Optional[str]], root: PurePath, target: str) -> Optional[int]:
    for i, entry in enumerate(entries):
        if entry is not None and same_location(root, entry, target):
            return i
    return None


def modify_members(
    workspace_root: Path,
    add_members: Iterable[PurePath] = (),
    add_exclude: Iterable[PurePath] = (),
    rm_members: Iterable[PurePath] = (),
    rm_exclude: Iterable[PurePath] = (),
    *,
    dry_run: bool = False,
    status: Optional[StatusStream] = None,
    settings: Optional[Settings] = None,
) -> bool:
    """Add and remove paths in the workspace's ``members`` and ``exclude`` arrays.

    Additions are skipped when an entry already denotes the same location;
    removals of absent entries are no-ops. Each effective change is reported
    on ``status``, in dry-run mode too. The manifest is written only if its
    serialized text differs from what was read, and only when ``dry_run`` is
    false.

    Returns:
        Whether the manifest text changed (or would have, under ``dry_run``).

    Raises:
        RootIsNotAMemberError: If any path is the workspace root. Raised
            before the manifest is read.
        NotAnArrayError: If one of the fields holds something other than an
            array.
        NonUtf8PathError: If a path cannot be stored as UTF-8.
    """
    settings = settings or Settings()
    status = status or StatusStream()
    root = PurePath(workspace_root)

    add_members, add_exclude = list(add_members), list(add_exclude)
    rm_members, rm_exclude = list(rm_members), list(rm_exclude)
    for path in [*add_members, *add_exclude, *rm_members, *rm_exclude]:
        if PurePath(path) == root:
            raise RootIsNotAMemberError(f"`{root}` is the workspace root")

    manifest = ManifestDocument.load(Path(workspace_root) / settings.manifest_file_name, settings)

    for field, adds, rms in (
        (settings.members_field, add_members, rm_members),
        (settings.exclude_field, add_exclude, rm_exclude),
    ):
        name = settings.field_name(field)
        for path in adds:
            rel = relative_to_root(path, root)
            if _find(manifest.entries(field), root, rel) is None:
                manifest.push(field, rel)
                status.status("Adding", f"{quote(rel)} to `{name}`")
        for path in rms:
            rel = relative_to_root(path, root)
            index = _find(manifest.entries(field), root, rel)
            if index is not None:
                manifest.remove_at(field, index)
                status.status("Removing", f"{quote(rel)} from `{name}`", color="red")

    return manifest.save(dry_run=dry_run)


__all__ = ["ManifestDocument", "modify_members"]
