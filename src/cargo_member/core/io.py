"""Filesystem primitives shared by the manifest editor and relocation engine.

Every mutating helper takes ``dry_run``; when set, the operation is logged
with a ``[dry-run]`` prefix and skipped.
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

import tomlkit
from tomlkit.exceptions import ParseError
from tomlkit.toml_document import TOMLDocument

from cargo_member.core.exceptions import ManifestError, RelocationError

logger = logging.getLogger(__name__)


def _prefix(dry_run: bool) -> str:
    return "[dry-run] " if dry_run else ""


def read_text(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ManifestError(f"failed to read {path}") from err


def parse_toml(text: str, path: Optional[Path] = None) -> TOMLDocument:
    try:
        return tomlkit.parse(text)
    except ParseError as err:
        where = f" at {path}" if path is not None else ""
        raise ManifestError(f"failed to parse the TOML file{where}") from err


def read_toml_document(path: Path) -> TOMLDocument:
    """Read and parse a TOML file, keeping its formatting for round trips."""
    return parse_toml(read_text(path), path)


def atomic_write_text(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` through a temp file and ``os.replace``."""
    path = Path(path)
    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def write_text(path: Path, content: str, *, dry_run: bool = False) -> None:
    if not dry_run:
        try:
            atomic_write_text(path, content)
        except OSError as err:
            raise ManifestError(f"failed to write {path}") from err
    logger.debug("%sWrote %s", _prefix(dry_run), path)


def create_dir_all(path: Path, *, dry_run: bool = False) -> None:
    if not dry_run:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise RelocationError(f"failed to create `{path}`") from err
    logger.debug("%sCreated %s", _prefix(dry_run), path)


def copy_file(src: Path, dst: Path, *, dry_run: bool = False) -> None:
    if not dry_run:
        try:
            shutil.copy2(src, dst, follow_symlinks=False)
        except OSError as err:
            raise RelocationError(f"failed to copy `{src}` to `{dst}`") from err
    logger.debug("%sCopied %s to %s", _prefix(dry_run), src, dst)


def remove_dir_all(path: Path, *, dry_run: bool = False) -> None:
    if not dry_run:
        try:
            shutil.rmtree(path)
        except OSError as err:
            raise RelocationError(f"failed to remove `{path}`") from err
    logger.debug("%sRemoved %s", _prefix(dry_run), path)


__all__ = [
    "read_text",
    "parse_toml",
    "read_toml_document",
    "atomic_write_text",
    "write_text",
    "create_dir_all",
    "copy_file",
    "remove_dir_all",
]
