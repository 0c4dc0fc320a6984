"""Depth-first directory walk honoring ``.gitignore``-style files.

Each directory's ignore files apply to everything beneath it, matched with
:class:`pathspec.GitIgnoreSpec` relative to that directory.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import pathspec

logger = logging.getLogger(__name__)

OnError = Callable[[OSError], None]


@dataclass(frozen=True)
class WalkEntry:
    path: Path
    is_dir: bool


def _load_spec(directory: Path, ignore_files: Sequence[str], onerror: Optional[OnError]) -> Optional[pathspec.GitIgnoreSpec]:
    lines: List[str] = []
    for name in ignore_files:
        candidate = directory / name
        if not candidate.is_file():
            continue
        try:
            lines.extend(candidate.read_text(encoding="utf-8", errors="replace").splitlines())
        except OSError as err:
            if onerror is None:
                raise
            onerror(err)
    if not lines:
        return None
    logger.debug("using ignore rules from %s", directory)
    return pathspec.GitIgnoreSpec.from_lines(lines)


def _ignored(path: Path, is_dir: bool, specs: Sequence[Tuple[Path, pathspec.GitIgnoreSpec]]) -> bool:
    for base, spec in specs:
        rel = path.relative_to(base).as_posix()
        if is_dir:
            rel += "/"
        if spec.match_file(rel):
            return True
    return False


def _ancestor_specs(
    root: Path,
    ignore_root: Optional[Path],
    ignore_files: Sequence[str],
    onerror: Optional[OnError],
) -> List[Tuple[Path, pathspec.GitIgnoreSpec]]:
    if ignore_root is None:
        return []
    ignore_root = Path(ignore_root)
    specs = []
    for directory in reversed(root.parents):
        if directory != ignore_root and ignore_root not in directory.parents:
            continue
        spec = _load_spec(directory, ignore_files, onerror)
        if spec is not None:
            specs.append((directory, spec))
    return specs


def walk(
    root: Path,
    *,
    hidden: bool = False,
    ignore_files: Sequence[str] = (".ignore", ".gitignore"),
    ignore_root: Optional[Path] = None,
    onerror: Optional[OnError] = None,
) -> Iterator[WalkEntry]:
    """Yield every entry under ``root`` depth-first, ``root`` excluded.

    Entries are sorted by name within a directory. Hidden entries (leading
    ``.``) are skipped unless ``hidden`` is true. Symlinks are yielded as
    files and never followed. Errors reading a directory go to ``onerror``
    when given, otherwise they propagate.

    With ``ignore_root``, ignore files in the ancestors of ``root`` from
    ``ignore_root`` down also apply, each relative to its own directory.
    """
    root = Path(root)

    def _children(directory: Path, inherited: List[Tuple[Path, pathspec.GitIgnoreSpec]]) -> Iterator[WalkEntry]:
        spec = _load_spec(directory, ignore_files, onerror)
        specs = inherited + [(directory, spec)] if spec is not None else inherited
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as err:
            if onerror is None:
                raise
            onerror(err)
            return
        for entry in entries:
            if not hidden and entry.name.startswith("."):
                continue
            path = Path(entry.path)
            is_dir = entry.is_dir(follow_symlinks=False)
            if _ignored(path, is_dir, specs):
                continue
            yield WalkEntry(path, is_dir)
            if is_dir:
                yield from _children(path, specs)

    yield from _children(root, _ancestor_specs(root, ignore_root, ignore_files, onerror))


__all__ = ["WalkEntry", "walk"]
