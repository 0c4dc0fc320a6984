"""Path normalization for user-supplied package paths.

Nothing here touches the filesystem: symlinks are not resolved and ``..``
segments are kept as written.
"""
from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Optional, Union

from cargo_member.core.exceptions import InvalidWorkingDirectoryError, NonUtf8PathError, UsageError

PathLike = Union[str, "os.PathLike[str]"]


def trim_leading_dots(path: PathLike) -> str:
    """Strip leading ``.`` components from ``path``.

    Examples:
        >>> trim_leading_dots("./a")
        'a'
        >>> trim_leading_dots("././a/./b")
        'a/./b'
        >>> trim_leading_dots(".")
        ''
    """
    text = os.fspath(path)
    while True:
        if text == ".":
            return ""
        if text.startswith("./"):
            text = text[2:].lstrip("/")
            continue
        if os.sep != "/" and text.startswith("." + os.sep):
            text = text[2:].lstrip(os.sep)
            continue
        return text


def current_dir() -> Path:
    try:
        return Path(os.getcwd())
    except OSError as err:
        raise InvalidWorkingDirectoryError("failed to get the current directory") from err


def normalize_user_path(path: PathLike, cwd: Optional[Path] = None) -> Path:
    """Join ``path`` onto ``cwd`` (default: the process working directory).

    Absolute inputs are returned unchanged apart from dot trimming.
    """
    base = current_dir() if cwd is None else Path(cwd)
    return base / trim_leading_dots(path)


def relative_to_root(path: PurePath, root: PurePath) -> str:
    """Render ``path`` the way it is stored in a workspace array.

    Paths outside ``root`` are kept absolute.
    """
    try:
        rel = PurePath(path).relative_to(root)
    except ValueError:
        rel = PurePath(path)
    text = rel.as_posix()
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as err:
        raise NonUtf8PathError(f"{os.fsdecode(os.fspath(path))!r} is not valid UTF-8") from err
    return text


def same_location(root: PurePath, left: PathLike, right: PathLike) -> bool:
    """Whether two root-relative (or absolute) paths denote the same place.

    Both sides are joined onto ``root`` and compared component-wise, so
    ``a``, ``./a``, ``a/`` and ``<root>/a`` are all equal. ``..`` is not
    collapsed.
    """
    return PurePath(root, os.fspath(left)) == PurePath(root, os.fspath(right))


def ensure_absolute(path: PathLike) -> Path:
    if not PurePath(path).is_absolute():
        raise UsageError(f"must be absolute: {path}")
    return Path(path)


__all__ = [
    "trim_leading_dots",
    "current_dir",
    "normalize_user_path",
    "relative_to_root",
    "same_location",
    "ensure_absolute",
]
