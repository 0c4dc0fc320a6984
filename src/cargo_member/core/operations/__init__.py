"""User-facing verbs.

Each verb takes a frozen options dataclass and an optional
:class:`OperationContext` carrying settings, the status stream and Cargo.
"""
from __future__ import annotations

from ._common import OperationContext
from .cp import CopyOptions, cp
from .deactivate import DeactivateOptions, deactivate
from .exclude import ExcludeOptions, exclude
from .focus import FocusOptions, focus
from .include import IncludeOptions, include
from .mv import MoveOptions, mv
from .new import NewOptions, new
from .rm import RemoveOptions, rm

__all__ = [
    "OperationContext",
    "CopyOptions",
    "DeactivateOptions",
    "ExcludeOptions",
    "FocusOptions",
    "IncludeOptions",
    "MoveOptions",
    "NewOptions",
    "RemoveOptions",
    "cp",
    "deactivate",
    "exclude",
    "focus",
    "include",
    "mv",
    "new",
    "rm",
]
