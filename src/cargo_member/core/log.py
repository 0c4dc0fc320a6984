from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_stdlib_logging(*, level: str = "WARNING", stream: Optional[TextIO] = None) -> logging.Handler:
    """Install one stderr handler on the ``cargo_member`` logger.

    Calling it again replaces the previous handler instead of stacking a
    second one.
    """
    global _HANDLER

    logger = logging.getLogger("cargo_member")
    if _HANDLER is not None:
        logger.removeHandler(_HANDLER)
        _HANDLER.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s %(name)s] %(message)s"))
    handler.setLevel(_level_from_name(level))
    logger.addHandler(handler)
    logger.setLevel(_level_from_name(level))
    logger.propagate = False

    _HANDLER = handler
    return handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: drop the installed handler and restore propagation."""
    global _HANDLER
    logger = logging.getLogger("cargo_member")
    if _HANDLER is not None:
        logger.removeHandler(_HANDLER)
        _HANDLER.close()
    _HANDLER = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
