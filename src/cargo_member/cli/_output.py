"""Terminal output for the CLI: color selection and error rendering."""
from __future__ import annotations

import sys
from typing import Optional, TextIO

from cargo_member.core.config import Settings
from cargo_member.core.exceptions import iter_causes
from cargo_member.core.status import StatusStream

COLOR_CHOICES = ("auto", "always", "never")


def use_color(choice: str) -> Optional[bool]:
    """Map ``--color <choice>`` to a forced setting, or ``None`` for ``auto``."""
    return {"always": True, "never": False}.get(choice)


def status_stream(choice: str = "auto", settings: Optional[Settings] = None, stream: Optional[TextIO] = None) -> StatusStream:
    stream = stream if stream is not None else sys.stderr
    width = (settings or Settings()).status_width
    return StatusStream(stream, color=use_color(choice), width=width)


def print_error(status: StatusStream, error: BaseException) -> None:
    """Print ``error: <message>`` followed by one ``Caused by:`` block per cause."""
    status.error(str(error), [str(cause) for cause in iter_causes(error)])


__all__ = ["COLOR_CHOICES", "use_color", "status_stream", "print_error"]
