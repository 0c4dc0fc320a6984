"""User-facing status lines written to stderr.

These are part of the tool's interface and are not log records: the
wording and the right-aligned status column are stable.
"""
from __future__ import annotations

import json
from typing import Iterable, List, Optional, TextIO, Tuple

from rich.console import Console
from rich.text import Text


def quote(text: str) -> str:
    """Double-quote ``text`` with JSON-style escapes."""
    return json.dumps(text, ensure_ascii=False)


def make_console(stream: TextIO, color: Optional[bool] = None) -> Console:
    """Build a console on ``stream``.

    ``color`` forces styling on (``True``) or off (``False``); ``None``
    leaves it to terminal detection and ``NO_COLOR``.
    """
    if color is None:
        return Console(file=stream, highlight=False, markup=False, emoji=False, soft_wrap=True)
    return Console(
        file=stream,
        force_terminal=color,
        no_color=not color,
        color_system="standard" if color else None,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )


class StatusStream:
    """Writer for ``<status> <message>`` lines.

    ``stream=None`` discards output, which library callers use when they only
    care about the return values.
    """

    def __init__(self, stream: Optional[TextIO] = None, *, color: Optional[bool] = False, width: int = 12) -> None:
        self.width = width
        self.console = None if stream is None else make_console(stream, color)

    def _line(self, *parts) -> None:
        if self.console is None:
            return
        self.console.print(Text.assemble(*parts))

    def status(self, status: str, message: str, color: str = "green") -> None:
        self._line((status.rjust(self.width), f"bold {color}"), " ", message)

    def warn(self, message: str) -> None:
        self._line(("warning:", "bold yellow"), " ", message)

    def error(self, message: str, causes: Iterable[str] = ()) -> None:
        self._line(("error:", "bold red"), " ", message)
        for cause in causes:
            self._line("\nCaused by:\n  ", cause)

    def raw(self, text: str) -> None:
        if self.console is None:
            return
        self.console.file.write(text)
        self.console.file.flush()


class RecordingStatusStream(StatusStream):
    """A :class:`StatusStream` that keeps ``(kind, status, message)`` events."""

    def __init__(self, width: int = 12) -> None:
        super().__init__(None, width=width)
        self.events: List[Tuple[str, str, str]] = []

    def status(self, status: str, message: str, color: str = "green") -> None:
        self.events.append(("status", status, message))

    def warn(self, message: str) -> None:
        self.events.append(("warning", "warning", message))

    def error(self, message: str, causes: Iterable[str] = ()) -> None:
        self.events.append(("error", "error", message))

    def raw(self, text: str) -> None:
        self.events.append(("raw", "", text))

    def messages(self, kind: str = "status") -> List[str]:
        return [message for k, _, message in self.events if k == kind]


__all__ = ["StatusStream", "RecordingStatusStream", "make_console", "quote"]
