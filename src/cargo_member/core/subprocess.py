"""Subprocess helpers for talking to Cargo.

No shell, no timeouts: each call blocks until the child exits.
"""
from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


def render_command(cmd: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(part)) for part in cmd)


def run_command(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path | str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Thin wrapper around subprocess.run that captures text output.

    The exit status is not checked; callers decide what a failure means.
    """
    argv = [str(part) for part in cmd]
    logger.debug("running `%s` in %s", render_command(argv), cwd or ".")
    return subprocess.run(
        argv,
        cwd=None if cwd is None else str(cwd),
        env=None if env is None else dict(env),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=False,
    )


__all__ = ["render_command", "run_command"]
