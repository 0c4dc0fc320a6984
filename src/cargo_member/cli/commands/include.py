"""
cargo member include command.

SUMMARY: Include a member in the workspace
"""

from __future__ import annotations

import argparse

from cargo_member.cli import (
    CommandContext,
    add_force_flag,
    add_offline_flag,
    add_paths_arg,
    add_standard_flags,
)
from cargo_member.core.operations import IncludeOptions, include

SUMMARY = "Include a member in the workspace"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    add_force_flag(parser)
    add_offline_flag(parser)
    add_paths_arg(parser, "Paths to include")


def main(args: argparse.Namespace) -> int:
    ctx = CommandContext.from_args(args)
    root = ctx.workspace_root(args, possibly_empty=True, offline=args.offline)
    options = IncludeOptions(
        workspace_root=root,
        paths=ctx.paths(args.paths),
        force=args.force,
        dry_run=args.dry_run,
        offline=args.offline,
    )
    include(options, ctx.operation)
    return 0
