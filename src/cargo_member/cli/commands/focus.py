"""
cargo member focus command.

SUMMARY: Include a member and exclude every other package in the workspace
"""

from __future__ import annotations

import argparse

from cargo_member.cli import CommandContext, add_offline_flag, add_standard_flags
from cargo_member.core.operations import FocusOptions, focus

SUMMARY = "Include a member and exclude every other package in the workspace"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    add_offline_flag(parser)
    parser.add_argument("path", metavar="PATH", help="Path to focus on")


def main(args: argparse.Namespace) -> int:
    ctx = CommandContext.from_args(args)
    root = ctx.workspace_root(args, possibly_empty=True, offline=args.offline)
    options = FocusOptions(root, ctx.path(args.path), dry_run=args.dry_run, offline=args.offline)
    focus(options, ctx.operation)
    return 0
