"""
cargo member cp command.

SUMMARY: Copy a member in the workspace
"""

from __future__ import annotations

import argparse

from cargo_member.cli import CommandContext, add_standard_flags
from cargo_member.core.operations import CopyOptions, cp

SUMMARY = "Copy a member in the workspace"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    parser.add_argument(
        "--rename",
        action="store_true",
        help="Rename the copied package after its new directory",
    )
    parser.add_argument("src", metavar="SRC", help="Package ID specification")
    parser.add_argument("dst", metavar="DST", help="Directory")


def main(args: argparse.Namespace) -> int:
    ctx = CommandContext.from_args(args)
    metadata = ctx.metadata(args)
    (src,) = ctx.member_dirs(metadata, [args.src])
    cp(CopyOptions(src, ctx.path(args.dst), rename=args.rename, dry_run=args.dry_run), ctx.operation)
    return 0
