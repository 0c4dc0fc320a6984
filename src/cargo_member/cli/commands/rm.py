"""
cargo member rm command.

SUMMARY: Remove a member from the workspace
"""

from __future__ import annotations

import argparse

from cargo_member.cli import (
    CommandContext,
    add_force_flag,
    add_package_flag,
    add_paths_arg,
    add_standard_flags,
)
from cargo_member.core.operations import RemoveOptions, rm

SUMMARY = "Remove a member from the workspace"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_package_flag(parser, "[cargo] Package(s) to remove")
    add_standard_flags(parser)
    add_force_flag(parser)
    add_paths_arg(parser, "Paths to remove")


def main(args: argparse.Namespace) -> int:
    ctx = CommandContext.from_args(args)
    metadata = ctx.metadata(args)
    paths = ctx.paths(args.paths) + ctx.member_dirs(metadata, args.package)
    options = RemoveOptions(metadata.workspace_root, paths, force=args.force, dry_run=args.dry_run)
    rm(options, ctx.operation)
    return 0
