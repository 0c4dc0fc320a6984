"""
cargo member deactivate command.

SUMMARY: Remove members from both `workspace.members` and `workspace.exclude`
"""

from __future__ import annotations

import argparse

from cargo_member.cli import CommandContext, add_package_flag, add_paths_arg, add_standard_flags
from cargo_member.core.operations import DeactivateOptions, deactivate

SUMMARY = "Remove members from both `workspace.members` and `workspace.exclude`"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_package_flag(parser, "[cargo] Package(s) to deactivate")
    add_standard_flags(parser)
    add_paths_arg(parser, "Paths to deactivate")


def main(args: argparse.Namespace) -> int:
    ctx = CommandContext.from_args(args)
    metadata = ctx.metadata(args)
    paths = ctx.paths(args.paths) + ctx.member_dirs(metadata, args.package)
    deactivate(DeactivateOptions(metadata.workspace_root, paths, dry_run=args.dry_run), ctx.operation)
    return 0
