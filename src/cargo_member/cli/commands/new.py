"""
cargo member new command.

SUMMARY: Create a new package with `cargo new` and add it to the workspace
"""

from __future__ import annotations

import argparse

from cargo_member.cli import CommandContext, add_offline_flag, add_standard_flags
from cargo_member.core.operations import NewOptions, new

SUMMARY = "Create a new package with `cargo new` and add it to the workspace"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    add_offline_flag(parser)
    parser.add_argument("--registry", metavar="REGISTRY", help="[cargo new] Registry to use")
    parser.add_argument("--vcs", metavar="VCS", help="[cargo new] Version control system to initialize")
    parser.add_argument("--lib", action="store_true", help="[cargo new] Use a library template")
    parser.add_argument("--name", metavar="NAME", help="[cargo new] Package name (defaults to the directory name)")
    parser.add_argument("path", metavar="PATH", help="Directory to create")


def main(args: argparse.Namespace) -> int:
    ctx = CommandContext.from_args(args)
    root = ctx.workspace_root(args, possibly_empty=True, offline=args.offline)
    options = NewOptions(
        workspace_root=root,
        path=ctx.path(args.path),
        registry=args.registry,
        vcs=args.vcs,
        lib=args.lib,
        name=args.name,
        offline=args.offline,
        dry_run=args.dry_run,
    )
    new(options, ctx.operation)
    return 0
