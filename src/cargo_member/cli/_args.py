"""Common CLI argument registration utilities.

Every verb shares the Cargo-style flags below; keeping them here keeps the
help text and destinations identical across commands.
"""
from __future__ import annotations

import argparse

from ._output import COLOR_CHOICES


def add_manifest_path_flag(parser: argparse.ArgumentParser) -> None:
    """Add --manifest-path flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--manifest-path",
        metavar="PATH",
        help="[cargo] Path to Cargo.toml",
    )


def add_color_flag(parser: argparse.ArgumentParser) -> None:
    """Add --color flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--color",
        metavar="WHEN",
        choices=COLOR_CHOICES,
        default="auto",
        help="[cargo] Coloring: auto, always, never",
    )


def add_force_flag(parser: argparse.ArgumentParser, help_text: str = "Allow non package paths") -> None:
    """Add --force flag.

    Args:
        parser: ArgumentParser to add the flag to
        help_text: Help text for the flag
    """
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help=help_text,
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be done without making changes",
    )


def add_offline_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--offline",
        action="store_true",
        help="[cargo] Run without accessing the network",
    )


def add_package_flag(parser: argparse.ArgumentParser, help_text: str = "[cargo] Package(s) to operate on") -> None:
    parser.add_argument(
        "--package",
        "-p",
        metavar="SPEC",
        action="append",
        default=[],
        help=help_text,
    )


def add_paths_arg(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("paths", nargs="*", metavar="PATH", help=help_text)


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every verb accepts (--manifest-path, --color, --dry-run).

    Args:
        parser: ArgumentParser to add flags to
    """
    add_manifest_path_flag(parser)
    add_color_flag(parser)
    add_dry_run_flag(parser)


__all__ = [
    "add_manifest_path_flag",
    "add_color_flag",
    "add_force_flag",
    "add_dry_run_flag",
    "add_offline_flag",
    "add_package_flag",
    "add_paths_arg",
    "add_standard_flags",
]
