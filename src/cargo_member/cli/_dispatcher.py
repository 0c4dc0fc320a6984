"""
Auto-discovery CLI dispatcher for cargo-member.

Scans ``cli/commands/`` and registers every module as a verb.
Adding a verb = adding a .py file exposing SUMMARY, register_args and main.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from cargo_member.core.config import Settings, load_settings
from cargo_member.core.exceptions import CargoMemberError, ConfigError
from cargo_member.core.log import configure_stdlib_logging

from ._output import print_error, status_stream

logger = logging.getLogger(__name__)

# Cargo runs external subcommands as `cargo-member member <verb> ...`.
SUBCOMMAND_TOKEN = "member"


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Discover verbs under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        module = importlib.import_module(f"cargo_member.cli.commands.{cmd_name}")
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with auto-discovered verbs.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="cargo member",
        description="Manage Cargo workspace members",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in discover_commands().items():
        cmd_parser = subparsers.add_parser(cmd_name, help=cmd_info["summary"], description=cmd_info["summary"])
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    from cargo_member import __version__

    return __version__


def _strip_subcommand_token(argv: list[str]) -> list[str]:
    if argv and argv[0] == SUBCOMMAND_TOKEN:
        return argv[1:]
    return argv


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the cargo-member CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, the configured error code on failure)
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = _strip_subcommand_token(list(argv))

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "_func", None):
        parser.print_help()
        return 0

    color = getattr(args, "color", "auto")
    try:
        settings = load_settings()
    except ConfigError as err:
        defaults = Settings()
        print_error(status_stream(color, defaults), err)
        return defaults.error_exit_code

    configure_stdlib_logging(level=settings.log_level)
    status = status_stream(color, settings)
    args._settings = settings
    args._status = status

    try:
        return int(args._func(args) or 0)
    except (CargoMemberError, OSError) as err:
        logger.debug("%s failed", args.command, exc_info=True)
        print_error(status, err)
        return settings.error_exit_code


def cli_entry() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
