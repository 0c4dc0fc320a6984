"""
cargo-member command-line interface.

Commands live in ``cli/commands/`` and are discovered by the dispatcher.

Framework utilities for building CLI commands:
- _output: color selection and error rendering
- _args: common argument registration helpers
- _context: per-invocation settings, status stream and Cargo
"""
from ._args import (
    add_color_flag,
    add_dry_run_flag,
    add_force_flag,
    add_manifest_path_flag,
    add_offline_flag,
    add_package_flag,
    add_paths_arg,
    add_standard_flags,
)
from ._context import CommandContext
from ._output import print_error, status_stream, use_color

__all__ = [
    # Argument helpers
    "add_color_flag",
    "add_dry_run_flag",
    "add_force_flag",
    "add_manifest_path_flag",
    "add_offline_flag",
    "add_package_flag",
    "add_paths_arg",
    "add_standard_flags",
    # Context and output
    "CommandContext",
    "print_error",
    "status_stream",
    "use_color",
]
