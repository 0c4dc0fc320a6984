"""Test helper modules for the cargo-member test suite.

- workspace: builders for throwaway workspaces and packages on disk
- fake_cargo: a recording stand-in for the Cargo collaborator, plus a
  shell-script builder for exercising the real subprocess path
"""
from __future__ import annotations

from helpers.fake_cargo import FakeCargo, script_args, write_script
from helpers.workspace import make_package, make_workspace, read_manifest

__all__ = [
    "FakeCargo",
    "script_args",
    "write_script",
    "make_package",
    "make_workspace",
    "read_manifest",
]
