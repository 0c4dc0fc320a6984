"""
cargo-member - manage the members of a Cargo workspace

Adds, removes, copies and moves member packages by editing
``workspace.members`` / ``workspace.exclude`` in the workspace ``Cargo.toml``
without disturbing the rest of the document.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
