"""Per-invocation state shared by the command modules."""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from cargo_member.core.config import Settings, load_settings
from cargo_member.core.exceptions import MetadataError
from cargo_member.core.manifest import ManifestDocument
from cargo_member.core.metadata import Metadata
from cargo_member.core.operations import OperationContext
from cargo_member.core.paths import current_dir, normalize_user_path
from cargo_member.core.status import StatusStream

from ._output import status_stream

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    settings: Settings
    status: StatusStream
    cwd: Path
    operation: OperationContext

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CommandContext":
        """Build the context from what the dispatcher attached to ``args``.

        Commands called directly (tests) get freshly loaded settings and a
        stderr status stream.
        """
        settings = getattr(args, "_settings", None) or load_settings()
        status = getattr(args, "_status", None) or status_stream(getattr(args, "color", "auto"), settings)
        operation = OperationContext(settings, status, cargo=getattr(args, "_cargo", None))
        return cls(settings=settings, status=status, cwd=current_dir(), operation=operation)

    def path(self, raw: str) -> Path:
        return normalize_user_path(raw, self.cwd)

    def paths(self, raws: Iterable[str]) -> List[Path]:
        return [self.path(raw) for raw in raws]

    def manifest_path(self, args: argparse.Namespace) -> Optional[Path]:
        raw = getattr(args, "manifest_path", None)
        return self.path(raw) if raw else None

    def metadata(self, args: argparse.Namespace, *, offline: bool = False) -> Metadata:
        return self.operation.cargo.metadata(self.manifest_path(args), cwd=self.cwd, offline=offline)

    def workspace_root(self, args: argparse.Namespace, *, possibly_empty: bool = False, offline: bool = False) -> Path:
        """Root of the workspace the invocation targets.

        With ``possibly_empty`` a failing ``cargo metadata`` falls back to the
        nearest manifest with a ``[workspace]`` table, since a workspace with
        no members yet is still a valid target for include/new.
        """
        try:
            return self.metadata(args, offline=offline).workspace_root
        except MetadataError:
            if not possibly_empty:
                raise
            found = self._nearest_workspace(args)
            if found is None:
                raise
            logger.debug("cargo metadata failed; using the workspace at %s", found)
            return found

    def _nearest_workspace(self, args: argparse.Namespace) -> Optional[Path]:
        manifest_path = self.manifest_path(args)
        start = manifest_path.parent if manifest_path is not None else self.cwd
        for directory in [start, *start.parents]:
            candidate = directory / self.settings.manifest_file_name
            if not candidate.is_file():
                continue
            manifest = ManifestDocument.load(candidate, self.settings)
            if self.settings.workspace_table in manifest.document:
                return directory
        return None

    def member_dirs(self, metadata: Metadata, specs: Iterable[str]) -> List[Path]:
        return self.operation.resolver.resolve_all(metadata, list(specs))


__all__ = ["CommandContext"]
