"""Cargo as an external collaborator: metadata, package ids and ``cargo new``.

All calls go through :func:`cargo_member.core.subprocess.run_command`; the
Cargo executable is resolved once by :meth:`Cargo.from_settings` and passed
around explicitly.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import unquote, urlsplit

from cargo_member.core.config import Settings
from cargo_member.core.exceptions import (
    AmbiguousOrMissingSpecifierError,
    MetadataError,
    NotAWorkspaceMemberError,
    ResolverUnavailableError,
)
from cargo_member.core.manifest import ManifestDocument
from cargo_member.core.subprocess import render_command, run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Package:
    id: str
    name: str
    manifest_path: Path

    @property
    def directory(self) -> Path:
        return self.manifest_path.parent


@dataclass(frozen=True)
class Metadata:
    """The parts of ``cargo metadata`` output this tool relies on."""

    workspace_root: Path
    packages: Tuple[Package, ...] = ()
    workspace_members: Tuple[str, ...] = ()
    resolve_root: Optional[str] = None
    manifest_file_name: str = field(default="Cargo.toml", compare=False)

    @classmethod
    def from_json(cls, data: Mapping[str, Any], manifest_file_name: str = "Cargo.toml") -> "Metadata":
        try:
            packages = tuple(
                Package(id=str(p["id"]), name=str(p["name"]), manifest_path=Path(p["manifest_path"]))
                for p in data.get("packages") or []
            )
            resolve = data.get("resolve") or {}
            root = resolve.get("root")
            return cls(
                workspace_root=Path(data["workspace_root"]),
                packages=packages,
                workspace_members=tuple(str(m) for m in data.get("workspace_members") or []),
                resolve_root=None if root is None else str(root),
                manifest_file_name=manifest_file_name,
            )
        except (KeyError, TypeError, AttributeError) as err:
            raise MetadataError("unexpected `cargo metadata` output") from err

    def package(self, package_id: str) -> Optional[Package]:
        for pkg in self.packages:
            if pkg.id == package_id:
                return pkg
        return None

    @property
    def root_manifest_path(self) -> Path:
        """Manifest of the resolved root package, or the workspace manifest."""
        if self.resolve_root is not None:
            pkg = self.package(self.resolve_root)
            if pkg is not None:
                return pkg.manifest_path
        return self.workspace_root / self.manifest_file_name

    def members(self) -> List[Package]:
        ids = set(self.workspace_members)
        return [p for p in self.packages if p.id in ids]


def package_name_from_pkgid(pkgid: str) -> str:
    """Extract the package name from a ``cargo pkgid`` locator.

    Examples:
        >>> package_name_from_pkgid("file:///ws/b#0.1.0")
        'b'
        >>> package_name_from_pkgid("path+file:///ws/c#renamed@0.1.0")
        'renamed'
        >>> package_name_from_pkgid("file:///ws/c#renamed:0.1.0")
        'renamed'
    """
    parts = urlsplit(pkgid.strip())
    fragment = parts.fragment
    for sep in ("@", ":"):
        if sep in fragment:
            return unquote(fragment.split(sep, 1)[0])
    segments = [s for s in parts.path.split("/") if s]
    if not segments:
        raise MetadataError(f"could not find a package name in `{pkgid}`")
    return unquote(segments[-1])


class Cargo:
    """Runs Cargo subcommands on behalf of the operations."""

    def __init__(
        self,
        executable: str,
        *,
        settings: Optional[Settings] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.executable = executable
        self.settings = settings or Settings()
        self.env = env

    @classmethod
    def from_settings(cls, settings: Settings, environ: Optional[Mapping[str, str]] = None) -> "Cargo":
        """Resolve the executable from ``toolchain.cargo`` or ``$CARGO``."""
        environ = os.environ if environ is None else environ
        executable = settings.cargo or environ.get(settings.cargo_env_var)
        if not executable:
            raise ResolverUnavailableError(
                f"`${settings.cargo_env_var}` should be present",
                context={"env_var": settings.cargo_env_var},
            )
        return cls(executable, settings=settings)

    def _run(self, args: Sequence[str], cwd: Path):
        try:
            return run_command([self.executable, *args], cwd=cwd, env=self.env)
        except OSError as err:
            raise MetadataError(
                f"failed to execute `{self.executable}`",
                context={"executable": self.executable, "args": list(args)},
            ) from err

    # ---- metadata ----------------------------------------------------------

    def metadata(
        self,
        manifest_path: Optional[Path] = None,
        *,
        cwd: Path,
        offline: bool = False,
        frozen: bool = False,
        locked: bool = False,
    ) -> Metadata:
        args: List[str] = ["metadata", "--format-version", "1"]
        if manifest_path is not None:
            args += ["--manifest-path", str(manifest_path)]
        if frozen:
            args.append("--frozen")
        if offline:
            args.append("--offline")
        if locked:
            args.append("--locked")

        proc = self._run(args, cwd)
        if proc.returncode != 0:
            raise MetadataError(
                (proc.stderr or "").rstrip() or f"`cargo metadata` failed ({proc.returncode})",
                context={"returncode": proc.returncode},
            )
        try:
            data = json.loads(proc.stdout)
        except ValueError as err:
            raise MetadataError("failed to parse the output of `cargo metadata`") from err
        metadata = Metadata.from_json(data, self.settings.manifest_file_name)
        logger.debug("workspace-root: %s", metadata.workspace_root)
        return metadata

    def metadata_unless_empty(
        self,
        manifest_path: Path,
        *,
        cwd: Path,
        offline: bool = False,
    ) -> Optional[Metadata]:
        """Validate the workspace unless it has no members and no package."""
        manifest = ManifestDocument.load(manifest_path, self.settings)
        if not manifest.members() and not manifest.has_package():
            logger.debug("skipping validation of the empty workspace at %s", manifest_path)
            return None
        return self.metadata(manifest_path, cwd=cwd, offline=offline)

    # ---- pkgid -------------------------------------------------------------

    def pkgid(self, manifest_path: Path, spec: Optional[str], *, cwd: Path) -> str:
        args = ["pkgid", "--manifest-path", str(manifest_path)]
        if spec is not None:
            args.append(spec)
        proc = self._run(args, cwd)
        if proc.returncode != 0:
            stderr = (proc.stderr or "").rstrip()
            if stderr.startswith("error: "):
                stderr = stderr[len("error: "):]
            raise AmbiguousOrMissingSpecifierError(stderr, context={"spec": spec})
        return (proc.stdout or "").rstrip()

    # ---- new ---------------------------------------------------------------

    def new(
        self,
        path: Path,
        *,
        cwd: Path,
        registry: Optional[str] = None,
        vcs: Optional[str] = None,
        lib: bool = False,
        name: Optional[str] = None,
        offline: bool = False,
        on_stderr: Optional[Callable[[str], None]] = None,
    ) -> str:
        """Run ``cargo new`` and return its stderr.

        ``on_stderr`` receives the child's stderr before a failure is raised.
        """
        args: List[str] = ["new"]
        if registry is not None:
            args += ["--registry", registry]
        if vcs is not None:
            args += ["--vcs", vcs]
        if lib:
            args.append("--lib")
        if name is not None:
            args += ["--name", name]
        if offline:
            args.append("--offline")
        args.append(str(path))

        proc = self._run(args, cwd)
        if on_stderr is not None and proc.stderr:
            on_stderr(proc.stderr)
        if proc.returncode != 0:
            raise MetadataError(
                f"`{render_command([self.executable, *args])}` failed ({proc.returncode})",
                context={"stderr": proc.stderr, "returncode": proc.returncode},
            )
        return proc.stderr or ""


class MemberResolver:
    """Turns a package specifier into a workspace member."""

    def __init__(self, cargo: Cargo) -> None:
        self.cargo = cargo

    def resolve(self, metadata: Metadata, spec: str) -> Package:
        pkgid = self.cargo.pkgid(metadata.root_manifest_path, spec, cwd=metadata.workspace_root)
        name = package_name_from_pkgid(pkgid)
        logger.debug("`%s` resolved to %s (%s)", spec, pkgid, name)
        for pkg in metadata.members():
            if pkg.name == name:
                return pkg
        raise NotAWorkspaceMemberError(
            f"package `{spec}` is not a member of the workspace",
            context={"spec": spec, "pkgid": pkgid},
        )

    def resolve_dir(self, metadata: Metadata, spec: str) -> Path:
        return self.resolve(metadata, spec).directory

    def resolve_all(self, metadata: Metadata, specs: Sequence[str]) -> List[Path]:
        return [self.resolve_dir(metadata, spec) for spec in specs]


__all__ = [
    "Package",
    "Metadata",
    "Cargo",
    "MemberResolver",
    "package_name_from_pkgid",
]
