"""A recording stand-in for :class:`cargo_member.core.metadata.Cargo`."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from cargo_member.core.config import Settings
from cargo_member.core.exceptions import AmbiguousOrMissingSpecifierError, MetadataError
from cargo_member.core.metadata import Cargo, Metadata, Package


class FakeCargo(Cargo):
    """Answers metadata/pkgid/new from canned data and records every call.

    ``packages`` maps a package name to its directory; each becomes a
    workspace member in the returned metadata. ``pkgids`` maps a specifier to
    the locator ``cargo pkgid`` would print.
    """

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        workspace_root: Optional[Path] = None,
        packages: Optional[Mapping[str, Path]] = None,
        pkgids: Optional[Mapping[str, str]] = None,
        metadata_error: Optional[str] = None,
        new_stderr: str = "",
        new_error: Optional[str] = None,
    ) -> None:
        super().__init__("cargo", settings=settings)
        self.workspace_root = workspace_root
        self.packages: Dict[str, Path] = dict(packages or {})
        self.pkgids: Dict[str, str] = dict(pkgids or {})
        self.metadata_error = metadata_error
        self.new_stderr = new_stderr
        self.new_error = new_error
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def calls_to(self, name: str) -> List[Dict[str, Any]]:
        return [kwargs for call, kwargs in self.calls if call == name]

    def metadata(
        self,
        manifest_path: Optional[Path] = None,
        *,
        cwd: Path,
        offline: bool = False,
        frozen: bool = False,
        locked: bool = False,
    ) -> Metadata:
        self.calls.append(("metadata", {"manifest_path": manifest_path, "cwd": cwd, "offline": offline}))
        if self.metadata_error is not None:
            raise MetadataError(self.metadata_error)
        root = self.workspace_root
        if root is None:
            root = Path(manifest_path).parent if manifest_path is not None else Path(cwd)
        packages = tuple(
            Package(id=f"{name} 0.1.0 (path+file://{directory})", name=name, manifest_path=Path(directory) / "Cargo.toml")
            for name, directory in self.packages.items()
        )
        return Metadata(
            workspace_root=Path(root),
            packages=packages,
            workspace_members=tuple(p.id for p in packages),
        )

    def pkgid(self, manifest_path: Path, spec: Optional[str], *, cwd: Path) -> str:
        self.calls.append(("pkgid", {"manifest_path": manifest_path, "spec": spec, "cwd": cwd}))
        if spec in self.pkgids:
            return self.pkgids[spec]
        if spec in self.packages:
            return f"path+file://{self.packages[spec]}#{spec}@0.1.0"
        raise AmbiguousOrMissingSpecifierError(
            f"package ID specification `{spec}` did not match any packages"
        )

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
        on_stderr=None,
    ) -> str:
        self.calls.append(
            (
                "new",
                {
                    "path": path,
                    "cwd": cwd,
                    "registry": registry,
                    "vcs": vcs,
                    "lib": lib,
                    "name": name,
                    "offline": offline,
                },
            )
        )
        stderr = self.new_stderr
        if on_stderr is not None and stderr:
            on_stderr(stderr)
        if self.new_error is not None:
            raise MetadataError(self.new_error)
        path = Path(path)
        (path / "src").mkdir(parents=True, exist_ok=True)
        (path / "Cargo.toml").write_text(
            f'[package]\nname = "{name or path.name}"\nversion = "0.1.0"\n',
            encoding="utf-8",
        )
        return stderr


def write_script(path: Path, stdout: str = "", stderr: str = "", returncode: int = 0) -> Path:
    """Write an executable shell script that prints canned output and records its argv."""
    log = path.with_suffix(".args")
    path.write_text(
        "#!/bin/sh\n"
        f'printf "%s\\n" "$@" > "{log}"\n'
        f"cat <<'__STDOUT__'\n{stdout}\n__STDOUT__\n"
        f"cat >&2 <<'__STDERR__'\n{stderr}\n__STDERR__\n"
        f"exit {returncode}\n",
        encoding="utf-8",
    )
    path.chmod(0o755)
    return path


def script_args(path: Path) -> Sequence[str]:
    return path.with_suffix(".args").read_text(encoding="utf-8").splitlines()


__all__ = ["FakeCargo", "write_script", "script_args"]
