"""Typed, immutable view of the merged configuration.

The CLI builds one :class:`Settings` per invocation and passes it down
explicitly; library callers may rely on :func:`get_settings`.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional, Tuple

from .manager import ConfigManager


@dataclass(frozen=True)
class Settings:
    manifest_file_name: str = "Cargo.toml"
    workspace_table: str = "workspace"
    members_field: str = "members"
    exclude_field: str = "exclude"
    package_table: str = "package"
    package_name_field: str = "name"
    package_workspace_field: str = "workspace"
    vcs_dirs: Tuple[str, ...] = (".git",)
    ignore_files: Tuple[str, ...] = (".ignore", ".gitignore")
    cargo_env_var: str = "CARGO"
    cargo: Optional[str] = None
    status_width: int = 12
    error_exit_code: int = 101
    log_level: str = "WARNING"

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "Settings":
        manifest = cfg["manifest"]
        package = cfg["package"]
        copy = cfg["copy"]
        toolchain = cfg["toolchain"]
        output = cfg["output"]
        return cls(
            manifest_file_name=str(manifest["file_name"]),
            workspace_table=str(manifest["workspace_table"]),
            members_field=str(manifest["members_field"]),
            exclude_field=str(manifest["exclude_field"]),
            package_table=str(package["table"]),
            package_name_field=str(package["name_field"]),
            package_workspace_field=str(package["workspace_field"]),
            vcs_dirs=tuple(str(d) for d in copy["vcs_dirs"]),
            ignore_files=tuple(str(f) for f in copy["ignore_files"]),
            cargo_env_var=str(toolchain["cargo_env_var"]),
            cargo=toolchain.get("cargo") or None,
            status_width=int(output["status_width"]),
            error_exit_code=int(output["error_exit_code"]),
            log_level=str(cfg["logging"]["level"]).upper(),
        )

    def field_name(self, field: str) -> str:
        """Render ``field`` the way status lines and errors name it."""
        return f"{self.workspace_table}.{field}"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Load configuration from all sources and project it into :class:`Settings`."""
    return Settings.from_config(ConfigManager(environ).load_config())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def reset_settings_cache() -> None:
    get_settings.cache_clear()


__all__ = ["Settings", "load_settings", "get_settings", "reset_settings_cache"]
