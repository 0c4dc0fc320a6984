from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping


class CargoMemberError(Exception):
    """Base exception for cargo-member."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


# ---------------------------------------------------------------------------
# Usage errors
# ---------------------------------------------------------------------------


class UsageError(CargoMemberError, ValueError):
    """Raised when the caller asked for something that cannot be done."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CargoMemberError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class RootIsNotAMemberError(UsageError):
    """Raised when the workspace root itself is passed as a member path."""


class NonUtf8PathError(UsageError):
    """Raised when a path cannot be stored as UTF-8 text in the manifest."""


class InvalidWorkingDirectoryError(UsageError):
    """Raised when the current working directory cannot be determined."""


class NotAPackageError(UsageError):
    """Raised when a directory has no ``Cargo.toml`` and ``force`` is off."""


# ---------------------------------------------------------------------------
# Resolution errors
# ---------------------------------------------------------------------------


class ResolutionError(CargoMemberError):
    """Raised when a package specifier cannot be turned into a directory."""


class ResolverUnavailableError(ResolutionError):
    """Raised when the environment does not expose the Cargo executable."""


class AmbiguousOrMissingSpecifierError(ResolutionError):
    """Raised when ``cargo pkgid`` rejects the specifier."""


class NotAWorkspaceMemberError(ResolutionError):
    """Raised when the resolved package is not a member of the workspace."""


# ---------------------------------------------------------------------------
# Document-shape errors
# ---------------------------------------------------------------------------


class ManifestError(CargoMemberError):
    """Raised when a manifest cannot be read, parsed, or has the wrong shape."""


class NotAnArrayError(ManifestError):
    """Raised when ``workspace.members`` / ``workspace.exclude`` is not an array."""


class NonUtf8NameError(ManifestError):
    """Raised when a renamed package would get a name that is not valid UTF-8."""


# ---------------------------------------------------------------------------
# Filesystem / external errors
# ---------------------------------------------------------------------------


class RelocationError(CargoMemberError):
    """Raised for errors while copying or removing package directories."""


class DestinationExistsError(RelocationError, FileExistsError):
    """Raised when the effective copy destination already exists."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CargoMemberError.__init__(self, message, context=context)
        FileExistsError.__init__(self, message)


class MetadataError(CargoMemberError, RuntimeError):
    """Raised when a Cargo subprocess (metadata, pkgid, new) fails."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CargoMemberError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class ConfigError(CargoMemberError):
    """Raised when the configuration is missing, malformed, or fails validation."""


def iter_causes(error: BaseException) -> Iterator[BaseException]:
    """Yield the explicit ``raise ... from`` chain below ``error``, outermost first."""
    seen = {id(error)}
    cause = error.__cause__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        yield cause
        cause = cause.__cause__


__all__ = [
    "CargoMemberError",
    "UsageError",
    "RootIsNotAMemberError",
    "NonUtf8PathError",
    "InvalidWorkingDirectoryError",
    "NotAPackageError",
    "ResolutionError",
    "ResolverUnavailableError",
    "AmbiguousOrMissingSpecifierError",
    "NotAWorkspaceMemberError",
    "ManifestError",
    "NotAnArrayError",
    "NonUtf8NameError",
    "RelocationError",
    "DestinationExistsError",
    "MetadataError",
    "ConfigError",
    "iter_causes",
]
