"""
Error taxonomy for package operations.

Every failure that crosses a module boundary is a ``ToolshedError``.
Errors split into two families:

- **recoverable** — the current install method cannot serve this
  system (missing asset for the platform, missing native toolchain).
  The package orchestrator logs a warning and tries the next method.
- **fatal** — everything else. The operation stops and the error is
  surfaced to the user, prefixed with the package name when known.
"""

from __future__ import annotations


class ToolshedError(Exception):
    """Base class for all toolshed errors.

    Attributes:
        message: Human-readable description, without the package prefix.
        package: Name of the package the failure relates to, if known.
    """

    def __init__(self, message: str, *, package: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.package = package

    def for_package(self, name: str) -> ToolshedError:
        """Attach a package name unless one is already set."""
        if self.package is None:
            self.package = name
        return self

    def __str__(self) -> str:
        if self.package:
            return f"{self.package}: {self.message}"
        return self.message


# ── Install method errors ───────────────────────────────────────


class MissingReleaseError(ToolshedError):
    """No release exists where one was required."""

    def __init__(self, *, package: str | None = None, version: str | None = None) -> None:
        if version:
            message = f"no release found for version {version}"
        else:
            message = "no release found"
        super().__init__(message, package=package)
        self.version = version


class MissingSystemAssetError(ToolshedError):
    """The release carries no asset built for this system."""

    def __init__(self, *, package: str | None = None, pattern: str | None = None) -> None:
        super().__init__("missing release asset for your system", package=package)
        self.pattern = pattern


class MissingProgramError(ToolshedError):
    """A native installer needs a program that is not on PATH."""

    def __init__(self, program: str, *, package: str | None = None) -> None:
        super().__init__(f"missing program: {program}", package=package)
        self.program = program


class InstallError(ToolshedError):
    """An installer ran but the installation itself failed."""

    def __init__(self, package: str, reason: str) -> None:
        super().__init__(f"installation failed: {reason}", package=package)
        self.reason = reason


class NoInstallMethodError(ToolshedError):
    """Every configured install method was unavailable on this system."""

    def __init__(self, package: str) -> None:
        super().__init__("no known installation method for your system", package=package)


class UnknownPackageError(ToolshedError):
    """A package name that is not in the catalog."""

    def __init__(self, name: str, *, source: str | None = None) -> None:
        if source:
            message = f"unknown package from {source}: {name}"
        else:
            message = f"unknown package: {name}"
        super().__init__(message)
        self.name = name
        self.source = source


# ── External errors ─────────────────────────────────────────────


class ExternalError(ToolshedError):
    """Wraps failures coming from outside toolshed."""


class NetworkError(ExternalError):
    """HTTP transport failure or unexpected status from the release host."""


class FilesystemError(ExternalError):
    """Reading, writing, extracting or linking files failed."""


class DeserializationError(ExternalError):
    """A payload (release metadata, manifest) could not be decoded."""


_RECOVERABLE = (MissingSystemAssetError, MissingProgramError)


def is_recoverable(err: BaseException) -> bool:
    """Whether the orchestrator may fall through to the next install method."""
    return isinstance(err, _RECOVERABLE)
