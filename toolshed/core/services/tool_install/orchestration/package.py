"""
Orchestration — one catalog package and its install fallback policy.

A package has up to two install methods, tried in order:

    1. asset installer   (prebuilt release asset for this platform)
    2. native installer  (go / npm / pip / cargo)

A method that cannot serve this system (no asset for the platform, no
toolchain on PATH) is skipped with a warning. Any other error stops
the operation. When every method was skipped the package reports
``NoInstallMethodError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from toolshed.adapters.base import ReleaseProvider
from toolshed.core.models.package import Dirs, PkgInfo
from toolshed.core.models.release import Release
from toolshed.core.models.version import OpaqueVersion, Version
from toolshed.core.services.errors import (
    MissingReleaseError,
    NoInstallMethodError,
    ToolshedError,
    is_recoverable,
)
from toolshed.core.services.tool_install.execution.base import Installer
from toolshed.core.services.tool_install.resolver.release_resolution import resolve_release

logger = logging.getLogger(__name__)

# Recorded when a native install ran without a resolvable release.
UNKNOWN_VERSION = OpaqueVersion("unknown")


@dataclass(frozen=True)
class Package:
    """A catalog entry bound to its installers and release provider."""

    info: PkgInfo
    provider: ReleaseProvider
    asset_installer: Installer | None = None
    native_installer: Installer | None = None

    def __post_init__(self) -> None:
        if self.asset_installer is None and self.native_installer is None:
            raise ValueError(f"package {self.info.name} needs at least one installer")

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def installers(self) -> list[Installer]:
        """Install methods in preference order."""
        return [i for i in (self.asset_installer, self.native_installer) if i is not None]

    @property
    def installer_kinds(self) -> list[str]:
        return [i.kind for i in self.installers]

    # ── Release lookup ──

    def latest_release(self) -> Release | None:
        return resolve_release(self.provider, self.info.repo)

    def resolve(self, version: Version | None) -> Release | None:
        """Resolve the release to install.

        Raises:
            MissingReleaseError: An explicit ``version`` has no release.
        """
        try:
            release = resolve_release(self.provider, self.info.repo, version)
        except ToolshedError as e:
            raise e.for_package(self.name)
        if version is not None and release is None:
            raise MissingReleaseError(package=self.name, version=version.render())
        return release

    # ── Lifecycle ──

    def install(self, dirs: Dirs, version: Version | None = None) -> Version:
        """Install ``version`` (latest when None).

        Returns:
            The version actually installed, taken from the resolved release.
        """
        return self.install_release(dirs, self.resolve(version))

    def install_release(self, dirs: Dirs, release: Release | None) -> Version:
        """Run the installers in order against an already-resolved release."""
        for installer in self.installers:
            try:
                installer.install(self.info, dirs, release)
            except ToolshedError as e:
                if not is_recoverable(e):
                    raise e.for_package(self.name)
                logger.warning(
                    "%s: %s install unavailable (%s)", self.name, installer.kind, e.message
                )
                continue

            logger.info("Installed %s via %s", self.name, installer.kind)
            return release.version if release is not None else UNKNOWN_VERSION

        raise NoInstallMethodError(self.name)

    def uninstall(self, dirs: Dirs) -> None:
        """Remove whatever any of the install methods may have put on disk."""
        for installer in self.installers:
            try:
                installer.uninstall(self.info, dirs)
            except ToolshedError as e:
                raise e.for_package(self.name)
        logger.info("Uninstalled %s", self.name)

    def update(self, dirs: Dirs, version: Version | None = None) -> Version:
        """Replace the installed copy with ``version`` (latest when None).

        The release is resolved before anything is removed, so a failed
        lookup leaves the current installation in place.
        """
        release = self.resolve(version)
        self.uninstall(dirs)
        return self.install_release(dirs, release)
