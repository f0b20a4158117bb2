"""
Package registry — the catalog bound to this host.

Built once per run from ``TOOL_CATALOG``: each recipe becomes a
``Package`` whose asset installer carries the pattern for the detected
platform (None when the project publishes nothing for it) and whose
native installer is built from the recipe's ``via``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from toolshed.adapters.base import ReleaseProvider
from toolshed.core.models.package import PkgInfo
from toolshed.core.services.errors import UnknownPackageError
from toolshed.core.services.tool_install.data.catalog import TOOL_CATALOG
from toolshed.core.services.tool_install.detection.platform import PlatformInfo, detect_platform
from toolshed.core.services.tool_install.execution.asset_installer import AssetInstaller
from toolshed.core.services.tool_install.execution.base import Installer
from toolshed.core.services.tool_install.execution.hooks import PostInstallHook
from toolshed.core.services.tool_install.execution.native_installers import (
    CargoInstaller,
    GoInstaller,
    NpmInstaller,
    PipInstaller,
)
from toolshed.core.services.tool_install.orchestration.package import Package
from toolshed.core.services.tool_install.resolver.asset_selection import pattern_for_platform

logger = logging.getLogger(__name__)


def _native_installer(name: str, spec: Mapping[str, Any]) -> Installer:
    via = spec["via"]
    deps = tuple(spec.get("deps", ()))
    hook = spec.get("hook") or PostInstallHook()

    if via == "go":
        return GoInstaller()
    if via == "npm":
        return NpmInstaller(dependencies=deps, link_binary=spec.get("link", True), hook=hook)
    if via == "pip":
        return PipInstaller(dependencies=deps)
    if via == "cargo":
        return CargoInstaller()
    raise ValueError(f"{name}: unknown native installer {via!r}")


def build_package(
    name: str,
    recipe: Mapping[str, Any],
    provider: ReleaseProvider,
    platform: PlatformInfo,
) -> Package:
    """Turn one catalog recipe into a ``Package`` for ``platform``."""
    info = PkgInfo(
        name=name,
        repo=recipe["repo"],
        mod_name=recipe.get("module", ""),
        bin_name=recipe.get("bin", ""),
    )

    asset_installer = None
    if "asset" in recipe:
        asset = recipe["asset"]
        asset_installer = AssetInstaller(
            pattern=pattern_for_platform(asset["patterns"], platform),
            provider=provider,
            hook=asset.get("hook") or PostInstallHook(),
        )

    native_installer = None
    if "native" in recipe:
        native_installer = _native_installer(name, recipe["native"])

    return Package(
        info=info,
        provider=provider,
        asset_installer=asset_installer,
        native_installer=native_installer,
    )


class PackageRegistry:
    """Name → Package lookup, iterated in name order."""

    def __init__(self, packages: list[Package]) -> None:
        self._packages = {p.name: p for p in packages}

    def get(self, name: str) -> Package | None:
        return self._packages.get(name)

    def require(self, name: str, *, source: str | None = None) -> Package:
        """Look up ``name``; raises ``UnknownPackageError`` if absent."""
        package = self._packages.get(name)
        if package is None:
            raise UnknownPackageError(name, source=source)
        return package

    def names(self) -> list[str]:
        return sorted(self._packages)

    def __contains__(self, name: object) -> bool:
        return name in self._packages

    def __iter__(self) -> Iterator[Package]:
        return (self._packages[n] for n in self.names())

    def __len__(self) -> int:
        return len(self._packages)


def build_registry(
    provider: ReleaseProvider,
    *,
    platform: PlatformInfo | None = None,
    catalog: Mapping[str, Mapping[str, Any]] | None = None,
) -> PackageRegistry:
    """Build the registry for ``platform`` (detected when None)."""
    platform = platform or detect_platform()
    catalog = TOOL_CATALOG if catalog is None else catalog
    packages = [
        build_package(name, recipe, provider, platform) for name, recipe in catalog.items()
    ]
    logger.debug("Registry built with %d packages for %s", len(packages), platform)
    return PackageRegistry(packages)
