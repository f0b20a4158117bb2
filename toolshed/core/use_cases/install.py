"""
Install use case — ensure-installed reconciliation plus one explicit install.

    1. validate every ensure-installed name against the catalog
    2. install each ensure-installed package missing from the manifest
    3. install the requested package, unless it is already installed

Each successful install is recorded in the manifest immediately, so a
fatal error later in the run keeps the work already done.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from toolshed.core.models.version import Version, parse_version
from toolshed.core.services.tool_install.orchestration.package import UNKNOWN_VERSION, Package
from toolshed.core.use_cases.session import Session

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]

ENSURE_SOURCE = "ensure-installed"


@dataclass
class InstallOutcome:
    name: str
    version: Version | None = None
    already_installed: bool = False
    ensured: bool = False

    @property
    def version_resolved(self) -> bool:
        """False when no release was resolved and latest was installed blind."""
        return self.version is not None and self.version != UNKNOWN_VERSION


@dataclass
class InstallResult:
    ensured: list[InstallOutcome] = field(default_factory=list)
    requested: InstallOutcome | None = None


def desired_version(session: Session, name: str, explicit: str | None = None) -> Version | None:
    """Explicit version, else the configured pin, else None (latest)."""
    raw = explicit or session.config.pinned_version(name)
    return parse_version(raw) if raw else None


def install_package(
    session: Session,
    package: Package,
    version: Version | None = None,
) -> Version:
    """Install one package and record it in the manifest."""
    installed = package.install(session.dirs, version)
    session.manifest.upsert(package.name, installed)
    return installed


def ensure_installed(
    session: Session,
    on_progress: ProgressCallback | None = None,
) -> list[InstallOutcome]:
    """Install every ensure-installed package that is not in the manifest.

    Raises:
        UnknownPackageError: A listed name is not in the catalog; raised
            before anything is installed.
    """
    names = session.config.packages.ensure_installed
    packages = [session.registry.require(n, source=ENSURE_SOURCE) for n in names]

    outcomes = []
    for package in packages:
        if session.manifest.installed(package.name):
            continue
        if on_progress:
            on_progress(package.name, "installing")
        version = install_package(session, package, desired_version(session, package.name))
        outcomes.append(InstallOutcome(name=package.name, version=version, ensured=True))
        logger.info("Ensured %s %s", package.name, version)
    return outcomes


def run_install(
    session: Session,
    name: str | None = None,
    version: str | None = None,
    *,
    on_progress: ProgressCallback | None = None,
) -> InstallResult:
    """Reconcile ensure-installed, then install ``name`` if given.

    Args:
        session: Open session.
        name: Package to install, or None to only reconcile.
        version: Explicit version for ``name``; overrides a config pin.
        on_progress: Called as ``(package, "installing")`` before each install.

    Raises:
        UnknownPackageError: ``name`` or an ensure-installed name is unknown.
        ToolshedError: Any fatal install failure.
    """
    result = InstallResult()
    result.ensured = ensure_installed(session, on_progress)

    if name is None:
        return result

    package = session.registry.require(name)
    existing = session.manifest.get(name)
    if existing is not None:
        result.requested = InstallOutcome(
            name=name, version=existing.version, already_installed=True
        )
        return result

    if on_progress:
        on_progress(name, "installing")
    installed = install_package(session, package, desired_version(session, name, version))
    result.requested = InstallOutcome(name=name, version=installed)
    return result
