"""
Uninstall use case.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from toolshed.core.models.version import Version
from toolshed.core.use_cases.session import Session

logger = logging.getLogger(__name__)


@dataclass
class UninstallResult:
    name: str
    removed: bool = False
    version: Version | None = None


def run_uninstall(session: Session, name: str) -> UninstallResult:
    """Remove ``name`` from disk, then from the manifest.

    A package that is not installed is left alone and reported with
    ``removed=False``.

    Raises:
        UnknownPackageError: ``name`` is not in the catalog.
    """
    package = session.registry.require(name)
    entry = session.manifest.get(name)
    if entry is None:
        logger.info("%s is not installed", name)
        return UninstallResult(name=name)

    package.uninstall(session.dirs)
    session.manifest.remove(name)
    return UninstallResult(name=name, removed=True, version=entry.version)
