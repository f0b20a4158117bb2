"""
Update use case.

Order of operations:
    resolve release  →  uninstall  →  install  →  manifest upsert

The manifest keeps the old entry until the new install succeeds; a
failed update can be repeated because uninstall tolerates missing files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from toolshed.core.models.version import Version
from toolshed.core.use_cases.install import desired_version
from toolshed.core.use_cases.session import Session

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    name: str
    updated: bool = False
    previous: Version | None = None
    current: Version | None = None


def run_update(session: Session, name: str, version: str | None = None) -> UpdateResult:
    """Reinstall ``name`` at ``version`` (pin or latest when None).

    A package that is not installed is left alone and reported with
    ``updated=False``.

    Raises:
        UnknownPackageError: ``name`` is not in the catalog.
        ToolshedError: Any fatal install failure.
    """
    package = session.registry.require(name)
    entry = session.manifest.get(name)
    if entry is None:
        logger.info("%s is not installed, nothing to update", name)
        return UpdateResult(name=name)

    current = package.update(session.dirs, desired_version(session, name, version))
    session.manifest.upsert(name, current)
    logger.info("Updated %s %s → %s", name, entry.version, current)
    return UpdateResult(name=name, updated=True, previous=entry.version, current=current)
