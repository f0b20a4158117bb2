"""
Check use case — compare installed versions with the latest releases.

The only concurrent code path: one worker per manifest entry queries
the release host, then results are sorted so the output order never
depends on which lookup finished first.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from toolshed.core.models.version import Version, is_outdated
from toolshed.core.services.errors import ToolshedError
from toolshed.core.services.tool_install.data.constants import CHECK_MAX_WORKERS
from toolshed.core.services.tool_install.orchestration.package import Package
from toolshed.core.use_cases.session import Session

logger = logging.getLogger(__name__)


@dataclass
class CheckItem:
    """Outcome of one latest-release lookup."""

    name: str
    installed: Version
    latest: Version | None = None
    error: str | None = None

    @property
    def status(self) -> str:
        """``error``, ``unresolved``, ``outdated`` or ``current``."""
        if self.error:
            return "error"
        if self.latest is None:
            return "unresolved"
        if is_outdated(self.installed, self.latest):
            return "outdated"
        return "current"

    @property
    def needs_attention(self) -> bool:
        return self.status != "current"


@dataclass
class CheckReport:
    items: list[CheckItem] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def current_count(self) -> int:
        return sum(1 for i in self.items if not i.needs_attention)

    @property
    def outdated_count(self) -> int:
        return sum(1 for i in self.items if i.status == "outdated")


def _check_one(package: Package, installed: Version) -> CheckItem:
    try:
        release = package.latest_release()
    except ToolshedError as e:
        return CheckItem(name=package.name, installed=installed, error=e.message)
    latest = release.version if release is not None else None
    return CheckItem(name=package.name, installed=installed, latest=latest)


def run_check(session: Session, *, max_workers: int = CHECK_MAX_WORKERS) -> CheckReport:
    """Look up the latest release of every installed package in parallel.

    Entries whose package is no longer in the catalog are reported as
    skipped. Items needing attention sort first, then by name.
    """
    report = CheckReport()
    jobs: list[tuple[Package, Version]] = []
    for entry in session.manifest.packages:
        package = session.registry.get(entry.name)
        if package is None:
            logger.warning("%s is in the manifest but not in the catalog", entry.name)
            report.skipped.append(entry.name)
            continue
        jobs.append((package, entry.version))

    if jobs:
        workers = max(1, min(max_workers, len(jobs)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_check_one, package, version) for package, version in jobs]
            report.items = [f.result() for f in futures]

    report.items.sort(key=lambda i: (not i.needs_attention, i.name))
    return report
