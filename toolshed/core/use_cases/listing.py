"""
List use case — installed packages, optionally the whole catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from toolshed.core.models.version import Version
from toolshed.core.use_cases.session import Session


@dataclass
class ListEntry:
    name: str
    version: Version | None
    repo: str
    bin_name: str
    installers: list[str] = field(default_factory=list)

    @property
    def installed(self) -> bool:
        return self.version is not None


def list_packages(session: Session, *, include_all: bool = False) -> list[ListEntry]:
    """Entries for installed packages (and, with ``include_all``, the rest).

    Not-installed packages sort first, then by name.
    """
    entries = []
    for package in session.registry:
        manifest_entry = session.manifest.get(package.name)
        if manifest_entry is None and not include_all:
            continue
        entries.append(
            ListEntry(
                name=package.name,
                version=manifest_entry.version if manifest_entry else None,
                repo=package.info.repo,
                bin_name=package.info.bin_name,
                installers=package.installer_kinds,
            )
        )
    entries.sort(key=lambda e: (e.installed, e.name))
    return entries
