"""
Info use case — where things live and how many are installed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from toolshed.core.use_cases.session import Session


@dataclass
class InfoResult:
    root_dir: Path
    bin_dir: Path
    pkg_dir: Path
    config_path: Path
    manifest_path: Path
    platform: str
    installed_count: int
    available_count: int

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "root_dir": str(self.root_dir),
            "bin_dir": str(self.bin_dir),
            "pkg_dir": str(self.pkg_dir),
            "config_path": str(self.config_path),
            "manifest_path": str(self.manifest_path),
            "platform": self.platform,
            "installed_count": self.installed_count,
            "available_count": self.available_count,
        }


def get_info(session: Session) -> InfoResult:
    return InfoResult(
        root_dir=session.dirs.root_dir,
        bin_dir=session.dirs.bin_dir,
        pkg_dir=session.dirs.pkg_dir,
        config_path=session.config_path,
        manifest_path=session.manifest_path,
        platform=str(session.platform),
        installed_count=session.manifest.installed_count(),
        available_count=len(session.registry),
    )
