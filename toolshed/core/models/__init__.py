"""
Domain models for toolshed.

All models are re-exported here for convenient access:

    from toolshed.core.models import Manifest, Release, parse_version
"""

from toolshed.core.models.config import AuthConfig, Config, PackageConfig, PackagesConfig
from toolshed.core.models.manifest import Manifest, ManifestEntry
from toolshed.core.models.package import Dirs, PkgInfo
from toolshed.core.models.release import Asset, Release
from toolshed.core.models.version import (
    CalendarVersion,
    OpaqueVersion,
    SemanticVersion,
    Version,
    canonical_tag,
    is_outdated,
    parse_version,
    render_version,
)

__all__ = [
    # config.py
    "AuthConfig",
    "Config",
    "PackageConfig",
    "PackagesConfig",
    # manifest.py
    "Manifest",
    "ManifestEntry",
    # package.py
    "Dirs",
    "PkgInfo",
    # release.py
    "Asset",
    "Release",
    # version.py
    "CalendarVersion",
    "OpaqueVersion",
    "SemanticVersion",
    "Version",
    "canonical_tag",
    "is_outdated",
    "parse_version",
    "render_version",
]
