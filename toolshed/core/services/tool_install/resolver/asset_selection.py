"""
L2 Resolver — release asset selection.

Each catalog entry maps platform keys to a regular expression over
asset file names. The first asset (in release order) whose name
matches is the one installed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from toolshed.core.models.release import Asset, Release
from toolshed.core.services.errors import ExternalError, MissingSystemAssetError
from toolshed.core.services.tool_install.detection.platform import PlatformInfo

logger = logging.getLogger(__name__)


def pattern_for_platform(
    patterns: Mapping[str, str],
    platform: PlatformInfo,
) -> str | None:
    """Most specific pattern defined for ``platform``, or None."""
    for key in platform.keys:
        if key in patterns:
            return patterns[key]
    return None


def select_asset(release: Release, pattern: str | None) -> Asset:
    """Pick the first asset of ``release`` whose name matches ``pattern``.

    Raises:
        MissingSystemAssetError: No pattern for this system, or no match.
        ExternalError: The pattern is not a valid regular expression.
    """
    if not pattern:
        raise MissingSystemAssetError()

    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise ExternalError(f"invalid asset pattern {pattern!r}: {e}") from e

    for asset in release.assets:
        if regex.search(asset.name):
            logger.debug("Selected asset %s for pattern %s", asset.name, pattern)
            return asset

    raise MissingSystemAssetError(pattern=pattern)
