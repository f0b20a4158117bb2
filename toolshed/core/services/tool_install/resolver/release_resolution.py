"""
L2 Resolver — desired version → concrete release.

No desired version means "latest". A desired version is rendered to
candidate tag names and looked up in order; the first hit wins.
"""

from __future__ import annotations

import logging

from toolshed.adapters.base import ReleaseProvider
from toolshed.core.models.release import Release
from toolshed.core.models.version import SemanticVersion, Version

logger = logging.getLogger(__name__)


def tag_candidates(version: Version) -> list[str]:
    """Tag names a release for ``version`` may carry.

    Semantic versions are tried with and without the ``v`` prefix,
    since projects disagree (bat tags ``v0.24.0``, just tags ``1.25.2``).
    """
    rendered = version.render()
    if isinstance(version, SemanticVersion):
        return [rendered, version.plain]
    return [rendered]


def resolve_release(
    provider: ReleaseProvider,
    repo: str,
    desired: Version | None = None,
) -> Release | None:
    """Find the release to install.

    Args:
        provider: Release host to query.
        repo: Repository reference.
        desired: Requested version, or None for the latest release.

    Returns:
        The release, or None when the host has no matching release.
    """
    if desired is None:
        return provider.latest(repo)

    for tag in tag_candidates(desired):
        release = provider.by_tag(repo, tag)
        if release is not None:
            return release
        logger.debug("No release tagged %s in %s", tag, repo)
    return None
