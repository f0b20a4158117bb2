"""
Session — everything one CLI invocation works against.

The manifest is loaded once when the session opens and written once
when it closes, whatever the command did in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from toolshed.adapters.base import ReleaseProvider
from toolshed.adapters.github import GitHubReleaseProvider
from toolshed.core.config.loader import default_config_path, load_config, resolve_root
from toolshed.core.models.config import Config
from toolshed.core.models.manifest import Manifest
from toolshed.core.models.package import Dirs
from toolshed.core.persistence.manifest_file import (
    default_manifest_path,
    load_manifest,
    save_manifest,
)
from toolshed.core.services.errors import FilesystemError
from toolshed.core.services.tool_install.detection.platform import PlatformInfo, detect_platform
from toolshed.core.services.tool_install.registry import PackageRegistry, build_registry

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Loaded state for one run."""

    dirs: Dirs
    config: Config
    manifest: Manifest
    registry: PackageRegistry
    platform: PlatformInfo
    config_path: Path
    manifest_path: Path


def open_session(
    root: Path | None = None,
    *,
    provider: ReleaseProvider | None = None,
    platform: PlatformInfo | None = None,
) -> Session:
    """Resolve the root, load config and manifest, build the registry.

    Raises:
        ConfigError: config.yml is invalid.
        DeserializationError: manifest.json is corrupt.
        FilesystemError: the root directories cannot be created.
    """
    dirs = Dirs.from_root(resolve_root(root))
    try:
        dirs.ensure()
    except OSError as e:
        raise FilesystemError(f"cannot create {dirs.root_dir}: {e}") from e

    config_path = default_config_path(dirs.root_dir)
    manifest_path = default_manifest_path(dirs.root_dir)
    config = load_config(config_path)
    manifest = load_manifest(manifest_path)

    platform = platform or detect_platform()
    provider = provider or GitHubReleaseProvider(config.auth)
    registry = build_registry(provider, platform=platform)

    logger.debug(
        "Session opened at %s (%d installed)", dirs.root_dir, manifest.installed_count()
    )
    return Session(
        dirs=dirs,
        config=config,
        manifest=manifest,
        registry=registry,
        platform=platform,
        config_path=config_path,
        manifest_path=manifest_path,
    )


def close_session(session: Session) -> None:
    """Persist the manifest."""
    save_manifest(session.manifest, session.manifest_path)
