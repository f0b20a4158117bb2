"""
L4 Execution — install from a prebuilt release asset.

    1. pick the asset for this platform (before touching the disk)
    2. download it into <pkg>/<mod_name>/<asset name>
    3. hand the file to the package's post-install hook
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar

from toolshed.adapters.base import ReleaseProvider
from toolshed.adapters.shell.filesystem import write_file
from toolshed.core.models.package import Dirs, PkgInfo
from toolshed.core.models.release import Release
from toolshed.core.services.errors import FilesystemError, InstallError, MissingReleaseError
from toolshed.core.services.tool_install.execution.base import Installer
from toolshed.core.services.tool_install.execution.hooks import PostInstallHook
from toolshed.core.services.tool_install.resolver.asset_selection import select_asset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetInstaller(Installer):
    """Installer backed by GitHub release assets.

    Attributes:
        pattern: Asset name regex for the current platform, or None when
            the package publishes nothing for it.
        provider: Where to download the asset from.
        hook: Turns the downloaded file into an executable in bin.
    """

    kind: ClassVar[str] = "asset"

    pattern: str | None
    provider: ReleaseProvider
    hook: PostInstallHook = field(default_factory=PostInstallHook)

    def install(self, info: PkgInfo, dirs: Dirs, release: Release | None) -> None:
        if release is None:
            raise MissingReleaseError(package=info.name)

        asset = select_asset(release, self.pattern)

        target_dir = dirs.package_dir(info)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"cannot create {target_dir}: {e}") from e

        data = self.provider.download(asset)
        artifact = target_dir / asset.name
        write_file(artifact, data)
        logger.info("Downloaded %s %s (%s)", info.name, release.tag, asset.name)

        try:
            self.hook.after_install(info, dirs, artifact)
        except FilesystemError as e:
            raise InstallError(info.name, e.message) from e

    def uninstall(self, info: PkgInfo, dirs: Dirs) -> None:
        self.hook.before_uninstall(info, dirs)
        super().uninstall(info, dirs)
