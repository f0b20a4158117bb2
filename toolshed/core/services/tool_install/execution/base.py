"""
L4 Execution — installer contract.

An installer knows one way of putting a package on disk. Installers
are stateless; everything they need arrives as arguments.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from toolshed.adapters.shell.filesystem import remove_path
from toolshed.core.models.package import Dirs, PkgInfo
from toolshed.core.models.release import Release

logger = logging.getLogger(__name__)


class Installer(ABC):
    """Abstract base class for install methods.

    Subclasses set ``kind`` ("asset", "go", "npm", "pip", "cargo") and
    implement ``install``. The default ``uninstall`` removes the
    package's executable from the bin directory and its private
    package directory; both removals tolerate absence.
    """

    kind: ClassVar[str] = ""

    @abstractmethod
    def install(self, info: PkgInfo, dirs: Dirs, release: Release | None) -> None:
        """Install ``info`` using ``release`` (None when none was resolved).

        Raises:
            ToolshedError: A recoverable error lets the caller try the
                next method; anything else aborts the install.
        """

    def uninstall(self, info: PkgInfo, dirs: Dirs) -> None:
        if remove_path(dirs.bin_path(info)):
            logger.debug("Removed %s", dirs.bin_path(info))
        if remove_path(dirs.package_dir(info)):
            logger.debug("Removed %s", dirs.package_dir(info))
