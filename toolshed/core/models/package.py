"""
Package identity and the on-disk directory layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

BIN_DIR = "bin"
PKG_DIR = "pkg"


@dataclass(frozen=True)
class PkgInfo:
    """Static identity of a catalog package.

    Attributes:
        name: User-facing name (``bat``, ``gopls``).
        repo: Release repository, ``owner/repo`` or a github.com URL.
        mod_name: Name used by native installers and for the package
            directory (``fd-find`` for ``fd``). Defaults to ``name``.
        bin_name: Executable placed in the bin directory. Defaults to ``name``.
    """

    name: str
    repo: str
    mod_name: str = ""
    bin_name: str = ""

    def __post_init__(self) -> None:
        if not self.mod_name:
            object.__setattr__(self, "mod_name", self.name)
        if not self.bin_name:
            object.__setattr__(self, "bin_name", self.name)


@dataclass(frozen=True)
class Dirs:
    """Directory layout rooted at the toolshed home.

    ``bin_dir`` holds one executable or symlink per installed package;
    ``pkg_dir`` holds a private subdirectory per package.
    """

    root_dir: Path
    bin_dir: Path
    pkg_dir: Path

    @classmethod
    def from_root(cls, root: Path) -> Dirs:
        root = Path(root)
        return cls(root_dir=root, bin_dir=root / BIN_DIR, pkg_dir=root / PKG_DIR)

    def ensure(self) -> None:
        """Create the bin and pkg directories if missing."""
        self.bin_dir.mkdir(parents=True, exist_ok=True)
        self.pkg_dir.mkdir(parents=True, exist_ok=True)

    def package_dir(self, info: PkgInfo) -> Path:
        return self.pkg_dir / info.mod_name

    def bin_path(self, info: PkgInfo) -> Path:
        return self.bin_dir / info.bin_name
