"""
L4 Execution — post-install hooks.

A release asset is rarely the executable itself. After the asset
installer writes the downloaded file into ``<pkg>/<mod_name>/``, the
package's hook turns it into something runnable in ``<bin>/``:

    ExtractNestedBinary   bat-v0.24.0-x86_64….tar.gz/bat-…/bat   → bin/bat
    ExtractBinary         just-1.25.2-….tar.gz/just             → bin/just
    ExtractAndLink        clojure-lsp.zip/clojure-lsp   (symlink) → bin/clojure-lsp
    ExtractWithLauncher   lua-language-server/bin/…  (script)   → bin/lua-language-server
    ExtractVersionedDir   ltex-ls-16.0.0/bin/ltex-ls  (symlink) → bin/ltex-ls
    DecompressBinary      rust-analyzer-….gz                    → bin/rust-analyzer
    RawBinary             direnv.linux-amd64         (symlink)  → bin/direnv

Native installers accept a hook too; ``LinkExtraBinaries`` exposes
additional executables an npm package ships.

Hooks raise ``FilesystemError``; the installer reports it as an
install failure for the package.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from toolshed.adapters.shell.filesystem import (
    archive_stem,
    create_script,
    decompress,
    find_single_dir,
    make_executable,
    move,
    remove_path,
    symlink,
)
from toolshed.core.models.package import Dirs, PkgInfo
from toolshed.core.services.errors import FilesystemError

logger = logging.getLogger(__name__)


class PostInstallHook:
    """Base hook: does nothing on either side of the lifecycle.

    ``artifact`` is the downloaded file for asset installs and None for
    native installs.
    """

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        pass

    def before_uninstall(self, info: PkgInfo, dirs: Dirs) -> None:
        pass

    @staticmethod
    def _require(artifact: Path | None, info: PkgInfo) -> Path:
        if artifact is None:
            raise FilesystemError(f"no downloaded artifact to unpack for {info.name}")
        return artifact


# ── Archive hooks ───────────────────────────────────────────────


@dataclass(frozen=True)
class ExtractNestedBinary(PostInstallHook):
    """Archive holds ``<archive-stem>/<bin>``; move it to bin, drop the rest."""

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        artifact = self._require(artifact, info)
        pkg_dir = dirs.package_dir(info)
        decompress(artifact, pkg_dir)

        inner = pkg_dir / archive_stem(artifact.name)
        if not inner.is_dir():
            inner = find_single_dir(pkg_dir)

        bin_path = dirs.bin_path(info)
        move(inner / info.bin_name, bin_path)
        make_executable(bin_path)
        remove_path(pkg_dir)


@dataclass(frozen=True)
class ExtractBinary(PostInstallHook):
    """Archive holds the binary at ``<subpath>/<bin>``; move it to bin."""

    subpath: str = ""

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        artifact = self._require(artifact, info)
        pkg_dir = dirs.package_dir(info)
        decompress(artifact, pkg_dir)

        source = pkg_dir / self.subpath / info.bin_name
        bin_path = dirs.bin_path(info)
        move(source, bin_path)
        make_executable(bin_path)
        remove_path(pkg_dir)


@dataclass(frozen=True)
class ExtractAndLink(PostInstallHook):
    """Extract in place and symlink ``executable`` (default: the bin name)."""

    executable: str | None = None

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        artifact = self._require(artifact, info)
        pkg_dir = dirs.package_dir(info)
        decompress(artifact, pkg_dir)

        target = pkg_dir / (self.executable or info.bin_name)
        make_executable(target)
        symlink(target, dirs.bin_path(info))


@dataclass(frozen=True)
class ExtractWithLauncher(PostInstallHook):
    """Extract in place and write a launcher script that execs ``executable``.

    Some programs resolve their support files relative to argv[0], so a
    symlink would break them.
    """

    executable: str

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        artifact = self._require(artifact, info)
        pkg_dir = dirs.package_dir(info)
        decompress(artifact, pkg_dir)

        target = pkg_dir / self.executable
        make_executable(target)
        create_script(dirs.bin_path(info), [f'exec "{target}" "$@"'])


@dataclass(frozen=True)
class ExtractVersionedDir(PostInstallHook):
    """Archive holds one versioned directory; link ``<dir>/<subpath>/<bin>``."""

    subpath: str = "bin"

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        artifact = self._require(artifact, info)
        pkg_dir = dirs.package_dir(info)
        decompress(artifact, pkg_dir)

        target = find_single_dir(pkg_dir) / self.subpath / info.bin_name
        make_executable(target)
        symlink(target, dirs.bin_path(info))


# ── Single-file hooks ───────────────────────────────────────────


@dataclass(frozen=True)
class DecompressBinary(PostInstallHook):
    """Asset is a gzipped executable; decompress it straight into bin."""

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        artifact = self._require(artifact, info)
        bin_path = dirs.bin_path(info)
        decompress(artifact, bin_path)
        make_executable(bin_path)


@dataclass(frozen=True)
class RawBinary(PostInstallHook):
    """Asset is the executable itself; keep it in pkg and link it."""

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        artifact = self._require(artifact, info)
        make_executable(artifact)
        symlink(artifact, dirs.bin_path(info))


# ── Native installer hooks ──────────────────────────────────────


@dataclass(frozen=True)
class LinkExtraBinaries(PostInstallHook):
    """Link extra executables from ``<pkg>/<mod>/<subdir>/`` into bin."""

    binaries: tuple[str, ...]
    subdir: str = "bin"

    def after_install(self, info: PkgInfo, dirs: Dirs, artifact: Path | None) -> None:
        source_dir = dirs.package_dir(info) / self.subdir
        for name in self.binaries:
            symlink(source_dir / name, dirs.bin_dir / name)

    def before_uninstall(self, info: PkgInfo, dirs: Dirs) -> None:
        for name in self.binaries:
            if remove_path(dirs.bin_dir / name):
                logger.debug("Removed %s", dirs.bin_dir / name)
