"""
Filesystem operations used by installers and hooks.

Every function raises ``FilesystemError`` on failure so callers see a
single error type, whatever the underlying ``OSError``/archive error.

Archive support: ``.zip``, ``.tar.gz``/``.tgz`` and bare ``.gz``.
Members that would land outside the destination are skipped.
"""

from __future__ import annotations

import gzip
import logging
import os
import shutil
import tarfile
import zipfile
from pathlib import Path

from toolshed.core.services.errors import FilesystemError

logger = logging.getLogger(__name__)

FILE_MODE = 0o644
EXEC_MODE = 0o755
DEFAULT_SHEBANG = "#!/usr/bin/env bash"

_GZIP_MAGIC = b"\x1f\x8b"


def write_file(path: Path, data: bytes, mode: int = FILE_MODE) -> None:
    """Write ``data`` to ``path`` (replacing it) with the given mode."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        os.chmod(path, mode)
    except OSError as e:
        raise FilesystemError(f"cannot write {path}: {e}") from e


def make_executable(path: Path) -> None:
    try:
        os.chmod(path, EXEC_MODE)
    except OSError as e:
        raise FilesystemError(f"cannot make {path} executable: {e}") from e


def symlink(target: Path, link: Path) -> None:
    """Point ``link`` at ``target``, replacing whatever ``link`` was."""
    try:
        link.parent.mkdir(parents=True, exist_ok=True)
        if link.is_symlink() or link.exists():
            remove_path(link)
        link.symlink_to(target)
    except OSError as e:
        raise FilesystemError(f"cannot link {link} → {target}: {e}") from e
    logger.debug("Linked %s → %s", link, target)


def move(src: Path, dst: Path) -> None:
    """Move ``src`` to ``dst``, replacing an existing ``dst``."""
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        if dst.is_symlink() or dst.exists():
            remove_path(dst)
        shutil.move(str(src), str(dst))
    except OSError as e:
        raise FilesystemError(f"cannot move {src} → {dst}: {e}") from e


def remove_path(path: Path) -> bool:
    """Remove a file, symlink or directory tree.

    Returns:
        True if something was removed, False if ``path`` did not exist.
    """
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
            return True
        if path.is_dir():
            shutil.rmtree(path)
            return True
    except OSError as e:
        raise FilesystemError(f"cannot remove {path}: {e}") from e
    return False


def create_script(path: Path, lines: list[str], shebang: str = DEFAULT_SHEBANG) -> None:
    """Write an executable script made of ``shebang`` followed by ``lines``."""
    content = "\n".join([shebang, *lines]) + "\n"
    write_file(path, content.encode("utf-8"), mode=EXEC_MODE)


def find_single_dir(parent: Path) -> Path:
    """Return the first subdirectory of ``parent`` (sorted by name)."""
    try:
        dirs = sorted(p for p in parent.iterdir() if p.is_dir())
    except OSError as e:
        raise FilesystemError(f"cannot list {parent}: {e}") from e
    if not dirs:
        raise FilesystemError(f"no directory found in {parent}")
    return dirs[0]


# ── Archives ────────────────────────────────────────────────────


def archive_stem(name: str) -> str:
    """Strip a known archive suffix: ``bat-v1-x.tar.gz`` → ``bat-v1-x``."""
    for suffix in (".tar.gz", ".tgz", ".zip", ".gz"):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def decompress(archive: Path, dest: Path) -> None:
    """Extract ``archive`` into ``dest``.

    A bare ``.gz`` (not a tarball) is decompressed to ``dest`` itself,
    which is then a file path rather than a directory.
    """
    name = archive.name
    try:
        if name.endswith((".tar.gz", ".tgz")):
            dest.mkdir(parents=True, exist_ok=True)
            _extract_tar(archive, dest)
        elif name.endswith(".zip"):
            dest.mkdir(parents=True, exist_ok=True)
            _extract_zip(archive, dest)
        elif name.endswith(".gz") or _has_gzip_magic(archive):
            dest.parent.mkdir(parents=True, exist_ok=True)
            with gzip.open(archive, "rb") as src, open(dest, "wb") as out:
                shutil.copyfileobj(src, out)
        else:
            raise FilesystemError(f"unsupported archive format: {name}")
    except (OSError, tarfile.TarError, zipfile.BadZipFile, EOFError) as e:
        raise FilesystemError(f"cannot extract {name}: {e}") from e
    logger.debug("Extracted %s → %s", name, dest)


def _has_gzip_magic(path: Path) -> bool:
    with open(path, "rb") as f:
        return f.read(2) == _GZIP_MAGIC


def _inside(root: Path, member: str) -> bool:
    target = os.path.realpath(os.path.join(root, member))
    return target == str(root) or target.startswith(str(root) + os.sep)


def _extract_tar(archive: Path, dest: Path) -> None:
    root = Path(os.path.realpath(dest))
    with tarfile.open(archive, "r:gz") as tar:
        for member in tar.getmembers():
            link_escapes = member.issym() and not _inside(
                root, os.path.join(os.path.dirname(member.name), member.linkname)
            )
            if link_escapes or not _inside(root, member.name):
                logger.warning("Skipping unsafe path in %s: %s", archive.name, member.name)
                continue
            tar.extract(member, path=dest)


def _extract_zip(archive: Path, dest: Path) -> None:
    root = Path(os.path.realpath(dest))
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            if not _inside(root, info.filename):
                logger.warning("Skipping unsafe path in %s: %s", archive.name, info.filename)
                continue
            extracted = zf.extract(info, path=dest)
            # zipfile drops unix permission bits; restore them
            mode = (info.external_attr >> 16) & 0o777
            if mode and not info.is_dir():
                os.chmod(extracted, mode)
