"""
Tests for filesystem helpers and archive extraction.
"""

import gzip
import io
import os
import stat
import tarfile
import zipfile
from pathlib import Path

import pytest

from toolshed.adapters.shell.filesystem import (
    archive_stem,
    create_script,
    decompress,
    find_single_dir,
    move,
    remove_path,
    symlink,
    write_file,
)
from toolshed.core.services.errors import FilesystemError


def build_tar(path: Path, members: dict[str, bytes], mode: int = 0o755) -> Path:
    with tarfile.open(path, "w:gz") as tar:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = mode
            tar.addfile(info, io.BytesIO(data))
    return path


def build_zip(path: Path, members: dict[str, bytes], mode: int = 0o755) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in members.items():
            info = zipfile.ZipInfo(name)
            info.external_attr = (stat.S_IFREG | mode) << 16
            zf.writestr(info, data)
    return path


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


class TestFileOps:
    """Tests for write/link/move/remove helpers."""

    def test_write_file_mode(self, tmp_path: Path):
        path = tmp_path / "a" / "file"
        write_file(path, b"data")
        assert path.read_bytes() == b"data"
        assert _mode(path) == 0o644

    def test_symlink_replaces(self, tmp_path: Path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.write_text("1")
        second.write_text("2")
        link = tmp_path / "bin" / "tool"

        symlink(first, link)
        symlink(second, link)

        assert link.is_symlink()
        assert link.read_text() == "2"

    def test_move_replaces(self, tmp_path: Path):
        src = tmp_path / "src"
        dst = tmp_path / "dst"
        src.write_text("new")
        dst.write_text("old")
        move(src, dst)
        assert dst.read_text() == "new"
        assert not src.exists()

    def test_move_missing_source(self, tmp_path: Path):
        with pytest.raises(FilesystemError):
            move(tmp_path / "nope", tmp_path / "dst")

    def test_remove_path(self, tmp_path: Path):
        tree = tmp_path / "tree"
        (tree / "sub").mkdir(parents=True)
        (tree / "sub" / "f").write_text("x")
        assert remove_path(tree) is True
        assert not tree.exists()
        assert remove_path(tree) is False

    def test_remove_dangling_symlink(self, tmp_path: Path):
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "gone")
        assert remove_path(link) is True
        assert not link.is_symlink()

    def test_create_script(self, tmp_path: Path):
        path = tmp_path / "launcher"
        create_script(path, ['exec "/opt/x" "$@"'])
        assert path.read_text() == '#!/usr/bin/env bash\nexec "/opt/x" "$@"\n'
        assert _mode(path) == 0o755

    def test_find_single_dir(self, tmp_path: Path):
        (tmp_path / "file").write_text("x")
        (tmp_path / "ltex-ls-16.0.0").mkdir()
        assert find_single_dir(tmp_path).name == "ltex-ls-16.0.0"

    def test_find_single_dir_none(self, tmp_path: Path):
        with pytest.raises(FilesystemError):
            find_single_dir(tmp_path)

    @pytest.mark.parametrize("name,stem", [
        ("bat-v0.24.0-x86_64-unknown-linux-gnu.tar.gz", "bat-v0.24.0-x86_64-unknown-linux-gnu"),
        ("tool.tgz", "tool"),
        ("clojure-lsp.zip", "clojure-lsp"),
        ("rust-analyzer.gz", "rust-analyzer"),
        ("direnv.linux-amd64", "direnv.linux-amd64"),
    ])
    def test_archive_stem(self, name, stem):
        assert archive_stem(name) == stem


class TestDecompress:
    """Tests for archive extraction."""

    def test_tar_gz(self, tmp_path: Path):
        archive = build_tar(tmp_path / "t.tar.gz", {"dir/tool": b"bin", "dir/README": b"hi"})
        dest = tmp_path / "out"
        decompress(archive, dest)
        assert (dest / "dir" / "tool").read_bytes() == b"bin"

    def test_zip_restores_permissions(self, tmp_path: Path):
        archive = build_zip(tmp_path / "t.zip", {"tool": b"bin"}, mode=0o755)
        dest = tmp_path / "out"
        decompress(archive, dest)
        assert (dest / "tool").read_bytes() == b"bin"
        assert os.access(dest / "tool", os.X_OK)

    def test_bare_gz_to_file(self, tmp_path: Path):
        archive = tmp_path / "rust-analyzer.gz"
        archive.write_bytes(gzip.compress(b"\x7fELF"))
        dest = tmp_path / "bin" / "rust-analyzer"
        decompress(archive, dest)
        assert dest.read_bytes() == b"\x7fELF"

    def test_gzip_magic_without_suffix(self, tmp_path: Path):
        archive = tmp_path / "tool-linux"
        archive.write_bytes(gzip.compress(b"payload"))
        dest = tmp_path / "tool"
        decompress(archive, dest)
        assert dest.read_bytes() == b"payload"

    def test_unsupported(self, tmp_path: Path):
        archive = tmp_path / "tool.rar"
        archive.write_bytes(b"Rar!")
        with pytest.raises(FilesystemError, match="unsupported"):
            decompress(archive, tmp_path / "out")

    def test_corrupt_tar(self, tmp_path: Path):
        archive = tmp_path / "t.tar.gz"
        archive.write_bytes(b"not a tarball")
        with pytest.raises(FilesystemError):
            decompress(archive, tmp_path / "out")

    def test_tar_traversal_skipped(self, tmp_path: Path):
        archive = build_tar(tmp_path / "t.tar.gz", {"../evil": b"x", "ok": b"y"})
        dest = tmp_path / "out"
        decompress(archive, dest)
        assert (dest / "ok").is_file()
        assert not (tmp_path / "evil").exists()

    def test_zip_traversal_skipped(self, tmp_path: Path):
        archive = build_zip(tmp_path / "t.zip", {"../evil": b"x", "ok": b"y"})
        dest = tmp_path / "out"
        decompress(archive, dest)
        assert (dest / "ok").is_file()
        assert not (tmp_path / "evil").exists()
