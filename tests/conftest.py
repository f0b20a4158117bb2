"""
Shared test fixtures — in-memory release provider, scripted installers,
and a session factory wired to them. No test touches the network or
spawns a real package manager.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from toolshed.adapters.base import ReleaseProvider
from toolshed.core.models.config import Config
from toolshed.core.models.manifest import Manifest
from toolshed.core.models.package import Dirs, PkgInfo
from toolshed.core.models.release import Asset, Release
from toolshed.core.services.tool_install.detection.platform import PlatformInfo
from toolshed.core.services.tool_install.execution.base import Installer
from toolshed.core.services.tool_install.orchestration.package import Package
from toolshed.core.services.tool_install.registry import PackageRegistry
from toolshed.core.use_cases.session import Session


class FakeProvider(ReleaseProvider):
    """Release host backed by a dict of repo → releases (newest first)."""

    def __init__(
        self,
        releases: dict[str, list[Release]] | None = None,
        blobs: dict[str, bytes] | None = None,
    ) -> None:
        self.releases = releases or {}
        self.blobs = blobs or {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, ...]] = []

    @property
    def name(self) -> str:
        return "fake"

    def latest(self, repo: str) -> Release | None:
        self.calls.append(("latest", repo))
        if repo in self.errors:
            raise self.errors[repo]
        releases = self.releases.get(repo, [])
        return releases[0] if releases else None

    def by_tag(self, repo: str, tag: str) -> Release | None:
        self.calls.append(("by_tag", repo, tag))
        if repo in self.errors:
            raise self.errors[repo]
        for release in self.releases.get(repo, []):
            if release.name == tag:
                return release
        return None

    def download(self, asset: Asset) -> bytes:
        self.calls.append(("download", asset.url))
        return self.blobs[asset.url]


class FakeInstaller(Installer):
    """Installer that records calls and optionally raises."""

    def __init__(self, kind: str = "fake", error: Exception | None = None) -> None:
        self.kind = kind
        self.error = error
        self.installed: list[Release | None] = []
        self.uninstalled = 0

    def install(self, info: PkgInfo, dirs: Dirs, release: Release | None) -> None:
        if self.error is not None:
            raise self.error
        self.installed.append(release)
        dirs.bin_path(info).write_text("#!/bin/sh\n")

    def uninstall(self, info: PkgInfo, dirs: Dirs) -> None:
        self.uninstalled += 1
        super().uninstall(info, dirs)


def make_release(raw_tag: str, *asset_names: str) -> Release:
    """Release whose display name is the raw tag, assets at fake:// URLs."""
    return Release.from_raw_tag(
        raw_tag,
        name=raw_tag,
        assets=tuple(Asset(name=n, url=f"fake://{n}") for n in asset_names),
    )


def make_package(
    name: str,
    provider: ReleaseProvider,
    *,
    asset: Installer | None = None,
    native: Installer | None = None,
    repo: str | None = None,
) -> Package:
    if asset is None and native is None:
        native = FakeInstaller()
    return Package(
        info=PkgInfo(name=name, repo=repo or f"owner/{name}"),
        provider=provider,
        asset_installer=asset,
        native_installer=native,
    )


@pytest.fixture
def dirs(tmp_path: Path) -> Dirs:
    """A fresh toolshed root with bin/ and pkg/ created."""
    d = Dirs.from_root(tmp_path / "root")
    d.ensure()
    return d


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def linux_gnu() -> PlatformInfo:
    return PlatformInfo(os="linux", arch="x86_64", libc="gnu")


@pytest.fixture
def make_session(dirs: Dirs, linux_gnu: PlatformInfo):
    """Factory: ``make_session(packages, config=None, manifest=None)``."""

    def _make(
        packages: list[Package],
        config: Config | None = None,
        manifest: Manifest | None = None,
    ) -> Session:
        return Session(
            dirs=dirs,
            config=config or Config(),
            manifest=manifest or Manifest(),
            registry=PackageRegistry(packages),
            platform=linux_gnu,
            config_path=dirs.root_dir / "config.yml",
            manifest_path=dirs.root_dir / "manifest.json",
        )

    return _make
