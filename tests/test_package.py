"""
Tests for the per-package install fallback policy.
"""

import logging

import pytest

from toolshed.core.models.package import Dirs, PkgInfo
from toolshed.core.models.version import SemanticVersion
from toolshed.core.services.errors import (
    InstallError,
    MissingProgramError,
    MissingReleaseError,
    MissingSystemAssetError,
    NetworkError,
    NoInstallMethodError,
)
from toolshed.core.services.tool_install.orchestration.package import (
    UNKNOWN_VERSION,
    Package,
)

from .conftest import FakeInstaller, FakeProvider, make_package, make_release


@pytest.fixture
def bat_provider() -> FakeProvider:
    return FakeProvider({"owner/bat": [make_release("v0.24.0"), make_release("v0.23.0")]})


class TestInstallFallback:
    """Tests for Package.install."""

    def test_first_method_wins(self, dirs: Dirs, bat_provider):
        asset, native = FakeInstaller("asset"), FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, asset=asset, native=native)

        version = pkg.install(dirs)

        assert version == SemanticVersion(0, 24, 0)
        assert len(asset.installed) == 1
        assert native.installed == []

    def test_missing_asset_falls_back(self, dirs: Dirs, bat_provider, caplog):
        asset = FakeInstaller("asset", error=MissingSystemAssetError())
        native = FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, asset=asset, native=native)

        with caplog.at_level(logging.WARNING):
            version = pkg.install(dirs)

        assert version == SemanticVersion(0, 24, 0)
        assert native.installed[0].tag == "0.24.0"
        assert "bat: asset install unavailable" in caplog.text

    def test_missing_program_falls_through_to_nothing(self, dirs: Dirs, bat_provider):
        asset = FakeInstaller("asset", error=MissingSystemAssetError())
        native = FakeInstaller("cargo", error=MissingProgramError("cargo"))
        pkg = make_package("bat", bat_provider, asset=asset, native=native)

        with pytest.raises(NoInstallMethodError) as exc:
            pkg.install(dirs)
        assert str(exc.value) == "bat: no known installation method for your system"

    def test_fatal_error_stops(self, dirs: Dirs, bat_provider):
        asset = FakeInstaller("asset", error=NetworkError("connection reset"))
        native = FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, asset=asset, native=native)

        with pytest.raises(NetworkError) as exc:
            pkg.install(dirs)
        assert str(exc.value) == "bat: connection reset"
        assert native.installed == []

    def test_install_error_is_fatal(self, dirs: Dirs, bat_provider):
        asset = FakeInstaller("asset", error=InstallError("bat", "boom"))
        native = FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, asset=asset, native=native)

        with pytest.raises(InstallError):
            pkg.install(dirs)
        assert native.installed == []

    def test_explicit_version(self, dirs: Dirs, bat_provider):
        native = FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, native=native)

        assert pkg.install(dirs, SemanticVersion(0, 23, 0)) == SemanticVersion(0, 23, 0)
        assert ("by_tag", "owner/bat", "v0.23.0") in bat_provider.calls

    def test_explicit_version_plain_tag(self, dirs: Dirs):
        provider = FakeProvider({"owner/just": [make_release("1.25.2")]})
        pkg = make_package("just", provider)

        assert pkg.install(dirs, SemanticVersion(1, 25, 2)) == SemanticVersion(1, 25, 2)
        assert provider.calls == [
            ("by_tag", "owner/just", "v1.25.2"),
            ("by_tag", "owner/just", "1.25.2"),
        ]

    def test_explicit_version_missing(self, dirs: Dirs, bat_provider):
        native = FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, native=native)

        with pytest.raises(MissingReleaseError):
            pkg.install(dirs, SemanticVersion(9, 9, 9))
        assert native.installed == []

    def test_no_release_native_installs_latest(self, dirs: Dirs, provider):
        native = FakeInstaller("go")
        pkg = make_package("gopls", provider, native=native)

        assert pkg.install(dirs) == UNKNOWN_VERSION
        assert native.installed == [None]

    def test_needs_an_installer(self, provider):
        with pytest.raises(ValueError):
            Package(info=PkgInfo(name="x", repo="o/x"), provider=provider)


class TestUninstallUpdate:
    """Tests for Package.uninstall and Package.update."""

    def test_uninstall_runs_every_installer(self, dirs: Dirs, bat_provider):
        asset, native = FakeInstaller("asset"), FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, asset=asset, native=native)
        pkg.install(dirs)

        pkg.uninstall(dirs)

        assert asset.uninstalled == 1
        assert native.uninstalled == 1
        assert not dirs.bin_path(pkg.info).exists()

    def test_update_replaces(self, dirs: Dirs, bat_provider):
        native = FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, native=native)
        pkg.install(dirs, SemanticVersion(0, 23, 0))

        assert pkg.update(dirs) == SemanticVersion(0, 24, 0)
        assert native.uninstalled == 1
        assert [r.tag for r in native.installed] == ["0.23.0", "0.24.0"]

    def test_update_missing_release_keeps_install(self, dirs: Dirs, bat_provider):
        native = FakeInstaller("cargo")
        pkg = make_package("bat", bat_provider, native=native)
        pkg.install(dirs)

        with pytest.raises(MissingReleaseError):
            pkg.update(dirs, SemanticVersion(9, 9, 9))
        assert native.uninstalled == 0
        assert dirs.bin_path(pkg.info).exists()
