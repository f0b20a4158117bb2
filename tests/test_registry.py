"""
Tests for the catalog and the registry built from it.
"""

import pytest

from toolshed.core.services.errors import UnknownPackageError
from toolshed.core.services.tool_install.data.catalog import TOOL_CATALOG
from toolshed.core.services.tool_install.detection.platform import PlatformInfo
from toolshed.core.services.tool_install.execution.asset_installer import AssetInstaller
from toolshed.core.services.tool_install.execution.native_installers import NpmInstaller
from toolshed.core.services.tool_install.registry import (
    PackageRegistry,
    build_package,
    build_registry,
)

from .conftest import FakeProvider, make_package


class TestCatalog:
    """Sanity checks over the catalog data."""

    @pytest.mark.parametrize("name", sorted(TOOL_CATALOG))
    def test_recipe_has_installer(self, name):
        recipe = TOOL_CATALOG[name]
        assert recipe["repo"]
        assert "asset" in recipe or "native" in recipe
        if "native" in recipe:
            assert recipe["native"]["via"] in ("go", "npm", "pip", "cargo")


class TestBuildRegistry:
    """Tests for binding the catalog to a platform."""

    def test_every_package_listed(self, linux_gnu):
        registry = build_registry(FakeProvider(), platform=linux_gnu)
        assert registry.names() == sorted(TOOL_CATALOG)
        assert len(registry) == len(TOOL_CATALOG)

    def test_pattern_for_platform(self, linux_gnu):
        registry = build_registry(FakeProvider(), platform=linux_gnu)
        bat = registry.require("bat")
        assert isinstance(bat.asset_installer, AssetInstaller)
        assert "linux-gnu" in bat.asset_installer.pattern
        assert bat.installer_kinds == ["asset", "cargo"]

    def test_unsupported_platform_keeps_package(self):
        freebsd = PlatformInfo(os="freebsd", arch="x86_64")
        registry = build_registry(FakeProvider(), platform=freebsd)
        assert registry.require("direnv").asset_installer.pattern is None

    def test_names_and_modules(self, linux_gnu):
        registry = build_registry(FakeProvider(), platform=linux_gnu)
        nushell = registry.require("nushell")
        assert nushell.info.mod_name == "nu"
        assert nushell.info.bin_name == "nu"
        assert registry.require("fd").info.bin_name == "fd"

    def test_npm_options(self, linux_gnu):
        registry = build_registry(FakeProvider(), platform=linux_gnu)
        extracted = registry.require("vscode-langservers-extracted").native_installer
        assert isinstance(extracted, NpmInstaller)
        assert extracted.link_binary is False
        tsls = registry.require("typescript-language-server").native_installer
        assert tsls.dependencies == ("typescript",)

    def test_custom_catalog(self, linux_gnu):
        catalog = {"tool": {"repo": "o/tool", "native": {"via": "go"}}}
        registry = build_registry(FakeProvider(), platform=linux_gnu, catalog=catalog)
        assert registry.names() == ["tool"]

    def test_unknown_via(self, linux_gnu):
        with pytest.raises(ValueError):
            build_package("x", {"repo": "o/x", "native": {"via": "brew"}}, FakeProvider(), linux_gnu)


class TestPackageRegistry:
    """Tests for registry lookups."""

    def test_lookup(self, provider):
        registry = PackageRegistry([make_package("fd", provider), make_package("bat", provider)])
        assert "bat" in registry
        assert registry.get("nope") is None
        assert [p.name for p in registry] == ["bat", "fd"]

    def test_require_unknown(self, provider):
        registry = PackageRegistry([])
        with pytest.raises(UnknownPackageError, match="unknown package: nope"):
            registry.require("nope")

    def test_require_unknown_with_source(self, provider):
        registry = PackageRegistry([])
        with pytest.raises(UnknownPackageError, match="unknown package from ensure-installed"):
            registry.require("nope", source="ensure-installed")
