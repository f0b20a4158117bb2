"""
Tests for config.yml loading and the toolshed root.
"""

from pathlib import Path

import pytest

from toolshed.core.config.loader import ConfigError, load_config, resolve_root
from toolshed.core.models.config import Config


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        config = load_config(tmp_path / "config.yml")
        assert config == Config()
        assert config.packages.ensure_installed == []
        assert not config.auth.has_credentials

    def test_empty_file_gives_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_full_config(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text(
            "packages:\n"
            "  ensure-installed: [bat, gopls]\n"
            "  config:\n"
            "    gopls:\n"
            "      version: v0.14.2\n"
            "auth:\n"
            "  client-id: abc\n"
            "  client-secret: def\n"
        )
        config = load_config(path)
        assert config.packages.ensure_installed == ["bat", "gopls"]
        assert config.pinned_version("gopls") == "v0.14.2"
        assert config.pinned_version("bat") is None
        assert config.auth.client_id == "abc"
        assert config.auth.client_secret == "def"
        assert config.auth.has_credentials

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("packages: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("- bat\n- fd\n")
        with pytest.raises(ConfigError, match="expected a YAML mapping"):
            load_config(path)

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("pakages:\n  ensure-installed: [bat]\n")
        with pytest.raises(ConfigError, match="invalid configuration"):
            load_config(path)

    def test_github_token_fallback(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        config = load_config(tmp_path / "config.yml")
        assert config.auth.token == "ghp_test"

    def test_configured_credentials_win_over_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        path = tmp_path / "config.yml"
        path.write_text("auth:\n  client-id: abc\n  client-secret: def\n")
        config = load_config(path)
        assert config.auth.token is None


class TestResolveRoot:
    """Tests for root directory precedence."""

    def test_explicit_wins(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TOOLSHED_ROOT", str(tmp_path / "env"))
        assert resolve_root(tmp_path / "flag") == tmp_path / "flag"

    def test_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TOOLSHED_ROOT", str(tmp_path / "env"))
        assert resolve_root() == tmp_path / "env"

    def test_home_default(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("TOOLSHED_ROOT", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert resolve_root() == tmp_path / ".toolshed"
