"""
Configuration loader — reads config.yml into the Config model.

Also owns the toolshed root: the directory holding bin/, pkg/,
config.yml and manifest.json.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from toolshed.core.models.config import Config
from toolshed.core.services.errors import ToolshedError

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.yml"
ROOT_ENV = "TOOLSHED_ROOT"
TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_ROOT_NAME = ".toolshed"


class ConfigError(ToolshedError):
    """Raised when config.yml is unreadable or invalid."""


def resolve_root(explicit: Path | None = None) -> Path:
    """Pick the toolshed root directory.

    Precedence: ``--root`` flag  >  $TOOLSHED_ROOT  >  ~/.toolshed
    """
    if explicit is not None:
        return Path(explicit).expanduser()
    from_env = os.environ.get(ROOT_ENV)
    if from_env:
        return Path(from_env).expanduser()
    return Path.home() / DEFAULT_ROOT_NAME


def default_config_path(root: Path) -> Path:
    return root / CONFIG_FILE


def load_config(path: Path) -> Config:
    """Load and validate config.yml.

    Args:
        path: Path to the config file. A missing file yields defaults.

    Returns:
        Validated Config model. When no credentials are configured,
        ``$GITHUB_TOKEN`` is used as the auth token if set.

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    if not path.is_file():
        logger.debug("No config at %s, using defaults", path)
        config = Config()
    else:
        config = _read_config(path)

    if not config.auth.has_credentials:
        token = os.environ.get(TOKEN_ENV)
        if token:
            config.auth.token = token
    return config


def _read_config(path: Path) -> Config:
    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration in {path}: {e}") from e

    logger.info(
        "Loaded config with %d ensure-installed package(s)",
        len(config.packages.ensure_installed),
    )
    return config
