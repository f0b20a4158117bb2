"""
User configuration model — <root>/config.yml.

Example::

    packages:
      ensure-installed: [bat, gopls, rust-analyzer]
      config:
        gopls:
          version: v0.14.2
    auth:
      client-id: abc
      client-secret: def
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PackageConfig(BaseModel):
    """Per-package overrides."""

    model_config = ConfigDict(extra="forbid")

    version: str | None = None


class PackagesConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    ensure_installed: list[str] = Field(default_factory=list, alias="ensure-installed")
    config: dict[str, PackageConfig] = Field(default_factory=dict)


class AuthConfig(BaseModel):
    """Credentials for the release host.

    Either an OAuth app pair (sent as basic auth) or a token.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    client_id: str | None = Field(default=None, alias="client-id")
    client_secret: str | None = Field(default=None, alias="client-secret")
    token: str | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.token or (self.client_id and self.client_secret))


class Config(BaseModel):
    """Root of config.yml."""

    model_config = ConfigDict(extra="forbid")

    packages: PackagesConfig = Field(default_factory=PackagesConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    def pinned_version(self, name: str) -> str | None:
        """Version pinned for ``name`` in config, if any."""
        entry = self.packages.config.get(name)
        return entry.version if entry else None
