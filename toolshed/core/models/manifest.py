"""
Manifest model — the durable record of what is installed.

Serialized as JSON::

    {"packages": [{"name": "bat", "version": "v0.24.0"}, ...]}

Versions are stored in rendered form and re-parsed on load.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator

from toolshed.core.models.version import Version, parse_version


def _coerce_version(value: Any) -> Version:
    if isinstance(value, str):
        return parse_version(value)
    if hasattr(value, "render"):
        return value
    raise ValueError(f"expected a version string, got {type(value).__name__}")


VersionField = Annotated[
    Any,
    PlainValidator(_coerce_version),
    PlainSerializer(lambda v: v.render(), return_type=str),
]


class ManifestEntry(BaseModel):
    """One installed package."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: VersionField


class Manifest(BaseModel):
    """All installed packages, at most one entry per name."""

    packages: list[ManifestEntry] = Field(default_factory=list)

    def get(self, name: str) -> ManifestEntry | None:
        for entry in self.packages:
            if entry.name == name:
                return entry
        return None

    def installed(self, name: str) -> bool:
        return self.get(name) is not None

    def upsert(self, name: str, version: Version) -> None:
        """Record ``name`` at ``version``, replacing any existing entry."""
        entry = ManifestEntry(name=name, version=version)
        for i, existing in enumerate(self.packages):
            if existing.name == name:
                self.packages[i] = entry
                return
        self.packages.append(entry)

    def remove(self, name: str) -> None:
        self.packages = [e for e in self.packages if e.name != name]

    def installed_count(self) -> int:
        return len(self.packages)
