"""
Release metadata — what a release host tells us about a tagged release.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from toolshed.core.models.version import Version, canonical_tag, parse_version


@dataclass(frozen=True)
class Asset:
    """A downloadable file attached to a release."""

    name: str
    url: str


@dataclass(frozen=True)
class Release:
    """A single tagged release.

    ``tag`` holds the canonical version token (see ``canonical_tag``),
    not necessarily the raw tag name from the host.
    """

    name: str
    tag: str
    prerelease: bool = False
    assets: tuple[Asset, ...] = field(default_factory=tuple)

    @classmethod
    def from_raw_tag(
        cls,
        raw_tag: str,
        *,
        name: str | None = None,
        prerelease: bool = False,
        assets: tuple[Asset, ...] = (),
    ) -> Release:
        return cls(
            name=name or raw_tag,
            tag=canonical_tag(raw_tag),
            prerelease=prerelease,
            assets=tuple(assets),
        )

    @property
    def version(self) -> Version:
        return parse_version(self.tag)
