"""
Version model — semantic, calendar and opaque versions.

Release tags in the wild come in three shapes:

    v1.22.3 / 1.22.3 / gopls/v0.14.2   → SemanticVersion
    2024-01-08                          → CalendarVersion
    anything else ("nightly", "r17")    → OpaqueVersion

Parsing never fails; unrecognised input becomes an ``OpaqueVersion``.
Rendering is the inverse used for tag lookup and for the manifest.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

# Semantic triple anchored at the end, optionally preceded by "v".
# The triple must start the string or follow a separator, so that
# "tool-v1.2.3" and "name v1.2.3" match but "x11.2.3" does not.
_SEMVER_RE = re.compile(r"(?:^|[^\w.])v?(\d+)\.(\d+)\.(\d+)$")

# Calendar date at the start of the string.
_CALVER_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """A ``major.minor.patch`` version."""

    major: int
    minor: int
    patch: int

    def render(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"

    @property
    def plain(self) -> str:
        """The triple without the ``v`` prefix (``1.22.3``)."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, order=True)
class CalendarVersion:
    """A ``YYYY-MM-DD`` release date."""

    year: int
    month: int
    day: int

    def render(self) -> str:
        return f"{self.year}-{self.month:02}-{self.day:02}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, order=True)
class OpaqueVersion:
    """Any tag that is neither semantic nor a date."""

    raw: str

    def render(self) -> str:
        return self.raw

    def __str__(self) -> str:
        return self.raw


Version = Union[SemanticVersion, CalendarVersion, OpaqueVersion]

# Variants with a meaningful ordering.
_ORDERED_KINDS = (SemanticVersion, CalendarVersion)


def _match_semantic(raw: str) -> re.Match[str] | None:
    return _SEMVER_RE.search(raw)


def _match_calendar(raw: str) -> re.Match[str] | None:
    match = _CALVER_RE.match(raw)
    if match is None:
        return None
    month, day = int(match.group(2)), int(match.group(3))
    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return match


def parse_version(raw: str) -> Version:
    """Parse a version string.

    Args:
        raw: Text such as ``"v1.22.3"``, ``"name v1.22.3"`` or ``"2024-01-08"``.

    Returns:
        The most specific version variant that matches. Never raises;
        unrecognised input is kept verbatim, surrounding whitespace included.
    """
    text = raw.strip()

    match = _match_semantic(text)
    if match:
        return SemanticVersion(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    match = _match_calendar(text)
    if match:
        return CalendarVersion(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    return OpaqueVersion(raw)


def render_version(version: Version) -> str:
    """Render a version back to its canonical tag string."""
    return version.render()


def canonical_tag(tag: str) -> str:
    """Reduce a raw release tag to its version token.

    A trailing semantic triple wins (with any ``v`` stripped), then a
    leading calendar date; otherwise the tag is returned unchanged.

        >>> canonical_tag("gopls/v0.14.2")
        '0.14.2'
        >>> canonical_tag("2024-01-08-nightly")
        '2024-01-08'
    """
    match = _match_semantic(tag)
    if match:
        return ".".join(match.groups())
    match = _match_calendar(tag)
    if match:
        return match.group(0)
    return tag


def same_kind(a: Version, b: Version) -> bool:
    """Whether two versions are of the same variant."""
    return type(a) is type(b)


def is_outdated(installed: Version, latest: Version) -> bool:
    """Decide whether ``latest`` should replace ``installed``.

    Semantic and calendar versions compare by ordering against their own
    variant. Opaque tags carry no order, so they (and mixed variants) are
    outdated exactly when the rendered forms differ.
    """
    if same_kind(installed, latest) and isinstance(installed, _ORDERED_KINDS):
        return installed < latest  # type: ignore[operator]
    return installed.render() != latest.render()
