"""
Release provider base — the contract between installers and release hosts.

Installers and the check command only talk to a ``ReleaseProvider``,
never to an HTTP client directly. Tests substitute an in-memory
provider; production uses ``GitHubReleaseProvider``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from toolshed.core.models.release import Asset, Release


class ReleaseProvider(ABC):
    """Abstract source of releases and asset bytes.

    Unlike a plain lookup, "not found" is not an error: ``latest`` and
    ``by_tag`` return ``None``. Transport or payload problems raise
    ``NetworkError`` / ``DeserializationError``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g. 'github')."""

    @abstractmethod
    def latest(self, repo: str) -> Release | None:
        """Most recent non-draft release of ``repo``, or None."""

    @abstractmethod
    def by_tag(self, repo: str, tag: str) -> Release | None:
        """Release tagged exactly ``tag``, or None."""

    @abstractmethod
    def download(self, asset: Asset) -> bytes:
        """Fetch the raw bytes of ``asset``."""
