"""
GitHub releases adapter — release metadata and asset downloads.

Talks to the REST API with ``urllib.request``::

    GET /repos/{owner}/{repo}/releases/latest
    GET /repos/{owner}/{repo}/releases/tags/{tag}
    GET {asset.url}   (Accept: application/octet-stream)

404 means "no such release" and maps to ``None``. Any other failure
becomes a ``NetworkError``; a payload that does not look like a
release becomes a ``DeserializationError``.
"""

from __future__ import annotations

import base64
import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from pydantic import BaseModel, ValidationError

from toolshed import __version__
from toolshed.adapters.base import ReleaseProvider
from toolshed.core.models.config import AuthConfig
from toolshed.core.models.release import Asset, Release
from toolshed.core.services.errors import DeserializationError, NetworkError

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
_JSON_ACCEPT = "application/vnd.github+json"
_BINARY_ACCEPT = "application/octet-stream"
_REPO_PREFIXES = ("https://github.com/", "http://github.com/", "github.com/")


def normalize_repo(repo: str) -> str:
    """Reduce a repository reference to ``owner/repo``.

        >>> normalize_repo("https://github.com/sharkdp/bat")
        'sharkdp/bat'
    """
    for prefix in _REPO_PREFIXES:
        if repo.startswith(prefix):
            repo = repo[len(prefix):]
            break
    repo = repo.strip("/")
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return repo


# ── Wire schema ─────────────────────────────────────────────────


class _GitHubAsset(BaseModel):
    name: str
    url: str


class _GitHubRelease(BaseModel):
    tag_name: str
    name: str | None = None
    prerelease: bool = False
    assets: list[_GitHubAsset] = []

    def to_release(self) -> Release:
        return Release.from_raw_tag(
            self.tag_name,
            name=self.name,
            prerelease=self.prerelease,
            assets=tuple(Asset(name=a.name, url=a.url) for a in self.assets),
        )


# ── Provider ────────────────────────────────────────────────────


class GitHubReleaseProvider(ReleaseProvider):
    """Release provider backed by the GitHub REST API.

    Args:
        auth: Optional credentials. A token is sent as a bearer token,
            a client id/secret pair as basic auth.
        api_url: API base URL (overridable for GitHub Enterprise).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        auth: AuthConfig | None = None,
        *,
        api_url: str = API_URL,
        timeout: float = 30.0,
    ) -> None:
        self._auth = auth
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "github"

    def latest(self, repo: str) -> Release | None:
        url = f"{self._api_url}/repos/{normalize_repo(repo)}/releases/latest"
        return self._get_release(url)

    def by_tag(self, repo: str, tag: str) -> Release | None:
        quoted = urllib.parse.quote(tag, safe="")
        url = f"{self._api_url}/repos/{normalize_repo(repo)}/releases/tags/{quoted}"
        return self._get_release(url)

    def download(self, asset: Asset) -> bytes:
        logger.info("Downloading %s", asset.name)
        body = self._fetch(asset.url, accept=_BINARY_ACCEPT)
        if body is None:
            raise NetworkError(f"asset not found: {asset.name}")
        logger.debug("Downloaded %s (%d bytes)", asset.name, len(body))
        return body

    # ── internals ──

    def _get_release(self, url: str) -> Release | None:
        body = self._fetch(url, accept=_JSON_ACCEPT)
        if body is None:
            return None
        try:
            payload = json.loads(body)
            release = _GitHubRelease.model_validate(payload).to_release()
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            raise DeserializationError(f"unexpected release payload from {url}: {e}") from e
        logger.debug("Resolved %s → %s", url, release.tag)
        return release

    def _headers(self, accept: str) -> dict[str, str]:
        headers = {
            "Accept": accept,
            "User-Agent": f"toolshed/{__version__}",
            "X-GitHub-Api-Version": API_VERSION,
        }
        auth = self._auth
        if auth is not None and auth.token:
            headers["Authorization"] = f"Bearer {auth.token}"
        elif auth is not None and auth.client_id and auth.client_secret:
            pair = f"{auth.client_id}:{auth.client_secret}".encode()
            headers["Authorization"] = "Basic " + base64.b64encode(pair).decode("ascii")
        return headers

    def _fetch(self, url: str, *, accept: str) -> bytes | None:
        """GET ``url``; None on 404, NetworkError on anything else that fails."""
        req = urllib.request.Request(url, headers=self._headers(accept))
        logger.debug("GET %s", url)
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                return resp.read()
        except urllib.error.HTTPError as e:
            if e.code == 404:
                return None
            raise NetworkError(f"unexpected status code {e.code} from {url}") from e
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise NetworkError(f"request to {url} failed: {e}") from e
