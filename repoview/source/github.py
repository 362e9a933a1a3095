"""GitHub contents-API backend.

Listings come from ``GET /repos/{owner}/{repo}/contents/{path}``; file bodies
from each entry's ``download_url``. Responses shaped like
``{"message": "Not Found"}`` raise ``ListingNotFound`` so the model can show
an empty listing instead of a hard failure.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from ..errors import ContentFetchError, ListingFetchError, ListingNotFound
from .listing import build_listing, join_path
from .types import DirectoryEntry, Listing, SourceIdentity

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 15.0
NOT_FOUND_MESSAGE = "Not Found"


def create_client(timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.AsyncClient:
    """Create the shared HTTP client used for listing and content requests."""
    return httpx.AsyncClient(
        timeout=timeout_seconds,
        follow_redirects=True,
        headers={
            "Accept": "application/vnd.github+json",
            "User-Agent": "repoview",
        },
    )


def entry_from_payload(item: object) -> DirectoryEntry | None:
    """Convert one contents-API item; returns ``None`` for unusable items.

    Only ``file`` and ``dir`` items are kept. Symlinks and submodules are
    skipped because they have no browsable listing or body.
    """
    if not isinstance(item, dict):
        return None
    name = item.get("name")
    kind = item.get("type")
    if not isinstance(name, str) or not name:
        return None
    if kind == "dir":
        return DirectoryEntry.directory(name)
    if kind != "file":
        return None

    size = item.get("size")
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        size = 0
    download_url = item.get("download_url")
    if not isinstance(download_url, str) or not download_url:
        download_url = None
    return DirectoryEntry.file(name, size, download_url)


def _error_message(payload: object) -> str | None:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str):
            return message
    return None


class GitHubContentSource:
    """Listing/content backend for one GitHub repository."""

    def __init__(
        self,
        identity: SourceIdentity,
        client: httpx.AsyncClient,
        api_url: str = DEFAULT_API_URL,
    ) -> None:
        self.identity = identity
        self._client = client
        self._api_url = api_url.rstrip("/")

    def describe(self) -> str:
        return str(self.identity)

    def contents_url(self, path: tuple[str, ...]) -> str:
        base = (
            f"{self._api_url}/repos/{quote(self.identity.owner, safe='')}"
            f"/{quote(self.identity.repository, safe='')}/contents"
        )
        if not path:
            return base
        return f"{base}/{quote(join_path(path), safe='/')}"

    async def list_directory(self, path: tuple[str, ...]) -> Listing:
        url = self.contents_url(path)
        logger.debug("Fetching listing %s", url)
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ListingFetchError(
                f"Request for /{join_path(path)} failed: {exc}",
                extra={"url": url},
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ListingFetchError(
                f"Listing for /{join_path(path)} is not valid JSON (HTTP {response.status_code}).",
                extra={"url": url, "status": response.status_code},
            ) from exc

        message = _error_message(payload)
        if message == NOT_FOUND_MESSAGE:
            raise ListingNotFound(
                f"{self.identity}/{join_path(path)} was not found.",
                extra={"url": url},
            )
        if response.status_code >= 400:
            raise ListingFetchError(
                f"HTTP {response.status_code}: {message or response.reason_phrase}",
                extra={"url": url, "status": response.status_code},
            )
        if isinstance(payload, dict):
            # The contents API answers with a single object for file paths.
            raise ListingFetchError(
                f"/{join_path(path)} is not a directory.",
                extra={"url": url},
            )
        if not isinstance(payload, list):
            raise ListingFetchError(
                f"Unexpected listing payload for /{join_path(path)}.",
                extra={"url": url},
            )

        entries: list[DirectoryEntry] = []
        for item in payload:
            entry = entry_from_payload(item)
            if entry is None:
                logger.debug("Skipping listing item %r", item)
                continue
            entries.append(entry)
        return build_listing(entries)

    async def fetch_text(self, entry: DirectoryEntry) -> str:
        if entry.content_ref is None:
            raise ContentFetchError(f"{entry.name} has no download URL.")
        logger.debug("Fetching content %s", entry.content_ref)
        try:
            response = await self._client.get(entry.content_ref)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ContentFetchError(
                f"Could not load {entry.name}: {exc}",
                extra={"url": entry.content_ref},
            ) from exc
        return response.text


__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "GitHubContentSource",
    "create_client",
    "entry_from_payload",
]
