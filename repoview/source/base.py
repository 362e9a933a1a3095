"""Protocol every listing/content backend implements."""

from __future__ import annotations

from typing import Protocol

from .types import DirectoryEntry, Listing


class ContentSource(Protocol):
    """Read-only access to one directory tree.

    ``list_directory`` raises ``ListingNotFound`` or ``ListingFetchError``;
    ``fetch_text`` raises ``ContentFetchError``. No other exception types cross
    this boundary for expected failures.
    """

    def describe(self) -> str:
        """Human-readable label for the tree (``owner/repo`` or a local root)."""
        ...

    async def list_directory(self, path: tuple[str, ...]) -> Listing:
        ...

    async def fetch_text(self, entry: DirectoryEntry) -> str:
        ...
