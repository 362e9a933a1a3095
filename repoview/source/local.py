"""Local filesystem backend: browse a directory tree on disk."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from ..errors import ContentFetchError, ListingFetchError, ListingNotFound
from .listing import build_listing, join_path
from .types import DirectoryEntry, Listing

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def scan_directory(directory: Path, show_hidden: bool) -> list[DirectoryEntry]:
    """List visible children of ``directory`` in case-insensitive name order.

    Raises ``OSError`` when the directory cannot be scanned.
    """
    entries: list[DirectoryEntry] = []
    with os.scandir(directory) as children:
        for child in children:
            name = child.name
            if not show_hidden and name.startswith("."):
                continue
            try:
                is_dir = child.is_dir(follow_symlinks=True)
            except OSError:
                is_dir = False
            if is_dir:
                entries.append(DirectoryEntry.directory(name))
                continue

            try:
                size = int(child.stat(follow_symlinks=True).st_size)
            except OSError:
                size = 0
            entries.append(DirectoryEntry.file(name, size, child.path))
    entries.sort(key=lambda entry: entry.name.lower())
    return entries


class LocalDirectorySource:
    """Listing/content backend rooted at one local directory."""

    def __init__(self, root: Path, show_hidden: bool = False) -> None:
        self.root = root.resolve()
        self.show_hidden = show_hidden

    def describe(self) -> str:
        return str(self.root)

    def resolve(self, path: tuple[str, ...]) -> Path:
        """Map segments to a directory under the root; never escapes it."""
        target = self.root.joinpath(*path).resolve()
        if not target.is_relative_to(self.root):
            raise ListingNotFound(f"/{join_path(path)} is outside {self.root}.")
        return target

    def _list_sync(self, path: tuple[str, ...]) -> Listing:
        try:
            target = self.resolve(path)
            if not target.exists():
                raise ListingNotFound(f"/{join_path(path)} was not found.", extra={"path": str(target)})
            if not target.is_dir():
                raise ListingFetchError(f"/{join_path(path)} is not a directory.", extra={"path": str(target)})
            return build_listing(scan_directory(target, self.show_hidden))
        except (OSError, ValueError) as exc:
            # ValueError: names the OS cannot represent, such as embedded NUL.
            raise ListingFetchError(
                f"Could not read /{join_path(path)}: {exc}",
                extra={"root": str(self.root)},
            ) from exc

    async def list_directory(self, path: tuple[str, ...]) -> Listing:
        logger.debug("Scanning %s", self.root.joinpath(*path))
        return await asyncio.to_thread(self._list_sync, path)

    def _read_sync(self, entry: DirectoryEntry) -> str:
        if entry.content_ref is None:
            raise ContentFetchError(f"{entry.name} has no local path.")
        target = Path(entry.content_ref)
        try:
            if not target.resolve().is_relative_to(self.root):
                raise ContentFetchError(f"{entry.name} is outside {self.root}.")
            return read_text(target)
        except (OSError, ValueError) as exc:
            raise ContentFetchError(f"Could not read {entry.name}: {exc}", extra={"path": str(target)}) from exc

    async def fetch_text(self, entry: DirectoryEntry) -> str:
        logger.debug("Reading %s", entry.content_ref)
        return await asyncio.to_thread(self._read_sync, entry)


__all__ = [
    "LocalDirectorySource",
    "read_text",
    "scan_directory",
]
