"""Listing construction and path helpers shared by every content source."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from .types import DirectoryEntry, Listing

logger = logging.getLogger(__name__)

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def build_listing(entries: Iterable[DirectoryEntry]) -> Listing:
    """Order entries directories-first, keeping source order inside each group.

    Entries whose name already appeared are dropped.
    """
    seen: set[str] = set()
    directories: list[DirectoryEntry] = []
    files: list[DirectoryEntry] = []
    for entry in entries:
        if entry.name in seen:
            logger.warning("Dropping duplicate listing entry %r", entry.name)
            continue
        seen.add(entry.name)
        if entry.is_dir:
            directories.append(entry)
        else:
            files.append(entry)
    return Listing(entries=tuple(directories + files))


def normalize_path(path: Sequence[str]) -> tuple[str, ...]:
    """Validate a path given as a sequence of segments and return it as a tuple.

    Plain strings are rejected so ``"a/b"`` is never mistaken for ``("a", "/", "b")``;
    use ``split_path`` for slash-separated text.
    """
    if isinstance(path, str):
        raise TypeError("path must be a sequence of segments, not a string")
    segments = tuple(path)
    for segment in segments:
        if not isinstance(segment, str) or not segment:
            raise ValueError(f"invalid path segment: {segment!r}")
        if "/" in segment or segment in {".", ".."}:
            raise ValueError(f"invalid path segment: {segment!r}")
    return segments


def split_path(text: str) -> tuple[str, ...]:
    """Split slash-separated path text into segments, ignoring empty parts."""
    return normalize_path([part for part in text.split("/") if part])


def join_path(path: Sequence[str]) -> str:
    return "/".join(path)


def format_size(byte_size: int) -> str:
    """Format a byte count on a 1024 scale with no decimals (``"0 B"``, ``"12 KB"``)."""
    if byte_size <= 0:
        return "0 B"
    unit_idx = min(int(math.floor(math.log(byte_size) / math.log(1024))), len(SIZE_UNITS) - 1)
    value = byte_size / math.pow(1024, unit_idx)
    return f"{value:.0f} {SIZE_UNITS[unit_idx]}"


__all__ = [
    "build_listing",
    "normalize_path",
    "split_path",
    "join_path",
    "format_size",
]
