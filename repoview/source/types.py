"""Domain datatypes for directory listings and source identities."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from ..errors import InvalidSourceIdentity

_IDENTITY_PART_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "dir"


def extension_for_name(name: str) -> str:
    """Return lowercase text after the final dot, or ``""`` when there is none.

    ``"Readme.md"`` gives ``"md"``, ``".gitignore"`` gives ``"gitignore"`` and
    ``"Makefile"`` or ``"notes."`` give ``""``.
    """
    _head, dot, ext = name.rpartition(".")
    if not dot or not ext:
        return ""
    return ext.lower()


@dataclass(frozen=True)
class DirectoryEntry:
    """One item of a directory listing."""

    name: str
    kind: EntryKind
    byte_size: int = 0
    content_ref: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("entry name must be non-empty")
        if self.byte_size < 0:
            raise ValueError(f"byte_size must be non-negative, got {self.byte_size}")

    @classmethod
    def file(cls, name: str, byte_size: int, content_ref: str | None) -> DirectoryEntry:
        return cls(name=name, kind=EntryKind.FILE, byte_size=byte_size, content_ref=content_ref)

    @classmethod
    def directory(cls, name: str) -> DirectoryEntry:
        return cls(name=name, kind=EntryKind.DIRECTORY)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def extension(self) -> str:
        return extension_for_name(self.name)


@dataclass(frozen=True)
class Listing:
    """Ordered directory entries: directories first, then files.

    Build instances with ``repoview.source.listing.build_listing`` so ordering
    and name uniqueness hold.
    """

    entries: tuple[DirectoryEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def find(self, name: str) -> DirectoryEntry | None:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None


EMPTY_LISTING = Listing()


@dataclass(frozen=True)
class SourceIdentity:
    """Remote repository coordinates."""

    owner: str
    repository: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repository}"

    @classmethod
    def parse(cls, text: str) -> SourceIdentity:
        """Parse ``"owner/repository"`` text.

        Surrounding whitespace and slashes are ignored. Anything else that is
        not exactly two identifier parts raises ``InvalidSourceIdentity``.
        """
        parts = text.strip().strip("/").split("/")
        valid = len(parts) == 2 and all(
            _IDENTITY_PART_RE.match(part) and part not in {".", ".."} for part in parts
        )
        if not valid:
            raise InvalidSourceIdentity(
                f"Expected 'owner/repository', got {text!r}.",
                extra={"query": text},
            )
        owner, repository = parts
        return cls(owner=owner, repository=repository)


__all__ = [
    "EntryKind",
    "DirectoryEntry",
    "Listing",
    "EMPTY_LISTING",
    "SourceIdentity",
    "extension_for_name",
]
