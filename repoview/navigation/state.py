from __future__ import annotations

from dataclasses import dataclass

from ..errors import ContentFetchError, ExplorerError
from ..source.types import EMPTY_LISTING, Listing


@dataclass(frozen=True)
class SelectedFile:
    name: str
    extension: str
    content: str | None = None
    is_content_loading: bool = False
    error: ContentFetchError | None = None


@dataclass(frozen=True)
class NavigationState:
    """Immutable snapshot of the explorer.

    ``pending_path`` is the target of the in-flight listing fetch, if any.
    The generation counters identify the latest listing and content requests;
    results carrying an older generation are never committed.
    """

    current_path: tuple[str, ...] = ()
    listing: Listing = EMPTY_LISTING
    is_listing_loading: bool = False
    selected_file: SelectedFile | None = None
    error: ExplorerError | None = None
    pending_path: tuple[str, ...] | None = None
    listing_generation: int = 0
    content_generation: int = 0
