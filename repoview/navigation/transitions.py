"""Pure state transitions for ``NavigationState``.

Every function returns a new snapshot (or the same object when a result is
stale) and never performs I/O. Stale results are detected by comparing the
generation handed out when the request began with the snapshot's counter.
"""

from __future__ import annotations

from dataclasses import replace

from ..errors import ContentFetchError, ExplorerError, ListingFetchError
from ..source.types import EMPTY_LISTING, DirectoryEntry, Listing
from .state import NavigationState, SelectedFile


def begin_listing(state: NavigationState, path: tuple[str, ...]) -> NavigationState:
    """Start a listing fetch for ``path``; supersedes any in-flight fetch."""
    return replace(
        state,
        is_listing_loading=True,
        pending_path=path,
        listing_generation=state.listing_generation + 1,
        error=None,
    )


def commit_listing(
    state: NavigationState,
    generation: int,
    path: tuple[str, ...],
    listing: Listing,
) -> NavigationState:
    """Apply a successful listing; clears the selected file."""
    if generation != state.listing_generation:
        return state
    return replace(
        state,
        current_path=path,
        listing=listing,
        is_listing_loading=False,
        pending_path=None,
        selected_file=None,
        error=None,
        content_generation=state.content_generation + 1,
    )


def fail_listing(state: NavigationState, generation: int, error: ListingFetchError) -> NavigationState:
    """Apply a failed listing; ``current_path`` is left untouched."""
    if generation != state.listing_generation:
        return state
    return replace(
        state,
        listing=EMPTY_LISTING,
        is_listing_loading=False,
        pending_path=None,
        error=error,
    )


def begin_content(state: NavigationState, entry: DirectoryEntry) -> NavigationState:
    """Replace the selected file with a loading placeholder for ``entry``."""
    return replace(
        state,
        selected_file=SelectedFile(
            name=entry.name,
            extension=entry.extension,
            content=None,
            is_content_loading=True,
        ),
        content_generation=state.content_generation + 1,
    )


def _is_current_content(state: NavigationState, generation: int, name: str) -> bool:
    selected = state.selected_file
    return generation == state.content_generation and selected is not None and selected.name == name


def commit_content(state: NavigationState, generation: int, name: str, content: str) -> NavigationState:
    if not _is_current_content(state, generation, name):
        return state
    assert state.selected_file is not None
    return replace(
        state,
        selected_file=replace(state.selected_file, content=content, is_content_loading=False, error=None),
    )


def fail_content(
    state: NavigationState,
    generation: int,
    name: str,
    error: ContentFetchError,
) -> NavigationState:
    if not _is_current_content(state, generation, name):
        return state
    assert state.selected_file is not None
    return replace(
        state,
        selected_file=replace(state.selected_file, content=None, is_content_loading=False, error=error),
    )


def drop_content(state: NavigationState, generation: int, name: str) -> NavigationState:
    """Clear the loading flag of a fetch whose result was discarded upstream."""
    if not _is_current_content(state, generation, name):
        return state
    assert state.selected_file is not None
    return replace(state, selected_file=replace(state.selected_file, is_content_loading=False))


def reset(state: NavigationState) -> NavigationState:
    """Fresh root state whose counters outrun every in-flight request."""
    return NavigationState(
        listing_generation=state.listing_generation + 1,
        content_generation=state.content_generation + 1,
    )


def record_error(state: NavigationState, error: ExplorerError) -> NavigationState:
    return replace(state, error=error)


__all__ = [
    "begin_listing",
    "commit_listing",
    "fail_listing",
    "begin_content",
    "commit_content",
    "fail_content",
    "drop_content",
    "reset",
    "record_error",
]
