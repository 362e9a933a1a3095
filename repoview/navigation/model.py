"""Navigation state model: turns user actions into state transitions.

``NavigationModel`` owns the current ``NavigationState`` snapshot and the
active content source. Actions are coroutines; each fetch runs between two
transitions and its result is committed only while its generation is still the
latest one, so a slow response never overwrites a newer navigation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..config import ExplorerConfig
from ..content.resolver import ContentResolver
from ..errors import ContentFetchError, InvalidSourceIdentity, ListingFetchError, SearchDisabledError
from ..source.base import ContentSource
from ..source.listing import join_path, normalize_path
from ..source.types import DirectoryEntry, EntryKind, SourceIdentity
from . import transitions
from .breadcrumbs import breadcrumb_target
from .state import NavigationState

logger = logging.getLogger(__name__)

README_NAME = "readme.md"

Listener = Callable[[NavigationState], None]
SourceFactory = Callable[[SourceIdentity], ContentSource]


def find_readme(entries: Sequence[DirectoryEntry]) -> DirectoryEntry | None:
    for entry in entries:
        if entry.kind is EntryKind.FILE and entry.name.lower() == README_NAME:
            return entry
    return None


class NavigationModel:
    """Directory browsing state machine over one ``ContentSource``."""

    def __init__(
        self,
        source: ContentSource,
        *,
        source_factory: SourceFactory | None = None,
        search_enabled: bool = False,
    ) -> None:
        if search_enabled and source_factory is None:
            raise ValueError("search requires a source factory")
        self._source = source
        self._resolver = ContentResolver(source)
        self._source_factory = source_factory
        self.search_enabled = search_enabled
        self._state = NavigationState()
        self._listeners: list[Listener] = []
        self._readme_generation = 0

    @classmethod
    def from_config(cls, config: ExplorerConfig, source_factory: SourceFactory) -> NavigationModel:
        return cls(
            source_factory(config.source_identity),
            source_factory=source_factory,
            search_enabled=config.search_enabled,
        )

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def source(self) -> ContentSource:
        return self._source

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, new_state: NavigationState) -> bool:
        if new_state is self._state:
            return False
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return True

    async def mount(self) -> None:
        """Load the root listing."""
        await self.navigate_to(())

    async def reload(self) -> None:
        await self.navigate_to(self._state.current_path)

    async def navigate_up(self) -> None:
        if self._state.current_path:
            await self.navigate_to(self._state.current_path[:-1])

    async def navigate_to(self, path: Sequence[str]) -> None:
        """Fetch the listing for ``path`` and commit it unless superseded."""
        target = normalize_path(path)
        self._commit(transitions.begin_listing(self._state, target))
        generation = self._state.listing_generation
        source = self._source

        try:
            listing = await source.list_directory(target)
        except ListingFetchError as exc:
            if self._commit(transitions.fail_listing(self._state, generation, exc)):
                logger.warning("Listing /%s failed: %s", join_path(target), exc.detail)
            else:
                logger.debug("Ignoring failure of superseded listing /%s", join_path(target))
            return

        if not self._commit(transitions.commit_listing(self._state, generation, target, listing)):
            logger.debug("Discarding stale listing for /%s", join_path(target))
            return
        await self._select_readme(generation)

    async def navigate_to_breadcrumb(self, segment_index: int) -> None:
        await self.navigate_to(breadcrumb_target(self._state.current_path, segment_index))

    async def activate_entry(self, entry: DirectoryEntry) -> None:
        """Open a directory, or load a file into the selected-file slot."""
        if entry.kind is EntryKind.DIRECTORY:
            await self.navigate_to(self._state.current_path + (entry.name,))
            return

        self._commit(transitions.begin_content(self._state, entry))
        generation = self._state.content_generation
        resolver = self._resolver

        try:
            content = await resolver.fetch_content(entry)
        except ContentFetchError as exc:
            if self._commit(transitions.fail_content(self._state, generation, entry.name, exc)):
                logger.warning("Loading %s failed: %s", entry.name, exc.detail)
            return

        if content is None:
            self._commit(transitions.drop_content(self._state, generation, entry.name))
            return
        if not self._commit(transitions.commit_content(self._state, generation, entry.name, content)):
            logger.debug("Discarding stale content for %s", entry.name)

    async def _select_readme(self, generation: int) -> None:
        """Open the listing's readme once per committed listing.

        Skipped when a newer listing is loading or a file is already selected.
        """
        if generation == self._readme_generation:
            return
        self._readme_generation = generation
        state = self._state
        if state.listing_generation != generation or state.selected_file is not None:
            return
        readme = find_readme(state.listing.entries)
        if readme is not None:
            await self.activate_entry(readme)

    async def search(self, query: str) -> bool:
        """Re-point the explorer at ``owner/repository`` and load its root.

        Returns ``False`` and records ``InvalidSourceIdentity`` on the state
        when ``query`` cannot be parsed.
        """
        if not self.search_enabled:
            raise SearchDisabledError()
        assert self._source_factory is not None
        try:
            identity = SourceIdentity.parse(query)
        except InvalidSourceIdentity as exc:
            logger.warning("Rejected source %r: %s", query, exc.detail)
            self._commit(transitions.record_error(self._state, exc))
            return False

        logger.info("Switching source to %s", identity)
        self._source = self._source_factory(identity)
        self._resolver = ContentResolver(self._source)
        self._commit(transitions.reset(self._state))
        await self.mount()
        return True


__all__ = ["NavigationModel", "find_readme", "README_NAME"]
