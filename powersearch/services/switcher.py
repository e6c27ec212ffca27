"""
Switcher Session - One popup invocation of the search engine switcher.

The caller supplies the current page URL and navigates to whatever
destination URL the session hands back:

    session = await SwitcherSession.open(store, tab_url)
    session.current_query          # "rust tutorial" or None
    url = session.switch_to(session.targets()[1])

Custom engine edits are applied to the in-memory registry and flushed to the
store before the call returns. If the flush fails for any reason the registry is
rolled back and the error re-raised, so memory never runs ahead of storage.
"""

from typing import Optional, Union

from loguru import logger

from powersearch.engines.registry import CustomEngineEntry, EngineRegistry
from powersearch.errors import NoQueryError, ValidationError
from powersearch.search.builder import build_search_url
from powersearch.search.extractor import extract_query
from powersearch.search.targets import SwitchTarget, build_targets, target_for_shortcut
from powersearch.services.storage import CustomEngineStore


class SwitcherSession:
    """
    Extracted query, registry and targets for a single page.

    Methods:
        open(store, current_url): Load engines and detect the query
        targets(): Ordered switch targets for display
        switch_to(target): Destination URL for a target
        select_shortcut(key): Destination URL for a digit shortcut
        add_engine / update_engine / delete_engine: Persisted registry edits
    """

    def __init__(
        self,
        store: CustomEngineStore,
        registry: EngineRegistry,
        current_url: Optional[str] = None,
        targets: Optional[list[SwitchTarget]] = None,
    ):
        if targets is None:
            from powersearch.utils.helpers import targets_from_settings
            targets = targets_from_settings({})

        self.store = store
        self.registry = registry
        self.current_url = current_url
        self._templates = list(targets)
        self.current_query: Optional[str] = None
        self.refresh_query()

    @classmethod
    async def open(
        cls,
        store: CustomEngineStore,
        current_url: Optional[str],
        targets: Optional[list[SwitchTarget]] = None,
    ) -> "SwitcherSession":
        """
        Start a session for the page at current_url.

        A store that cannot be read is logged and treated as having no
        custom engines; built-in detection still works.
        """
        try:
            custom = await store.load()
        except Exception:
            logger.exception("Failed to load custom engines, continuing without them")
            custom = []

        registry = EngineRegistry(custom=custom)
        return cls(store, registry, current_url, targets)

    def refresh_query(self) -> Optional[str]:
        """Re-run extraction against the current registry."""
        if self.current_url:
            self.current_query = extract_query(self.current_url, self.registry)
        else:
            self.current_query = None
        logger.debug(f"Detected query for {self.current_url!r}: {self.current_query!r}")
        return self.current_query

    @property
    def custom_engines(self) -> list[CustomEngineEntry]:
        return self.registry.list()

    @property
    def status_text(self) -> str:
        if self.current_query:
            return f'Current search: "{self.current_query}"'
        return "No search query detected"

    def targets(self) -> list[SwitchTarget]:
        return build_targets(self._templates, self.registry.list(), bool(self.current_query))

    def switch_to(self, target: Union[SwitchTarget, str]) -> str:
        """
        Build the destination URL for the detected query.

        Args:
            target: A SwitchTarget or a bare URL template

        Raises:
            NoQueryError: No query was detected on the current page
            ValidationError: The target has no URL template
        """
        if not self.current_query:
            raise NoQueryError()

        template = target.url if isinstance(target, SwitchTarget) else target
        if not template or not template.strip():
            raise ValidationError("url", "Search engine URL is not configured")

        url = build_search_url(template, self.current_query)
        name = target.name if isinstance(target, SwitchTarget) else template
        logger.debug(f"Switching to {name}: {url}")
        return url

    def select_shortcut(self, key: str) -> Optional[str]:
        """Destination URL for a "1".."9" key, or None if nothing is bound."""
        target = target_for_shortcut(self.targets(), key)
        if target is None:
            return None
        return self.switch_to(target)

    async def add_engine(self, entry: CustomEngineEntry) -> None:
        """
        Add a custom engine and persist it.

        Raises:
            ValidationError: Missing field or duplicate name/domain
            StorageError: The store could not be written (change undone)
        """
        previous = self.registry.list()
        self.registry.add_custom(entry)
        await self._flush(previous)
        self.refresh_query()

    async def update_engine(self, index: int, entry: CustomEngineEntry) -> None:
        """
        Replace the custom engine at index and persist it.

        Raises:
            NotFoundError: index is out of range
            ValidationError: Missing field or duplicate name/domain
            StorageError: The store could not be written (change undone)
        """
        previous = self.registry.list()
        self.registry.update_custom(index, entry)
        await self._flush(previous)
        self.refresh_query()

    async def delete_engine(self, index: int) -> CustomEngineEntry:
        """
        Delete the custom engine at index and persist the change.

        Raises:
            NotFoundError: index is out of range
            StorageError: The store could not be written (change undone)
        """
        previous = self.registry.list()
        removed = self.registry.delete_custom(index)
        await self._flush(previous)
        self.refresh_query()
        return removed

    async def _flush(self, previous: list[CustomEngineEntry]) -> None:
        try:
            await self.store.save(self.registry.list())
        except Exception:
            logger.exception("Failed to save custom engines, rolling back")
            self.registry.replace_custom(previous)
            raise
