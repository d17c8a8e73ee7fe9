"""
Catalog engine: owns the fetched snapshot, the query, and favourites, and
publishes the derived visible list to subscribers.

State is only written from the event loop thread: by the synchronous mutators
below and by acquisition completions. Remote calls are the only suspension
points. Each acquisition carries a generation number; a completion from a
superseded generation is dropped, so the latest request always wins.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Iterable

from pokedex.domains.catalog.errors import AcquisitionFailure, NotInitialized
from pokedex.domains.catalog.facet_resolver import resolve_facets
from pokedex.domains.catalog.models import (
    CatalogView,
    EngineStatus,
    EntityReference,
    Field,
    FilterValue,
    PokemonType,
    QueryState,
)
from pokedex.domains.catalog.pipeline import compute_visible
from pokedex.utils.config import catalog_page_limit, catalog_page_offset
from pokedex.utils.logger import get_logger

logger = get_logger(__name__)

Listener = Callable[[CatalogView], None]


class CatalogEngine:
    """
    Provider for catalog consumers.

    Usage:
        engine = CatalogEngine(PokeAPIClient())
        await engine.activate()
        engine.search("char")
        engine.view.visible

    Consumers read `view` (or the individual properties) and call the
    mutators; they never compute derived state themselves.
    """

    def __init__(
        self,
        client: Any,
        *,
        page_limit: int | None = None,
        page_offset: int | None = None,
    ) -> None:
        self._client = client
        self._limit = page_limit if page_limit is not None else catalog_page_limit()
        self._offset = page_offset if page_offset is not None else catalog_page_offset()

        self._activated = False
        self._snapshot: tuple[EntityReference, ...] | None = None
        self._query = QueryState()
        self._favourites: frozenset[str] = frozenset()
        self._error: AcquisitionFailure | None = None
        self._visible: tuple[EntityReference, ...] = ()

        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener] = []
        self._view = self._build_view()

    # --- Lifecycle ---

    async def activate(self) -> CatalogView:
        """
        Start the engine and fetch a snapshot for the current facets.

        Calling it again re-attempts acquisition, which is how consumers
        recover from the error state. Fetch failures are recorded, not raised.
        """
        self._activated = True
        logger.info("Catalog engine activated (window limit=%d, offset=%d)", self._limit, self._offset)
        self._publish()
        await self._acquire(self._next_generation(), self._query.facets)
        return self._view

    async def refresh(self) -> CatalogView:
        """Re-fetch for the current facets."""
        self._require_active("refresh")
        await self._acquire(self._next_generation(), self._query.facets)
        return self._view

    async def settle(self) -> None:
        """Wait until every acquisition scheduled by `set_facets` has completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    @property
    def is_active(self) -> bool:
        return self._activated

    # --- Read side ---

    @property
    def view(self) -> CatalogView:
        self._require_active("view")
        return self._view

    @property
    def status(self) -> EngineStatus:
        self._require_active("status")
        return self._view.status

    @property
    def error(self) -> AcquisitionFailure | None:
        self._require_active("error")
        return self._error

    @property
    def visible_list(self) -> tuple[EntityReference, ...]:
        """
        The derived list. Empty while loading.

        Raises:
            AcquisitionFailure: While the engine is in the error state.
        """
        self._require_active("visible_list")
        if self._error is not None:
            raise self._error
        return self._visible

    @property
    def query(self) -> QueryState:
        self._require_active("query")
        return self._query

    @property
    def favourites(self) -> frozenset[str]:
        self._require_active("favourites")
        return self._favourites

    @property
    def favourite_count(self) -> int:
        self._require_active("favourite_count")
        return len(self._favourites)

    def is_favourite(self, entity: EntityReference) -> bool:
        self._require_active("is_favourite")
        return entity.name in self._favourites

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with each published view.

        Returns:
            A callable that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Mutators ---

    def search(self, text: str) -> None:
        """Replace the search text verbatim."""
        self._require_active("search")
        self._query = self._query.with_search(text)
        self._publish()

    def clear_search(self) -> None:
        self.search("")

    def add_favourite(self, entity: EntityReference) -> None:
        self._require_active("add_favourite")
        if entity.name in self._favourites:
            return
        self._favourites = self._favourites | {entity.name}
        self._publish()

    def remove_favourite(self, entity: EntityReference) -> None:
        self._require_active("remove_favourite")
        if entity.name not in self._favourites:
            return
        self._favourites = self._favourites - {entity.name}
        self._publish()

    def add_filter(self, field: Field | str, value: FilterValue) -> None:
        self._require_active("add_filter")
        self._query = self._query.with_filter(Field(field), value)
        self._publish()

    def remove_filter(self, field: Field | str) -> None:
        self._require_active("remove_filter")
        key = Field(field)
        if key not in self._query.filters:
            return
        self._query = self._query.without_filter(key)
        self._publish()

    def toggle_favourite_filter(self) -> None:
        """Turn the favourites-only filter on if it is off, and off otherwise."""
        if self.query.filters.get(Field.favourite):
            self.remove_filter(Field.favourite)
        else:
            self.add_filter(Field.favourite, True)

    def set_facets(self, facets: Iterable[PokemonType | str]) -> asyncio.Task[None] | None:
        """
        Replace the active facets and schedule acquisition for them.

        Must be called from a running event loop. An empty selection switches
        back to the default page.

        Returns:
            The scheduled acquisition task, or None when the selection did not
            change and the engine is not in the error state.

        Raises:
            ValueError: If a facet is not a known type.
        """
        self._require_active("set_facets")
        new = frozenset(PokemonType(f) for f in facets)
        if new == self._query.facets and self._error is None:
            return None

        self._query = self._query.with_facets(new)
        self._publish()

        task = asyncio.get_running_loop().create_task(self._acquire(self._next_generation(), new))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # --- Internals ---

    def _require_active(self, operation: str) -> None:
        if not self._activated:
            raise NotInitialized(operation)

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    async def _fetch(self, facets: frozenset[PokemonType]) -> list[EntityReference]:
        if not facets:
            try:
                return await asyncio.to_thread(self._client.list_page, self._limit, self._offset)
            except Exception as e:
                raise AcquisitionFailure(f"Catalog page fetch failed: {e}") from e
        return await resolve_facets(self._client, facets, limit=self._limit, offset=self._offset)

    async def _acquire(self, generation: int, facets: frozenset[PokemonType]) -> None:
        mode = ", ".join(sorted(f.value for f in facets)) if facets else "default page"
        logger.info("Acquisition #%d started (%s)", generation, mode)
        try:
            refs = await self._fetch(facets)
        except AcquisitionFailure as e:
            if generation != self._generation:
                logger.debug("Dropping failure from superseded acquisition #%d: %s", generation, e)
                return
            logger.exception("Acquisition #%d failed", generation)
            self._error = e
            self._publish()
            return

        if generation != self._generation:
            logger.debug("Dropping result of superseded acquisition #%d", generation)
            return

        self._snapshot = tuple(refs)
        self._error = None
        logger.info("Acquisition #%d stored %d entities (%s)", generation, len(refs), mode)
        self._publish()

    def _build_view(self) -> CatalogView:
        if not self._activated:
            status = EngineStatus.inactive
        elif self._error is not None:
            status = EngineStatus.error
        elif self._snapshot is None:
            status = EngineStatus.loading
        else:
            status = EngineStatus.ready
        return CatalogView(
            status=status,
            visible=self._visible if status is EngineStatus.ready else (),
            query=self._query,
            favourites=self._favourites,
            error=self._error,
        )

    def _publish(self) -> None:
        if self._snapshot is None:
            self._visible = ()
        else:
            self._visible = compute_visible(self._snapshot, self._query, self._favourites)
        self._view = self._build_view()
        for listener in list(self._listeners):
            try:
                listener(self._view)
            except Exception:
                logger.exception("Catalog listener %r raised", listener)
