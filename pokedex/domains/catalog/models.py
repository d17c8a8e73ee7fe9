"""
Catalog value types: entity references, query state, and the published view.

All types here are immutable. The engine replaces them wholesale on change so
consumers can compare views by identity and never see a half-updated value.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

from pokedex.utils.locators import id_from_locator


class Field(str, Enum):
    """Boolean filter keys."""

    favourite = "favourite"


FilterValue = Union[bool, str, list[str], None]


class PokemonType(str, Enum):
    """Selectable type facets, in display order."""

    bug = "bug"
    dark = "dark"
    dragon = "dragon"
    electric = "electric"
    fairy = "fairy"
    fighting = "fighting"
    fire = "fire"
    flying = "flying"
    ghost = "ghost"
    grass = "grass"
    ground = "ground"
    ice = "ice"
    normal = "normal"
    poison = "poison"
    psychic = "psychic"
    rock = "rock"
    steel = "steel"
    water = "water"


class EngineStatus(str, Enum):
    inactive = "inactive"
    loading = "loading"
    ready = "ready"
    error = "error"


@dataclass(frozen=True)
class EntityReference:
    """A catalog entry as returned by the listing API: name plus resource URL."""

    name: str
    locator: str

    @property
    def identity(self) -> int:
        return id_from_locator(self.locator)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> EntityReference:
        """Build from a PokeAPI named resource ({"name": ..., "url": ...})."""
        return cls(name=str(data["name"]), locator=str(data["url"]))


def _frozen_filters(filters: Mapping[Field, FilterValue] | None) -> Mapping[Field, FilterValue]:
    return MappingProxyType(dict(filters or {}))


@dataclass(frozen=True)
class QueryState:
    """
    User query: free-text search, boolean filters, and active type facets.

    A filter key that is absent from `filters` is inactive.
    """

    search_text: str = ""
    filters: Mapping[Field, FilterValue] = field(default_factory=lambda: _frozen_filters(None))
    facets: frozenset[PokemonType] = frozenset()

    def with_search(self, text: str) -> QueryState:
        return replace(self, search_text=text)

    def with_filter(self, key: Field, value: FilterValue) -> QueryState:
        filters = dict(self.filters)
        filters[key] = value
        return replace(self, filters=_frozen_filters(filters))

    def without_filter(self, key: Field) -> QueryState:
        if key not in self.filters:
            return self
        filters = dict(self.filters)
        del filters[key]
        return replace(self, filters=_frozen_filters(filters))

    def with_facets(self, facets: frozenset[PokemonType]) -> QueryState:
        return replace(self, facets=facets)


@dataclass(frozen=True)
class CatalogView:
    """Read-only snapshot published to consumers after every change."""

    status: EngineStatus
    visible: tuple[EntityReference, ...]
    query: QueryState
    favourites: frozenset[str]
    error: BaseException | None = None

    @property
    def is_loading(self) -> bool:
        return self.status is EngineStatus.loading

    @property
    def is_error(self) -> bool:
        return self.status is EngineStatus.error
