"""Catalog domain: data model, facet resolution, filter pipeline, and the engine."""

from pokedex.domains.catalog.engine import CatalogEngine
from pokedex.domains.catalog.errors import AcquisitionFailure, CatalogError, NotInitialized
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

__all__ = [
    "AcquisitionFailure",
    "CatalogEngine",
    "CatalogError",
    "CatalogView",
    "EngineStatus",
    "EntityReference",
    "Field",
    "FilterValue",
    "NotInitialized",
    "PokemonType",
    "QueryState",
    "compute_visible",
]
