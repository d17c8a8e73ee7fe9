"""
Filter / search / sort pipeline. Pure: (snapshot, query, favourites) -> visible list.

Stages run in a fixed order: favourite filter, search filter, sort by identity.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from pokedex.domains.catalog.models import EntityReference, Field, QueryState


def _filter_favourites(
    entities: list[EntityReference],
    favourites: frozenset[str],
) -> list[EntityReference]:
    return [e for e in entities if e.name in favourites]


def _filter_search(entities: list[EntityReference], text: str) -> list[EntityReference]:
    needle = text.casefold()
    return [e for e in entities if needle in e.name.casefold()]


def sort_by_identity(entities: Iterable[EntityReference]) -> list[EntityReference]:
    """Ascending by locator identity. `sorted` is stable, so ties keep input order."""
    return sorted(entities, key=lambda e: e.identity)


def compute_visible(
    snapshot: Sequence[EntityReference],
    query: QueryState,
    favourites: Iterable[str],
) -> tuple[EntityReference, ...]:
    """
    Derive the visible list.

    Args:
        snapshot: Last fetched unfiltered catalog.
        query: Active search text and filters. Facets are not applied here;
            they already shaped the snapshot at fetch time.
        favourites: Names marked favourite.

    Returns:
        A new tuple; a subsequence of `snapshot` sorted by identity.
    """
    out = list(snapshot)

    if query.filters.get(Field.favourite):
        out = _filter_favourites(out, frozenset(favourites))

    if query.search_text:
        out = _filter_search(out, query.search_text)

    return tuple(sort_by_identity(out))
