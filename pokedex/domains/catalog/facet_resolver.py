"""
Facet resolution: turn a set of type facets into the union of their members.

One request per facet runs concurrently. The join is all-or-nothing: if any
facet fails the whole resolution fails and partial results are dropped.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, Protocol

from pokedex.domains.catalog.errors import AcquisitionFailure
from pokedex.domains.catalog.models import EntityReference, PokemonType
from pokedex.utils.locators import in_window
from pokedex.utils.logger import get_logger

logger = get_logger(__name__)


class FacetSource(Protocol):
    def resolve_facet(self, facet: PokemonType) -> list[EntityReference]: ...


def canonical_facets(facets: Iterable[PokemonType]) -> list[PokemonType]:
    """Deduplicated facets in a fixed order, so merges do not depend on selection order."""
    return sorted(set(facets), key=lambda f: f.value)


def merge_unique(groups: Iterable[Iterable[EntityReference]]) -> list[EntityReference]:
    """Flatten and keep the first entity seen for each identity."""
    seen: set[int] = set()
    out: list[EntityReference] = []
    for group in groups:
        for ref in group:
            ident = ref.identity
            if ident in seen:
                continue
            seen.add(ident)
            out.append(ref)
    return out


async def resolve_facets(
    client: FacetSource,
    facets: Iterable[PokemonType],
    *,
    limit: int,
    offset: int = 0,
) -> list[EntityReference]:
    """
    Resolve facets to the union of their members inside the catalog window.

    Args:
        client: Anything with a blocking `resolve_facet(facet)`.
        facets: Non-empty collection of facets.
        limit: Catalog window size (same as the default page).
        offset: Catalog window offset.

    Returns:
        Members of any selected facet, deduplicated by identity.

    Raises:
        ValueError: If `facets` is empty.
        AcquisitionFailure: If any single facet request fails.
    """
    ordered = canonical_facets(facets)
    if not ordered:
        raise ValueError("resolve_facets requires at least one facet")

    logger.info("Resolving %d facet(s): %s", len(ordered), ", ".join(f.value for f in ordered))
    try:
        results = await asyncio.gather(
            *(asyncio.to_thread(client.resolve_facet, facet) for facet in ordered)
        )
    except Exception as e:
        raise AcquisitionFailure(f"Facet resolution failed: {e}") from e

    eligible = (
        [ref for ref in members if in_window(ref.locator, limit, offset)]
        for members in results
    )
    merged = merge_unique(eligible)
    logger.info("Facet resolution produced %d unique entities", len(merged))
    return merged
