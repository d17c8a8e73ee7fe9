"""
Adapters from raw consumer input (select boxes, toggles) to engine calls.
"""

from __future__ import annotations

from typing import Iterable

from pokedex.domains.catalog.models import PokemonType

# Placeholder option shown by the type select when nothing is chosen.
NO_SELECTION = "none"


def facet_choices() -> list[PokemonType]:
    """Selectable type facets, in display order."""
    return list(PokemonType)


def parse_facet_selection(values: Iterable[str]) -> list[PokemonType]:
    """
    Turn raw select-box values into facets.

    Drops the placeholder option and repeated values; keeps first-seen order.

    Raises:
        ValueError: If a value is not a known type name.
    """
    out: list[PokemonType] = []
    for raw in values or []:
        v = (raw or "").strip().lower()
        if not v or v == NO_SELECTION:
            continue
        try:
            facet = PokemonType(v)
        except ValueError:
            raise ValueError(f"Unknown type facet: {raw!r}") from None
        if facet not in out:
            out.append(facet)
    return out
