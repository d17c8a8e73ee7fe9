"""
Helpers for PokeAPI resource locators (e.g. https://pokeapi.co/api/v2/pokemon/25/).
"""

from __future__ import annotations

from urllib.parse import urlparse


def id_from_locator(locator: str) -> int:
    """
    Extract the numeric identity from a resource locator.

    The identity is the last non-empty path segment, which must be a
    non-negative integer ("/pokemon/25/" and "/pokemon/25" both give 25).

    Raises:
        ValueError: If the locator has no numeric trailing segment.
    """
    path = urlparse((locator or "").strip()).path
    segments = [s for s in path.split("/") if s]
    if not segments or not segments[-1].isdigit():
        raise ValueError(f"Locator has no numeric identity: {locator!r}")
    return int(segments[-1])


def is_valid_locator(locator: str) -> bool:
    try:
        id_from_locator(locator)
    except ValueError:
        return False
    return True


def in_window(locator: str, limit: int, offset: int = 0) -> bool:
    """
    True if the locator's identity falls inside the catalog window that
    `list_page(limit, offset)` returns. Identities are 1-based, so the
    window (limit=150, offset=0) covers ids 1..150.
    """
    ident = id_from_locator(locator)
    return offset < ident <= offset + limit
