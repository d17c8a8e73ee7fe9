"""Shared fixtures: entity factory and an in-memory catalog client."""

from __future__ import annotations

import threading
from typing import Callable

import pytest

from pokedex.domains.catalog.models import EntityReference, PokemonType
from pokedex.infrastructure.sources.pokeapi_client import CatalogRequestError

API = "https://pokeapi.co/api/v2"


def make_ref(name: str, ident: int) -> EntityReference:
    return EntityReference(name=name, locator=f"{API}/pokemon/{ident}/")


class FakeCatalogClient:
    """
    Blocking stand-in for PokeAPIClient.

    `gates` maps a facet (or "page") to a threading.Event the call waits on,
    so tests can hold one request open while another completes.
    """

    def __init__(
        self,
        page: list[EntityReference] | None = None,
        types: dict[PokemonType, list[EntityReference]] | None = None,
    ) -> None:
        self.page = list(page or [])
        self.types = dict(types or {})
        self.failing: set[PokemonType] = set()
        self.page_error: Exception | None = None
        self.gates: dict[object, threading.Event] = {}
        self.calls: list[tuple] = []
        self.base_url = API

    def list_page(self, limit: int, offset: int = 0) -> list[EntityReference]:
        self.calls.append(("list_page", limit, offset))
        gate = self.gates.get("page")
        if gate is not None:
            gate.wait(timeout=5)
        if self.page_error is not None:
            raise self.page_error
        return self.page[offset:offset + limit]

    def resolve_facet(self, facet: PokemonType) -> list[EntityReference]:
        self.calls.append(("resolve_facet", facet))
        gate = self.gates.get(facet)
        if gate is not None:
            gate.wait(timeout=5)
        if facet in self.failing:
            raise CatalogRequestError(f"type/{facet.value} failed")
        return list(self.types.get(facet, []))

    def facet_calls(self) -> list[PokemonType]:
        return [c[1] for c in self.calls if c[0] == "resolve_facet"]

    def page_calls(self) -> int:
        return sum(1 for c in self.calls if c[0] == "list_page")


@pytest.fixture
def ref() -> Callable[[str, int], EntityReference]:
    return make_ref


@pytest.fixture
def starters() -> list[EntityReference]:
    # Deliberately out of identity order.
    return [make_ref("squirtle", 7), make_ref("bulbasaur", 1), make_ref("charmander", 4)]


@pytest.fixture
def fake_client(starters: list[EntityReference]) -> FakeCatalogClient:
    return FakeCatalogClient(
        page=starters,
        types={
            PokemonType.fire: [make_ref("charmander", 4), make_ref("vulpix", 37)],
            PokemonType.water: [make_ref("squirtle", 7), make_ref("psyduck", 54)],
            PokemonType.flying: [make_ref("charizard", 6), make_ref("gyarados", 130), make_ref("talonflame", 663)],
            PokemonType.dragon: [make_ref("dratini", 147), make_ref("charizard", 6)],
        },
    )
