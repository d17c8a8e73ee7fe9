"""
Tests for PokeAPIClient: page listing, type resolution, error mapping.
"""

from __future__ import annotations

from unittest.mock import patch, MagicMock

import pytest
import requests

from pokedex.domains.catalog.models import EntityReference, PokemonType
from pokedex.infrastructure.sources.pokeapi_client import (
    CatalogRequestError,
    PokeAPIClient,
    _parse_list_response,
    _parse_type_response,
)

API = "https://pokeapi.co/api/v2"


@pytest.fixture
def client() -> PokeAPIClient:
    return PokeAPIClient(base_url=API + "/", timeout=5)


def _response(payload: object) -> MagicMock:
    r = MagicMock()
    r.status_code = 200
    r.json.return_value = payload
    r.raise_for_status = MagicMock()
    return r


def test_list_page_returns_references(client: PokeAPIClient) -> None:
    """list_page hits /pokemon with limit/offset and parses results."""
    payload = {
        "count": 1302,
        "results": [
            {"name": "bulbasaur", "url": f"{API}/pokemon/1/"},
            {"name": "ivysaur", "url": f"{API}/pokemon/2/"},
        ],
    }
    with patch("pokedex.infrastructure.sources.pokeapi_client.requests.get", return_value=_response(payload)) as get:
        refs = client.list_page(150, 0)

    assert refs == [
        EntityReference("bulbasaur", f"{API}/pokemon/1/"),
        EntityReference("ivysaur", f"{API}/pokemon/2/"),
    ]
    args, kwargs = get.call_args
    assert args[0] == f"{API}/pokemon"
    assert kwargs["params"] == {"limit": 150, "offset": 0}
    assert kwargs["timeout"] == 5


def test_resolve_facet_unwraps_type_members(client: PokeAPIClient) -> None:
    """resolve_facet hits /type/{name} and unwraps the nested pokemon entries."""
    payload = {
        "name": "fire",
        "pokemon": [
            {"pokemon": {"name": "charmander", "url": f"{API}/pokemon/4/"}, "slot": 1},
            {"pokemon": {"name": "vulpix", "url": f"{API}/pokemon/37/"}, "slot": 1},
        ],
    }
    with patch("pokedex.infrastructure.sources.pokeapi_client.requests.get", return_value=_response(payload)) as get:
        refs = client.resolve_facet(PokemonType.fire)

    assert [r.name for r in refs] == ["charmander", "vulpix"]
    assert get.call_args[0][0] == f"{API}/type/fire"


def test_http_error_raises(client: PokeAPIClient) -> None:
    """HTTP failures surface as CatalogRequestError."""
    r = _response({})
    r.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
    with patch("pokedex.infrastructure.sources.pokeapi_client.requests.get", return_value=r):
        with pytest.raises(CatalogRequestError, match="request failed"):
            client.resolve_facet("fire")


def test_connection_error_raises(client: PokeAPIClient) -> None:
    with patch(
        "pokedex.infrastructure.sources.pokeapi_client.requests.get",
        side_effect=requests.ConnectionError("offline"),
    ):
        with pytest.raises(CatalogRequestError):
            client.list_page(150)


def test_invalid_json_raises(client: PokeAPIClient) -> None:
    r = _response(None)
    r.json.side_effect = ValueError("Expecting value")
    with patch("pokedex.infrastructure.sources.pokeapi_client.requests.get", return_value=r):
        with pytest.raises(CatalogRequestError, match="invalid JSON"):
            client.list_page(150)


def test_unexpected_payload_raises(client: PokeAPIClient) -> None:
    with patch("pokedex.infrastructure.sources.pokeapi_client.requests.get", return_value=_response({"detail": "x"})):
        with pytest.raises(CatalogRequestError, match="results"):
            client.list_page(150)


def test_parse_list_response_skips_malformed() -> None:
    """Entries without a name or a numeric locator are dropped."""
    data = {
        "results": [
            {"name": "pikachu", "url": f"{API}/pokemon/25/"},
            {"name": "", "url": f"{API}/pokemon/26/"},
            {"name": "missingno", "url": f"{API}/pokemon/missingno/"},
            "garbage",
        ]
    }
    out = _parse_list_response(data)
    assert [r.name for r in out] == ["pikachu"]


def test_parse_type_response_requires_pokemon_array() -> None:
    with pytest.raises(CatalogRequestError):
        _parse_type_response({"name": "fire"})
