"""
PokeAPI client for the catalog listing and per-type membership endpoints.

Blocking `requests` calls; the engine runs them off the event loop with
`asyncio.to_thread`. Failures are raised as `CatalogRequestError` so the engine
can record them; nothing here retries.
"""

from __future__ import annotations

from typing import Any

import requests

from pokedex.domains.catalog.models import EntityReference, PokemonType
from pokedex.utils.config import http_timeout_seconds, pokeapi_base_url
from pokedex.utils.locators import is_valid_locator
from pokedex.utils.logger import get_logger

logger = get_logger(__name__)


class CatalogRequestError(RuntimeError):
    """A PokeAPI request failed (transport, HTTP status, or unexpected payload)."""


def _parse_named_resource(item: Any) -> EntityReference | None:
    if not isinstance(item, dict):
        return None
    name = item.get("name")
    url = item.get("url")
    if not name or not url or not is_valid_locator(str(url)):
        return None
    return EntityReference.from_api(item)


def _parse_list_response(data: Any) -> list[EntityReference]:
    """Parse `GET /pokemon?limit=&offset=`: {"count": N, "results": [{name, url}, ...]}."""
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise CatalogRequestError("PokeAPI list response has no 'results' array")
    out: list[EntityReference] = []
    for item in data["results"]:
        ref = _parse_named_resource(item)
        if ref is None:
            logger.warning("Skipping malformed catalog entry: %r", item)
            continue
        out.append(ref)
    return out


def _parse_type_response(data: Any) -> list[EntityReference]:
    """Parse `GET /type/{name}`: {"pokemon": [{"pokemon": {name, url}, "slot": n}, ...]}."""
    if not isinstance(data, dict) or not isinstance(data.get("pokemon"), list):
        raise CatalogRequestError("PokeAPI type response has no 'pokemon' array")
    out: list[EntityReference] = []
    for member in data["pokemon"]:
        inner = member.get("pokemon") if isinstance(member, dict) else None
        ref = _parse_named_resource(inner)
        if ref is None:
            logger.warning("Skipping malformed type member: %r", member)
            continue
        out.append(ref)
    return out


class PokeAPIClient:
    """
    Thin PokeAPI wrapper returning `EntityReference` lists.

    No caching: every call hits the network.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = (base_url or pokeapi_base_url()).rstrip("/")
        self._timeout = timeout if timeout is not None else http_timeout_seconds()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            r = requests.get(
                url,
                params=params,
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            )
            r.raise_for_status()
            return r.json()
        except requests.RequestException as e:
            logger.warning("PokeAPI request failed for %s: %s", url, e)
            raise CatalogRequestError(f"PokeAPI request failed for {url}: {e}") from e
        except ValueError as e:
            logger.warning("PokeAPI invalid JSON from %s: %s", url, e)
            raise CatalogRequestError(f"PokeAPI returned invalid JSON for {url}") from e

    def list_page(self, limit: int, offset: int = 0) -> list[EntityReference]:
        """
        Fetch one bounded page of the catalog in canonical order.

        Args:
            limit: Page size.
            offset: Number of entries to skip.

        Returns:
            Entity references for the page.

        Raises:
            CatalogRequestError: On transport, HTTP, or payload failure.
        """
        data = self._get_json("pokemon", params={"limit": limit, "offset": offset})
        refs = _parse_list_response(data)
        logger.info("PokeAPI listed %d entries (limit=%d, offset=%d)", len(refs), limit, offset)
        return refs

    def resolve_facet(self, facet: PokemonType | str) -> list[EntityReference]:
        """
        Fetch every entity that belongs to a type facet.

        The result is unrestricted: callers narrow it to their catalog window.

        Raises:
            CatalogRequestError: On transport, HTTP, or payload failure.
        """
        name = facet.value if isinstance(facet, PokemonType) else str(facet)
        data = self._get_json(f"type/{name}")
        refs = _parse_type_response(data)
        logger.info("PokeAPI resolved type %s to %d entries", name, len(refs))
        return refs
