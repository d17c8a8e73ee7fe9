"""Data sources: PokeAPI and other external APIs."""

from pokedex.infrastructure.sources.pokeapi_client import CatalogRequestError, PokeAPIClient

__all__ = ["CatalogRequestError", "PokeAPIClient"]
