"""
Engine wiring: build a CatalogEngine backed by the PokeAPI client, using
environment configuration for the catalog window and HTTP settings.
"""

from __future__ import annotations

from pokedex.domains.catalog.engine import CatalogEngine
from pokedex.domains.catalog.errors import NotInitialized
from pokedex.infrastructure.sources.pokeapi_client import PokeAPIClient
from pokedex.utils.config import (
    catalog_page_limit,
    catalog_page_offset,
    load_config,
    log_file,
    log_level,
)
from pokedex.utils.logger import get_logger, setup_logger


def create_engine(client: PokeAPIClient | None = None) -> CatalogEngine:
    """
    Load .env, configure logging, and return an (inactive) engine.

    Consumers must `await engine.activate()` before reading from it.
    """
    load_config()
    setup_logger(level=log_level(), log_file=log_file())
    if client is None:
        client = PokeAPIClient()
    engine = CatalogEngine(
        client,
        page_limit=catalog_page_limit(),
        page_offset=catalog_page_offset(),
    )
    get_logger(__name__).info("Catalog engine created for %s", client.base_url)
    return engine


def require_engine(engine: CatalogEngine | None) -> CatalogEngine:
    """
    Return the engine a consumer was handed, failing loudly if it is missing
    or was never activated.

    Raises:
        NotInitialized: If `engine` is None or inactive.
    """
    if engine is None or not engine.is_active:
        raise NotInitialized("require_engine")
    return engine
