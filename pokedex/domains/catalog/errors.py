"""Catalog engine exceptions."""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for catalog engine errors."""


class AcquisitionFailure(CatalogError):
    """A catalog fetch (default page or facet resolution) failed."""


class NotInitialized(CatalogError):
    """The engine was used before `activate()` was called."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Cannot use `{operation}` before the catalog engine is activated. "
            "Call `await engine.activate()` first."
        )
        self.operation = operation
