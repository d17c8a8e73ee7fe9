"""Shared helpers: configuration, logging, locator parsing."""
