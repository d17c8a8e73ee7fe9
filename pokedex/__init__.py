"""Pokédex catalog provider: remote acquisition plus a derived, filtered view."""
