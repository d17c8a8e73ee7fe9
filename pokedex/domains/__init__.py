"""Domain logic (catalog state, facet resolution, filtering).

Domains hold the rules of the system and should not import from the UI layer.
"""
