"""Application services layer (wiring of clients and engines).

Services coordinate work across domains and infrastructure. They should avoid
UI concerns.
"""
