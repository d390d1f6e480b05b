"""Domain layer — locations, candidates, keywords, and text predicates.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, protocol, commands, or config.
"""
