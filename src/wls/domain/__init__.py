"""Domain layer — manifest keys, entries, ghost synthesis, merging.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
