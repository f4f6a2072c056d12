"""Domain layer — statuses, content items, and the propagation rule.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, plugins, or config.
"""
