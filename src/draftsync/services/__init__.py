"""Service layer — propagation logic returning ServiceResult.

Services may import from domain. They must never import from plugins,
infrastructure, or config.
"""
