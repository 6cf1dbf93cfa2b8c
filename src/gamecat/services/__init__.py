"""Service layer: validation and catalog operations returning ServiceResult.

Services may import from domain, games, and infrastructure layers.
They must never import from commands or output.
"""
