"""Domain layer: constraints, field specs, variant schemas, and the engine.

This layer depends only on stdlib and pydantic.
It must never import from games, services, commands, or config.
"""
