"""Infrastructure layer: reading asset records from files and streams.

This layer depends on stdlib and third-party libs (ruamel.yaml).
It must never import from services, commands, or output.
"""
