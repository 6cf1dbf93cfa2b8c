"""Schema configuration errors.

Malformed *input* is always reported as an Issue. Malformed *schemas* are
programmer errors and fail loudly while the registry is being built.
"""

from __future__ import annotations


class SchemaConfigurationError(ValueError):
    """A schema, profile, or registry definition is internally inconsistent."""
