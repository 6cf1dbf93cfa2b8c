"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, gamecat.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- gamecat.toml sections ---


class RegistryConfig(BaseModel):
    """[registry] section."""

    model_config = {"frozen": True}

    # None enables every registered game.
    games: list[str] | None = None
    load_plugins: bool = True


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    max_issues_shown: int = Field(default=50, ge=1)

