"""Built-in game rulesets and the default registry.

The default registry is built once at import; a schema mistake in a
built-in ruleset therefore fails at import, not at first validation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from gamecat.domain.engine import ValidationEngine
from gamecat.domain.issues import ValidationResult
from gamecat.domain.registry import SchemaRegistry
from gamecat.domain.variants import GameProfile
from gamecat.games.elden_ring import elden_ring_profile
from gamecat.games.tainted_grail import tainted_grail_profile


def builtin_profiles() -> list[GameProfile]:
    return [elden_ring_profile(), tainted_grail_profile()]


def build_registry(
    games: Iterable[str] | None = None,
    extra_profiles: Iterable[GameProfile] = (),
) -> SchemaRegistry:
    """Build a registry of the built-in profiles plus *extra_profiles*.

    When *games* is given the registry is restricted to those ids; an
    unknown id raises SchemaConfigurationError.
    """
    registry = SchemaRegistry([*builtin_profiles(), *extra_profiles])
    if games is not None:
        registry = registry.restricted_to(games)
    return registry


DEFAULT_REGISTRY = build_registry()
DEFAULT_ENGINE = ValidationEngine(DEFAULT_REGISTRY)


def validate(game_id: Any, record: Mapping[str, Any] | Any) -> ValidationResult:
    """Validate *record* for *game_id* against the built-in rulesets."""
    return DEFAULT_ENGINE.validate(game_id, record)


__all__ = [
    "DEFAULT_ENGINE",
    "DEFAULT_REGISTRY",
    "build_registry",
    "builtin_profiles",
    "validate",
]
