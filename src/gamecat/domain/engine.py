"""ValidationEngine: the single public entry point.

State flow per call::

    Start -> GameResolved -> VariantResolved -> FieldsValidated
          -> RulesEvaluated -> Done(success | failure)

Only the two lookups short-circuit, each with exactly one issue: an
unknown game (``UnsupportedGame``) and an unknown discriminant
(``UnsupportedType``). From VariantResolved onward every field and rule
runs. The engine never raises for malformed input and never mutates it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from gamecat.domain.constraints import kind_of
from gamecat.domain.issues import Issue, ValidationResult
from gamecat.domain.registry import SchemaRegistry
from gamecat.domain.types import ErrorKind

GAME_FIELD = "gameSlug"

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Validates raw asset records against a :class:`SchemaRegistry`."""

    def __init__(self, registry: SchemaRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def validate(self, game_id: str, record: Any) -> ValidationResult:
        """Validate *record* as an asset of *game_id*."""
        profile = self._registry.lookup(game_id)
        if profile is None:
            logger.debug("Unsupported game %r", game_id)
            return ValidationResult.failed(
                [
                    Issue(
                        path=(GAME_FIELD,),
                        code=ErrorKind.UNSUPPORTED_GAME,
                        message=f"Unsupported game: {game_id}",
                    )
                ]
            )

        if not isinstance(record, Mapping):
            return ValidationResult.failed(
                [
                    Issue(
                        code=ErrorKind.TYPE_MISMATCH,
                        message=f"Expected object, received {kind_of(record)}",
                    )
                ]
            )

        discriminant = record.get(profile.discriminant_field)
        variant = profile.resolve(discriminant)
        if variant is None:
            logger.debug("Unsupported type %r for game %s", discriminant, game_id)
            return ValidationResult.failed(
                [
                    Issue(
                        path=(profile.discriminant_field,),
                        code=ErrorKind.UNSUPPORTED_TYPE,
                        message=(
                            f"Unsupported type {discriminant!r} for {game_id}, "
                            f"expected one of: {', '.join(profile.discriminants)}"
                        ),
                    )
                ]
            )

        normalized, issues = variant.validate(record)
        logger.debug(
            "Validated %s/%s: %d issue(s)",
            game_id,
            variant.discriminant,
            len(issues),
        )
        if issues:
            return ValidationResult.failed(issues)
        return ValidationResult.passed(normalized)

    def validate_asset(self, record: Any) -> ValidationResult:
        """Validate *record*, taking the game from its ``gameSlug`` field."""
        game_id = record.get(GAME_FIELD) if isinstance(record, Mapping) else None
        return self.validate(game_id, record)
