"""Base fields shared by every asset of a game, and the variant factory.

``id``, ``createdAt`` and ``updatedAt`` are assigned by the storage layer;
they are optional here and only their format is checked when present.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from gamecat.domain.fields import (
    ConstraintChain,
    FieldSpec,
    boolean,
    field,
    integer,
    literal,
    number,
    string,
)
from gamecat.domain.rules import CrossFieldRule, DerivedPathEquals
from gamecat.domain.variants import VariantSchema

SLUG_PATTERN = r"[a-z0-9]+(?:-[a-z0-9]+)*"
NAME_PATTERN = r"[a-záéíóúüñA-ZÁÉÍÓÚÜÑ0-9\s'+\-]+"
UUID_PATTERN = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
DATETIME_PATTERN = (
    r"\d{4}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12]\d|3[01])"
    r"T(?:[01]\d|2[0-3]):[0-5]\d:[0-5]\d(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})"
)

ICON_URL_TEMPLATE = "/media/games/{gameSlug}/assets/{slug}-{type}-{gameSlug}.webp"

SLUG_MESSAGE = "slug must be lowercase letters, numbers and single dashes only"


def slug() -> ConstraintChain:
    return string(strip=True, min_length=1, pattern=SLUG_PATTERN, pattern_message=SLUG_MESSAGE)


def weight() -> ConstraintChain:
    return number(ge=0, le=100, multiple_of=0.1)


def stat(upper: int, *, lower: int = 0, nullable: bool = False) -> ConstraintChain:
    """A whole-number stat in ``[lower, upper]``."""
    return integer(ge=lower, le=upper, nullable=nullable)


def base_fields(game_id: str) -> tuple[FieldSpec, ...]:
    """Top-level fields every asset of *game_id* carries (except type/category)."""
    icon_pattern = rf"/media/games/{re.escape(game_id)}/assets/[a-zA-Z0-9\-_]+\.webp"
    return (
        field(
            "id",
            string(pattern=UUID_PATTERN, pattern_message="id must be a valid UUID"),
            required=False,
            example="550e8400-e29b-41d4-a716-446655440000",
        ),
        field(
            "name",
            string(
                strip=True,
                min_length=1,
                max_length=100,
                pattern=NAME_PATTERN,
                pattern_message="Name can only contain letters, numbers and the + symbol",
            ),
            example="Moonveil",
        ),
        field("slug", slug(), example="moonveil"),
        field("gameSlug", literal(game_id), example=game_id),
        field(
            "description",
            string(strip=True, min_length=1, nullable=True),
            description="Long-form description, or null",
        ),
        field(
            "shortDescription",
            string(strip=True, min_length=1, max_length=250, nullable=True),
        ),
        field(
            "iconUrl",
            string(
                pattern=icon_pattern,
                ignore_case=True,
                pattern_message=f"iconUrl must be under /media/games/{game_id}/assets/*.webp",
            ),
            example=f"/media/games/{game_id}/assets/moonveil-weapons-{game_id}.webp",
        ),
        field("isActive", boolean(), default=True),
        field(
            "createdAt",
            string(pattern=DATETIME_PATTERN, pattern_message="createdAt must be an ISO datetime"),
            required=False,
            example="2024-01-01T00:00:00.000Z",
        ),
        field(
            "updatedAt",
            string(pattern=DATETIME_PATTERN, pattern_message="updatedAt must be an ISO datetime"),
            required=False,
            example="2024-01-01T00:00:00.000Z",
        ),
    )


def variant(
    game_id: str,
    discriminant: str,
    *,
    category: ConstraintChain,
    data: Iterable[FieldSpec],
    rules: Iterable[CrossFieldRule] = (),
) -> VariantSchema:
    """Assemble a variant: shared base fields, ``type``, ``category``, then *data*.

    Every variant checks that ``iconUrl`` is derived from slug, type and game.
    """
    fields = (
        *base_fields(game_id),
        field("type", literal(discriminant)),
        field("category", category),
    )
    return VariantSchema(
        discriminant,
        base_fields=fields,
        data_fields=data,
        rules=(DerivedPathEquals("iconUrl", ICON_URL_TEMPLATE), *rules),
    )