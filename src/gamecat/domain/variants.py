"""VariantSchema and GameProfile: the tagged-variant dispatch table.

A :class:`VariantSchema` is the full schema for one (game, type) pair:
top-level base fields, the nested ``data`` fields, and ordered
cross-field rules. A :class:`GameProfile` maps each discriminant value
to exactly one variant.

Both are immutable after construction, and construction is where schema
mistakes surface: duplicate discriminants, duplicate field names, and
rules reading fields the variant does not declare all raise
:class:`~gamecat.domain.errors.SchemaConfigurationError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from gamecat.domain.constraints import MISSING
from gamecat.domain.errors import SchemaConfigurationError
from gamecat.domain.fields import (
    ArrayOf,
    ConstraintChain,
    FieldSpec,
    ObjectOf,
    TupleOf,
    check_unique_names,
    obj,
    validate_fields,
)
from gamecat.domain.issues import FieldPath, Issue, format_path
from gamecat.domain.rules import CrossFieldRule

DATA_FIELD = "data"
DISCRIMINANT_FIELD = "type"

logger = logging.getLogger(__name__)


def _overlaps(a: FieldPath, b: FieldPath) -> bool:
    """True when one path is a prefix of (or equal to) the other."""
    shorter = min(len(a), len(b))
    return a[:shorter] == b[:shorter]


class VariantSchema:
    """Schema for one discriminant value within a game.

    Usage::

        variant = VariantSchema(
            "weapon",
            base_fields=base,
            data_fields=(field("block", integer(ge=1, nullable=True)),),
            rules=(RequiredForCategories("data.block", ["shields"]),),
        )
        normalized, issues = variant.validate(record)
    """

    def __init__(
        self,
        discriminant: str,
        *,
        base_fields: Iterable[FieldSpec],
        data_fields: Iterable[FieldSpec],
        rules: Iterable[CrossFieldRule] = (),
    ) -> None:
        self._discriminant = discriminant
        self._base_fields = tuple(base_fields)
        self._data_fields = tuple(data_fields)
        self._rules = tuple(rules)

        where = f"variant {discriminant!r}"
        check_unique_names(self._base_fields, where)
        if any(spec.name == DATA_FIELD for spec in self._base_fields):
            msg = f"Base field {DATA_FIELD!r} collides with the nested data object in {where}"
            raise SchemaConfigurationError(msg)
        self._data_spec = FieldSpec(DATA_FIELD, obj(*self._data_fields))

        for rule in self._rules:
            for path in rule.inputs:
                if self.lookup(path) is None:
                    msg = (
                        f"Rule {rule.name!r} in {where} reads "
                        f"{format_path(path)!r}, which is not a declared field"
                    )
                    raise SchemaConfigurationError(msg)

    @property
    def discriminant(self) -> str:
        return self._discriminant

    @property
    def base_fields(self) -> tuple[FieldSpec, ...]:
        return self._base_fields

    @property
    def data_fields(self) -> tuple[FieldSpec, ...]:
        return self._data_fields

    @property
    def rules(self) -> tuple[CrossFieldRule, ...]:
        return self._rules

    def lookup(self, path: FieldPath) -> FieldSpec | ConstraintChain | None:
        """Resolve *path* against the declared field tree.

        Returns the FieldSpec for named segments, the position/item chain
        for index segments, or None when the path leaves the tree.
        """
        if not path:
            return None
        head, *rest = path
        if head == DATA_FIELD:
            node: FieldSpec | ConstraintChain = self._data_spec
        else:
            found = next((s for s in self._base_fields if s.name == head), None)
            if found is None:
                return None
            node = found

        for segment in rest:
            chain = node.chain if isinstance(node, FieldSpec) else node
            shape = chain.shape
            if isinstance(segment, int):
                if isinstance(shape, TupleOf) and 0 <= segment < len(shape.positions):
                    node = shape.positions[segment]
                elif isinstance(shape, ArrayOf):
                    node = shape.items
                else:
                    return None
            else:
                child = shape.field(segment) if isinstance(shape, ObjectOf) else None
                if child is None:
                    return None
                node = child
        return node

    def validate(self, record: Mapping[str, Any]) -> tuple[dict[str, Any], list[Issue]]:
        """Validate *record* against this variant.

        1. every base field against the record's top-level keys;
        2. every data field against the nested ``data`` object;
        3. every rule, in declared order, against the best-effort record.

        Never short-circuits: the returned issues are all the violations
        found. A rule whose inputs already failed field validation is
        indeterminate and contributes nothing.
        """
        normalized, issues = validate_fields(self._base_fields, record)

        data, data_issues = self._data_spec.validate(record.get(DATA_FIELD, MISSING))
        if data is not MISSING:
            normalized[DATA_FIELD] = data
        issues.extend(data_issues)

        failed_paths = [issue.path for issue in issues]
        for rule in self._rules:
            if any(_overlaps(inp, failed) for inp in rule.inputs for failed in failed_paths):
                logger.debug("Rule %s skipped: input failed field validation", rule.name)
                continue
            issues.extend(rule.evaluate(normalized))

        return normalized, issues

    def describe(self) -> dict[str, Any]:
        """Schema documentation: field rows and rule statements."""
        return {
            "type": self._discriminant,
            "fields": list(self.iter_field_docs()),
            "rules": [{"name": r.name, "description": r.describe()} for r in self._rules],
        }

    def iter_field_docs(self) -> Iterator[dict[str, Any]]:
        for spec in self._base_fields:
            yield from spec.describe()
        yield from self._data_spec.describe()

    def __repr__(self) -> str:
        return f"VariantSchema({self._discriminant!r})"


class GameProfile:
    """Discriminated union of variants for one game.

    The discriminant is read from the record's ``type`` field.
    """

    def __init__(
        self,
        game_id: str,
        variants: Iterable[VariantSchema],
        *,
        discriminant_field: str = DISCRIMINANT_FIELD,
    ) -> None:
        table: dict[str, VariantSchema] = {}
        for variant in variants:
            if variant.discriminant in table:
                msg = f"Duplicate variant {variant.discriminant!r} in game {game_id!r}"
                raise SchemaConfigurationError(msg)
            table[variant.discriminant] = variant
        if not table:
            msg = f"Game {game_id!r} declares no variants"
            raise SchemaConfigurationError(msg)
        self._game_id = game_id
        self._discriminant_field = discriminant_field
        self._variants: Mapping[str, VariantSchema] = MappingProxyType(table)

    @property
    def game_id(self) -> str:
        return self._game_id

    @property
    def discriminant_field(self) -> str:
        return self._discriminant_field

    @property
    def variants(self) -> Mapping[str, VariantSchema]:
        return self._variants

    @property
    def discriminants(self) -> tuple[str, ...]:
        return tuple(self._variants)

    def resolve(self, discriminant: Any) -> VariantSchema | None:
        """Return the variant for *discriminant*, or None when unmatched."""
        if not isinstance(discriminant, str):
            return None
        return self._variants.get(discriminant)

    def __contains__(self, discriminant: object) -> bool:
        return isinstance(discriminant, str) and discriminant in self._variants

    def __repr__(self) -> str:
        return f"GameProfile({self._game_id!r}, variants={list(self._variants)})"
