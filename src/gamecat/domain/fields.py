"""Constraint chains, composite shapes, and FieldSpec.

A :class:`ConstraintChain` is the ordered list of constraints applied to
one value plus its nullability. A :class:`FieldSpec` binds a chain to a
field name and adds the absence policy:

- required + absent  -> one ``MissingRequiredField`` issue, nothing else
- optional + absent  -> default substituted (or the key stays absent)
- present ``null``   -> accepted only when the chain is nullable

Composite shapes (:class:`ArrayOf`, :class:`TupleOf`, :class:`ObjectOf`)
are constraints themselves, so nested records are validated recursively
with the same all-errors-collected policy and path prefixing.

The lower-case builders at the bottom (``string``, ``integer``, ``obj``,
...) are the vocabulary game rulesets are written in.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from gamecat.domain.constraints import (
    MISSING,
    Constraint,
    Forbid,
    Ge,
    Gt,
    Integer,
    IsType,
    Le,
    MaxLength,
    MinLength,
    MultipleOf,
    OneOf,
    Outcome,
    Pattern,
    Strip,
)
from gamecat.domain.errors import SchemaConfigurationError
from gamecat.domain.issues import Issue
from gamecat.domain.types import ErrorKind, ValueKind

# ---------------------------------------------------------------------------
# Constraint chain
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstraintChain:
    """Ordered constraints for one value, with a nullability modifier.

    Every constraint runs and every failure is collected, except that a
    failed type check stops the chain: bounds and patterns are only
    meaningful once the type is confirmed. Coercing constraints (trim)
    hand their output to the constraints that follow.
    """

    constraints: tuple[Constraint, ...]
    nullable: bool = False

    @property
    def kind(self) -> ValueKind | None:
        """The kind asserted by the chain's type check, if any."""
        for constraint in self.constraints:
            if isinstance(constraint, IsType):
                return constraint.kind
        return None

    @property
    def shape(self) -> Constraint | None:
        """The composite shape constraint (object, tuple, array), if any."""
        for constraint in self.constraints:
            if isinstance(constraint, (ObjectOf, TupleOf, ArrayOf)):
                return constraint
        return None

    def check(self, value: Any) -> Outcome:
        if value is None:
            if self.nullable:
                return Outcome.passed(None)
            return Outcome.failed(
                value,
                ErrorKind.TYPE_MISMATCH,
                f"Expected {self.kind or 'a value'}, received null",
            )

        current = value
        issues: list[Issue] = []
        for constraint in self.constraints:
            outcome = constraint.check(current)
            current = outcome.value
            if outcome.ok:
                continue
            issues.extend(outcome.issues)
            if constraint.short_circuits:
                break
        return Outcome(value=current, issues=tuple(issues))

    def describe(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"nullable": self.nullable}
        for constraint in self.constraints:
            if isinstance(constraint, (ObjectOf, TupleOf)):
                continue
            doc.update(constraint.describe())
        return doc


# ---------------------------------------------------------------------------
# Field spec
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldSpec:
    """A named field bound to a constraint chain and an absence policy."""

    name: str
    chain: ConstraintChain
    required: bool = True
    default: Any = MISSING
    description: str | None = None
    example: Any = None

    def __post_init__(self) -> None:
        if self.default is MISSING:
            return
        if self.required:
            msg = f"Field {self.name!r} is required and cannot declare a default"
            raise SchemaConfigurationError(msg)
        if not self.chain.check(self.default).ok:
            msg = f"Default {self.default!r} for field {self.name!r} fails its own constraints"
            raise SchemaConfigurationError(msg)

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return self.chain.constraints

    @property
    def nullable(self) -> bool:
        return self.chain.nullable

    def validate(self, raw: Any = MISSING) -> tuple[Any, list[Issue]]:
        """Validate one raw value, or :data:`MISSING` when the key is absent.

        Returns the normalized value (``MISSING`` when the field stays
        absent) and the issues found, with this field's name prepended.
        """
        if raw is MISSING:
            if self.required:
                issue = Issue(
                    path=(self.name,),
                    code=ErrorKind.MISSING_REQUIRED_FIELD,
                    message=f"{self.name} is required",
                )
                return MISSING, [issue]
            if self.default is MISSING:
                return MISSING, []
            return copy.deepcopy(self.default), []

        outcome = self.chain.check(raw)
        return outcome.value, [issue.prefixed(self.name) for issue in outcome.issues]

    def describe(self, prefix: tuple[str | int, ...] = ()) -> Iterator[dict[str, Any]]:
        """Yield one documentation row for this field and each nested field."""
        path = (*prefix, self.name)
        row: dict[str, Any] = {
            "path": ".".join(str(p) for p in path),
            "required": self.required,
            **self.chain.describe(),
        }
        if self.default is not MISSING:
            row["default"] = self.default
        if self.description:
            row["description"] = self.description
        if self.example is not None:
            row["example"] = self.example
        yield row
        yield from _describe_shape(self.chain, path)


def validate_fields(
    fields: tuple[FieldSpec, ...],
    mapping: Mapping[str, Any],
) -> tuple[dict[str, Any], list[Issue]]:
    """Validate declared *fields* against *mapping*.

    Unknown keys are dropped. Absent optional fields without a default
    stay absent in the returned dict.
    """
    normalized: dict[str, Any] = {}
    issues: list[Issue] = []
    for spec in fields:
        value, field_issues = spec.validate(mapping.get(spec.name, MISSING))
        if value is not MISSING:
            normalized[spec.name] = value
        issues.extend(field_issues)
    return normalized, issues


def check_unique_names(fields: tuple[FieldSpec, ...], where: str) -> None:
    seen: set[str] = set()
    for spec in fields:
        if spec.name in seen:
            msg = f"Duplicate field {spec.name!r} in {where}"
            raise SchemaConfigurationError(msg)
        seen.add(spec.name)


# ---------------------------------------------------------------------------
# Composite shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ObjectOf(Constraint):
    """Nested record validated field by field."""

    fields: tuple[FieldSpec, ...]

    def __post_init__(self) -> None:
        check_unique_names(self.fields, "object shape")

    def check(self, value: Any) -> Outcome:
        if not isinstance(value, Mapping):
            return Outcome.passed(value)
        normalized, issues = validate_fields(self.fields, value)
        return Outcome(value=normalized, issues=tuple(issues))

    def field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def describe(self) -> dict[str, Any]:
        return {"fields": [spec.name for spec in self.fields]}


@dataclass(frozen=True)
class ArrayOf(Constraint):
    """Homogeneous array; every item runs through *items*."""

    items: ConstraintChain

    def check(self, value: Any) -> Outcome:
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            return Outcome.passed(value)
        normalized: list[Any] = []
        issues: list[Issue] = []
        for index, item in enumerate(value):
            outcome = self.items.check(item)
            normalized.append(outcome.value)
            issues.extend(issue.prefixed(index) for issue in outcome.issues)
        return Outcome(value=normalized, issues=tuple(issues))

    def describe(self) -> dict[str, Any]:
        return {"items": self.items.describe()}


@dataclass(frozen=True)
class TupleOf(Constraint):
    """Fixed-arity array with per-position constraints."""

    positions: tuple[ConstraintChain, ...]

    def check(self, value: Any) -> Outcome:
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            return Outcome.passed(value)
        if len(value) != len(self.positions):
            return Outcome.failed(
                value,
                ErrorKind.LENGTH_VIOLATION,
                f"Expected tuple of {len(self.positions)} items, received {len(value)}",
            )
        normalized: list[Any] = []
        issues: list[Issue] = []
        for index, (chain, item) in enumerate(zip(self.positions, value, strict=True)):
            outcome = chain.check(item)
            normalized.append(outcome.value)
            issues.extend(issue.prefixed(index) for issue in outcome.issues)
        return Outcome(value=normalized, issues=tuple(issues))

    def describe(self) -> dict[str, Any]:
        return {"arity": len(self.positions)}


def _describe_shape(
    chain: ConstraintChain,
    path: tuple[str | int, ...],
) -> Iterator[dict[str, Any]]:
    shape = chain.shape
    if isinstance(shape, ObjectOf):
        for spec in shape.fields:
            yield from spec.describe(path)
    elif isinstance(shape, TupleOf):
        for index, position in enumerate(shape.positions):
            yield {"path": ".".join(str(p) for p in (*path, index)), **position.describe()}


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def field(
    name: str,
    chain: ConstraintChain,
    *,
    required: bool = True,
    default: Any = MISSING,
    description: str | None = None,
    example: Any = None,
) -> FieldSpec:
    """Declare a field. Passing a *default* makes the field optional."""
    if default is not MISSING:
        required = False
    return FieldSpec(
        name=name,
        chain=chain,
        required=required,
        default=default,
        description=description,
        example=example,
    )


def string(
    *,
    strip: bool = False,
    min_length: int | None = None,
    max_length: int | None = None,
    pattern: str | None = None,
    ignore_case: bool = False,
    pattern_message: str | None = None,
    forbid: str | None = None,
    forbid_message: str | None = None,
    nullable: bool = False,
) -> ConstraintChain:
    constraints: list[Constraint] = [IsType(ValueKind.STRING)]
    if strip:
        constraints.append(Strip())
    if min_length is not None:
        constraints.append(MinLength(min_length))
    if max_length is not None:
        constraints.append(MaxLength(max_length))
    if pattern is not None:
        flags = re.IGNORECASE if ignore_case else 0
        constraints.append(Pattern(re.compile(pattern, flags), pattern_message))
    if forbid is not None:
        constraints.append(Forbid(re.compile(forbid), forbid_message))
    return ConstraintChain(tuple(constraints), nullable=nullable)


def _numeric(
    *,
    whole: bool,
    ge: float | None,
    gt: float | None,
    le: float | None,
    multiple_of: float | None,
    nullable: bool,
) -> ConstraintChain:
    constraints: list[Constraint] = [IsType(ValueKind.NUMBER)]
    if whole:
        constraints.append(Integer())
    if gt is not None:
        constraints.append(Gt(gt))
    if ge is not None:
        constraints.append(Ge(ge))
    if le is not None:
        constraints.append(Le(le))
    if multiple_of is not None:
        constraints.append(MultipleOf(multiple_of))
    return ConstraintChain(tuple(constraints), nullable=nullable)


def number(
    *,
    ge: float | None = None,
    gt: float | None = None,
    le: float | None = None,
    multiple_of: float | None = None,
    nullable: bool = False,
) -> ConstraintChain:
    return _numeric(whole=False, ge=ge, gt=gt, le=le, multiple_of=multiple_of, nullable=nullable)


def integer(
    *,
    ge: float | None = None,
    gt: float | None = None,
    le: float | None = None,
    nullable: bool = False,
) -> ConstraintChain:
    return _numeric(whole=True, ge=ge, gt=gt, le=le, multiple_of=None, nullable=nullable)


def boolean(*, nullable: bool = False) -> ConstraintChain:
    return ConstraintChain((IsType(ValueKind.BOOLEAN),), nullable=nullable)


def enum(*choices: str, nullable: bool = False) -> ConstraintChain:
    return ConstraintChain((IsType(ValueKind.STRING), OneOf(tuple(choices))), nullable=nullable)


def literal(value: str) -> ConstraintChain:
    return ConstraintChain((IsType(ValueKind.STRING), OneOf((value,))))


def null() -> ConstraintChain:
    """A value that must be present and exactly ``null``."""
    return ConstraintChain((IsType(ValueKind.NULL),), nullable=True)


def array(
    items: ConstraintChain,
    *,
    min_items: int | None = None,
    max_items: int | None = None,
    nullable: bool = False,
) -> ConstraintChain:
    constraints: list[Constraint] = [IsType(ValueKind.ARRAY)]
    if min_items is not None:
        constraints.append(MinLength(min_items))
    if max_items is not None:
        constraints.append(MaxLength(max_items))
    constraints.append(ArrayOf(items))
    return ConstraintChain(tuple(constraints), nullable=nullable)


def tuple_of(*positions: ConstraintChain, nullable: bool = False) -> ConstraintChain:
    return ConstraintChain(
        (IsType(ValueKind.ARRAY), TupleOf(tuple(positions))),
        nullable=nullable,
    )


def obj(*fields: FieldSpec, nullable: bool = False) -> ConstraintChain:
    return ConstraintChain((IsType(ValueKind.OBJECT), ObjectOf(tuple(fields))), nullable=nullable)
