"""Scalar constraints: single composable checks on one value.

Each constraint is a pure, stateless ``check(value) -> Outcome``. An
Outcome always carries the (possibly coerced) value so a failing field
still contributes its best-effort value to the normalized record.

INVARIANT: Only the type check short-circuits a chain. Every other
constraint assumes the type has already been confirmed and passes values
of any other type through untouched.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from gamecat.domain.issues import Issue
from gamecat.domain.types import ErrorKind, ValueKind

# Relative tolerance for multiple_of checks on binary floats (12.3 / 0.1).
_MULTIPLE_TOLERANCE = 1e-9


class _Missing:
    """Sentinel for an absent field (distinct from an explicit ``null``)."""

    _instance: ClassVar[_Missing | None] = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class Outcome:
    """Result of applying one constraint (or a whole chain) to a value."""

    value: Any
    issues: tuple[Issue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.issues

    @classmethod
    def passed(cls, value: Any) -> Outcome:
        return cls(value=value)

    @classmethod
    def failed(cls, value: Any, code: ErrorKind, message: str) -> Outcome:
        return cls(value=value, issues=(Issue(code=code, message=message),))


class Constraint(ABC):
    """A single check on one value."""

    short_circuits: ClassVar[bool] = False

    @abstractmethod
    def check(self, value: Any) -> Outcome:
        """Apply the constraint to *value*."""
        ...

    @abstractmethod
    def describe(self) -> dict[str, Any]:
        """Documentation metadata for schema export."""
        ...


# ---------------------------------------------------------------------------
# Kind helpers
# ---------------------------------------------------------------------------


def is_number(value: Any) -> bool:
    """True for finite ints and floats (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # Python ints are unbounded; only floats can be inf or nan.
    return isinstance(value, int) or math.isfinite(value)


def kind_of(value: Any) -> str:
    """Name the primitive kind of *value* for error messages."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER if is_number(value) else "non-finite number"
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return type(value).__name__


def _quotient(value: float, step: float) -> float:
    """``value / step``, saturating to infinity past the float range."""
    try:
        return value / step
    except OverflowError:
        return math.inf


def _matches(value: Any, kind: ValueKind) -> bool:
    if kind is ValueKind.NUMBER:
        return is_number(value)
    if kind is ValueKind.STRING:
        return isinstance(value, str)
    if kind is ValueKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is ValueKind.OBJECT:
        return isinstance(value, Mapping)
    if kind is ValueKind.ARRAY:
        return isinstance(value, Sequence) and not isinstance(value, (str, bytes))
    return value is None


# ---------------------------------------------------------------------------
# Type check
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IsType(Constraint):
    """Value must be of the declared primitive kind."""

    kind: ValueKind

    short_circuits: ClassVar[bool] = True

    def check(self, value: Any) -> Outcome:
        if _matches(value, self.kind):
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.TYPE_MISMATCH,
            f"Expected {self.kind}, received {kind_of(value)}",
        )

    def describe(self) -> dict[str, Any]:
        return {"type": str(self.kind)}


# ---------------------------------------------------------------------------
# Numeric bounds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Ge(Constraint):
    """Inclusive lower bound."""

    bound: float

    def check(self, value: Any) -> Outcome:
        if not is_number(value) or value >= self.bound:
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.RANGE_VIOLATION,
            f"Number must be greater than or equal to {self.bound}",
        )

    def describe(self) -> dict[str, Any]:
        return {"min": self.bound}


@dataclass(frozen=True)
class Gt(Constraint):
    """Exclusive lower bound."""

    bound: float

    def check(self, value: Any) -> Outcome:
        if not is_number(value) or value > self.bound:
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.RANGE_VIOLATION,
            f"Number must be greater than {self.bound}",
        )

    def describe(self) -> dict[str, Any]:
        return {"exclusive_min": self.bound}


@dataclass(frozen=True)
class Le(Constraint):
    """Inclusive upper bound."""

    bound: float

    def check(self, value: Any) -> Outcome:
        if not is_number(value) or value <= self.bound:
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.RANGE_VIOLATION,
            f"Number must be less than or equal to {self.bound}",
        )

    def describe(self) -> dict[str, Any]:
        return {"max": self.bound}


@dataclass(frozen=True)
class Integer(Constraint):
    """Value must have a zero fractional part (``5.0`` is accepted)."""

    def check(self, value: Any) -> Outcome:
        if not is_number(value) or isinstance(value, int) or value.is_integer():
            return Outcome.passed(value)
        return Outcome.failed(value, ErrorKind.RANGE_VIOLATION, "Expected integer, received float")

    def describe(self) -> dict[str, Any]:
        return {"integer": True}


@dataclass(frozen=True)
class MultipleOf(Constraint):
    """Value divided by *step* must be integral within float tolerance."""

    step: float

    def __post_init__(self) -> None:
        if self.step <= 0:
            msg = f"multiple_of step must be positive, got {self.step}"
            raise ValueError(msg)

    def check(self, value: Any) -> Outcome:
        if not is_number(value):
            return Outcome.passed(value)
        if isinstance(value, int) and float(self.step).is_integer():
            if value % int(self.step) == 0:
                return Outcome.passed(value)
            return Outcome.failed(
                value,
                ErrorKind.RANGE_VIOLATION,
                f"Number must be a multiple of {self.step}",
            )
        quotient = _quotient(value, self.step)
        if not math.isfinite(quotient):
            return Outcome.failed(
                value,
                ErrorKind.RANGE_VIOLATION,
                f"Number is too large to check as a multiple of {self.step}",
            )
        if abs(quotient - round(quotient)) <= _MULTIPLE_TOLERANCE * max(1.0, abs(quotient)):
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.RANGE_VIOLATION,
            f"Number must be a multiple of {self.step}",
        )

    def describe(self) -> dict[str, Any]:
        return {"multiple_of": self.step}


# ---------------------------------------------------------------------------
# String constraints
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Strip(Constraint):
    """Coerce strings by trimming leading and trailing whitespace."""

    def check(self, value: Any) -> Outcome:
        if isinstance(value, str):
            return Outcome.passed(value.strip())
        return Outcome.passed(value)

    def describe(self) -> dict[str, Any]:
        return {"trim": True}


@dataclass(frozen=True)
class MinLength(Constraint):
    """Minimum string length (or minimum item count for arrays)."""

    length: int

    def check(self, value: Any) -> Outcome:
        if isinstance(value, str):
            unit = "character(s)"
        elif isinstance(value, (list, tuple)):
            unit = "item(s)"
        else:
            return Outcome.passed(value)
        if len(value) >= self.length:
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.LENGTH_VIOLATION,
            f"Must contain at least {self.length} {unit}",
        )

    def describe(self) -> dict[str, Any]:
        return {"min_length": self.length}


@dataclass(frozen=True)
class MaxLength(Constraint):
    """Maximum string length (or maximum item count for arrays)."""

    length: int

    def check(self, value: Any) -> Outcome:
        if isinstance(value, str):
            unit = "character(s)"
        elif isinstance(value, (list, tuple)):
            unit = "item(s)"
        else:
            return Outcome.passed(value)
        if len(value) <= self.length:
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.LENGTH_VIOLATION,
            f"Must contain at most {self.length} {unit}",
        )

    def describe(self) -> dict[str, Any]:
        return {"max_length": self.length}


@dataclass(frozen=True)
class Pattern(Constraint):
    """The whole string must match *regex*."""

    regex: re.Pattern[str]
    message: str | None = None

    def check(self, value: Any) -> Outcome:
        if not isinstance(value, str) or self.regex.fullmatch(value):
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.PATTERN_MISMATCH,
            self.message or f"Invalid format: must match {self.regex.pattern}",
        )

    def describe(self) -> dict[str, Any]:
        return {"pattern": self.regex.pattern}


@dataclass(frozen=True)
class Forbid(Constraint):
    """No part of the string may match *regex*."""

    regex: re.Pattern[str]
    message: str | None = None

    def check(self, value: Any) -> Outcome:
        if not isinstance(value, str) or not self.regex.search(value):
            return Outcome.passed(value)
        return Outcome.failed(
            value,
            ErrorKind.PATTERN_MISMATCH,
            self.message or f"Invalid format: must not contain {self.regex.pattern}",
        )

    def describe(self) -> dict[str, Any]:
        return {"forbid": self.regex.pattern}


# ---------------------------------------------------------------------------
# Enum membership
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OneOf(Constraint):
    """Value must equal one of a fixed, ordered set of literals.

    Comparison is type-strict so ``True`` never matches ``1``.
    """

    choices: tuple[Any, ...]

    def check(self, value: Any) -> Outcome:
        for choice in self.choices:
            if type(value) is type(choice) and value == choice:
                return Outcome.passed(value)
        if len(self.choices) == 1:
            message = f"Invalid value: expected {self.choices[0]!r}"
        else:
            options = "|".join(repr(c) for c in self.choices)
            message = f"Invalid option: expected one of {options}"
        return Outcome.failed(value, ErrorKind.ENUM_VIOLATION, message)

    def describe(self) -> dict[str, Any]:
        return {"enum": list(self.choices)}
