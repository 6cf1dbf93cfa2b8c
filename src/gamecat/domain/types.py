"""Issue kinds and primitive value kinds.

``ErrorKind`` is the closed taxonomy every reported Issue carries.
``ValueKind`` names the primitive shapes a type check can assert.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Kinds of validation issues."""

    UNSUPPORTED_GAME = "UnsupportedGame"
    UNSUPPORTED_TYPE = "UnsupportedType"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    TYPE_MISMATCH = "TypeMismatch"
    RANGE_VIOLATION = "RangeViolation"
    LENGTH_VIOLATION = "LengthViolation"
    PATTERN_MISMATCH = "PatternMismatch"
    ENUM_VIOLATION = "EnumViolation"
    CROSS_FIELD_INVARIANT_VIOLATION = "CrossFieldInvariantViolation"


class ValueKind(StrEnum):
    """Primitive kinds recognised by the type check."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
