"""Tests for Issue, ValidationResult, and path helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gamecat.domain.issues import Issue, ValidationResult, format_path, parse_path
from gamecat.domain.types import ErrorKind


class TestPaths:
    def test_parse_converts_indices(self) -> None:
        assert parse_path("data.damage.0") == ("data", "damage", 0)

    def test_parse_empty(self) -> None:
        assert parse_path("") == ()

    def test_format_inverse(self) -> None:
        assert format_path(("data", "damage", 0)) == "data.damage.0"


class TestIssue:
    def test_prefixed(self) -> None:
        issue = Issue(path=("fp",), code=ErrorKind.RANGE_VIOLATION, message="x")
        assert issue.prefixed("data", "cost").path == ("data", "cost", "fp")
        assert issue.path == ("fp",)

    def test_root_path_dotted(self) -> None:
        assert Issue(code=ErrorKind.TYPE_MISMATCH, message="x").dotted == ""

    def test_to_wire(self) -> None:
        issue = Issue(path=("data", "damage", 0), code=ErrorKind.CROSS_FIELD_INVARIANT_VIOLATION, message="m")
        assert issue.to_wire() == {
            "path": ["data", "damage", 0],
            "code": "CrossFieldInvariantViolation",
            "message": "m",
        }

    def test_frozen(self) -> None:
        issue = Issue(code=ErrorKind.TYPE_MISMATCH, message="x")
        with pytest.raises(ValidationError):
            issue.message = "y"  # type: ignore[misc]


class TestValidationResult:
    def test_passed(self) -> None:
        result = ValidationResult.passed({"slug": "x"})
        assert result.success
        assert result.issues == []
        assert result.to_wire() == {"success": True, "data": {"slug": "x"}}

    def test_failed(self) -> None:
        issue = Issue(path=("slug",), code=ErrorKind.MISSING_REQUIRED_FIELD, message="slug is required")
        result = ValidationResult.failed([issue])
        assert not result.success
        assert result.data is None
        assert result.to_wire()["issues"][0]["code"] == "MissingRequiredField"

    def test_success_without_data_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ValidationResult(success=True)

    def test_failure_without_issues_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ValidationResult.failed([])

    def test_error_kind_values(self) -> None:
        assert {k.value for k in ErrorKind} == {
            "UnsupportedGame",
            "UnsupportedType",
            "MissingRequiredField",
            "TypeMismatch",
            "RangeViolation",
            "LengthViolation",
            "PatternMismatch",
            "EnumViolation",
            "CrossFieldInvariantViolation",
        }
