"""Issue and ValidationResult: the engine's output contract.

INVARIANT: ``ValidationResult.data`` is present iff ``success`` is True,
and ``issues`` is non-empty iff ``success`` is False.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Self

from pydantic import BaseModel, Field, model_validator

from gamecat.domain.types import ErrorKind

PathSegment = str | int
FieldPath = tuple[PathSegment, ...]


def parse_path(dotted: str) -> FieldPath:
    """Split ``"data.damage.0"`` into ``("data", "damage", 0)``."""
    if not dotted:
        return ()
    return tuple(int(part) if part.isdigit() else part for part in dotted.split("."))


def format_path(path: Sequence[PathSegment]) -> str:
    """Join path segments with dots (the inverse of :func:`parse_path`)."""
    return ".".join(str(segment) for segment in path)


class Issue(BaseModel):
    """One reported violation, addressed by field path."""

    model_config = {"frozen": True}

    path: FieldPath = ()
    code: ErrorKind
    message: str

    @property
    def dotted(self) -> str:
        """Dotted rendering of :attr:`path` (``""`` for the record root)."""
        return format_path(self.path)

    def prefixed(self, *segments: PathSegment) -> Issue:
        """Return a copy with *segments* prepended to the path."""
        if not segments:
            return self
        return self.model_copy(update={"path": (*segments, *self.path)})

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the ``{path, code, message}`` response shape."""
        return {"path": list(self.path), "code": str(self.code), "message": self.message}


class ValidationResult(BaseModel):
    """Outcome of one ``validate`` call.

    Attributes:
        success: Whether the record satisfied every constraint and rule.
        data: The normalized record (only on success).
        issues: Every violation found, in discovery order (only on failure).
    """

    model_config = {"frozen": True}

    success: bool
    data: dict[str, Any] | None = None
    issues: list[Issue] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_shape(self) -> Self:
        if self.success and (self.data is None or self.issues):
            msg = "successful result must carry data and no issues"
            raise ValueError(msg)
        if not self.success and (self.data is not None or not self.issues):
            msg = "failed result must carry issues and no data"
            raise ValueError(msg)
        return self

    @classmethod
    def passed(cls, data: dict[str, Any]) -> ValidationResult:
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, issues: Iterable[Issue]) -> ValidationResult:
        return cls(success=False, issues=list(issues))

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the response shape used by the HTTP layer."""
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "issues": [issue.to_wire() for issue in self.issues]}
