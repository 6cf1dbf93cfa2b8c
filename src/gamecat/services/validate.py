"""ValidateService: validate asset records against the registered games.

Single records, batches, and whole JSON/YAML documents. Each record is
validated independently; a batch fails when any of its records fails,
and the per-record outcomes are reported either way.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import structlog

from gamecat.config.logging import record_scope
from gamecat.domain.engine import GAME_FIELD
from gamecat.domain.issues import ValidationResult
from gamecat.domain.types import ErrorKind
from gamecat.domain.variants import DISCRIMINANT_FIELD
from gamecat.infrastructure.records import RecordLoadError, parse_records, read_records
from gamecat.services.base import BaseService
from gamecat.services.result import (
    FILE_NOT_FOUND,
    INVALID_INPUT,
    UNSUPPORTED_GAME,
    UNSUPPORTED_TYPE,
    VALIDATION_FAILED,
    ServiceError,
    ServiceResult,
)

log = structlog.get_logger(__name__)

_LOOKUP_CODES = {
    ErrorKind.UNSUPPORTED_GAME: UNSUPPORTED_GAME,
    ErrorKind.UNSUPPORTED_TYPE: UNSUPPORTED_TYPE,
}


def _error_code(result: ValidationResult) -> str:
    """Map a failed result to a service error code.

    Lookup failures always carry exactly one issue.
    """
    if len(result.issues) == 1:
        return _LOOKUP_CODES.get(result.issues[0].code, VALIDATION_FAILED)
    return VALIDATION_FAILED


def _identity(record: Any, game: str | None) -> dict[str, Any]:
    fields = record if isinstance(record, Mapping) else {}
    return {
        "game": game if game is not None else fields.get(GAME_FIELD),
        "type": fields.get(DISCRIMINANT_FIELD),
    }


class ValidateService(BaseService):
    """Validates raw asset records and reports every issue found."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate_record(self, record: Any, *, game: str | None = None) -> ServiceResult:
        """Validate one record.

        Without *game*, the record's ``gameSlug`` selects the game.
        """
        result = self._run(record, game)
        identity = _identity(record, game)
        if result.success:
            return ServiceResult(
                ok=True,
                op="validate",
                data={**identity, "record": result.data},
            )

        issues = [issue.to_wire() for issue in result.issues]
        return ServiceResult(
            ok=False,
            op="validate",
            error=ServiceError(
                code=_error_code(result),
                message=f"Record failed validation with {len(issues)} issue(s)",
                detail={**identity, "issues": issues},
            ),
        )

    def validate_batch(
        self,
        records: Sequence[Any],
        *,
        game: str | None = None,
    ) -> ServiceResult:
        """Validate every record in *records*, independently of each other."""
        results: list[dict[str, Any]] = []
        failed = 0
        for index, record in enumerate(records):
            with record_scope(index=index):
                result = self._run(record, game)
            entry: dict[str, Any] = {
                "index": index,
                **_identity(record, game),
                "success": result.success,
            }
            if result.success:
                entry["record"] = result.data
            else:
                failed += 1
                entry["issues"] = [issue.to_wire() for issue in result.issues]
            results.append(entry)

        summary = {
            "total": len(results),
            "passed": len(results) - failed,
            "failed": failed,
            "results": results,
        }
        log.debug("batch_validated", total=len(results), failed=failed)

        if failed:
            return ServiceResult(
                ok=False,
                op="validate_batch",
                error=ServiceError(
                    code=VALIDATION_FAILED,
                    message=f"{failed} of {len(results)} record(s) failed validation",
                    detail=summary,
                ),
            )
        return ServiceResult(ok=True, op="validate_batch", data=summary)

    def validate_document(
        self,
        document: Any,
        *,
        game: str | None = None,
        source: str | None = None,
    ) -> ServiceResult:
        """Validate a parsed document: one record (object) or a list of them."""
        if isinstance(document, list):
            with record_scope(source=source):
                result = self.validate_batch(document, game=game)
        elif isinstance(document, Mapping):
            with record_scope(source=source):
                result = self.validate_record(document, game=game)
        else:
            return ServiceResult(
                ok=False,
                op="validate",
                error=ServiceError(
                    code=INVALID_INPUT,
                    message="Expected an object or a list of objects",
                    detail={"source": source},
                ),
            )
        if source is None:
            return result
        return result.model_copy(update={"meta": {**(result.meta or {}), "source": source}})

    def validate_text(
        self,
        text: str,
        *,
        game: str | None = None,
        source: str = "<stdin>",
    ) -> ServiceResult:
        """Parse *text* as JSON or YAML and validate its records."""
        try:
            document = parse_records(text, source=source)
        except RecordLoadError as exc:
            return self._invalid_input(exc)
        return self.validate_document(document, game=game, source=source)

    def validate_file(self, path: Path, *, game: str | None = None) -> ServiceResult:
        """Read the JSON or YAML file at *path* and validate its records."""
        try:
            document = read_records(path)
        except FileNotFoundError:
            return ServiceResult(
                ok=False,
                op="validate",
                error=ServiceError(
                    code=FILE_NOT_FOUND,
                    message=f"File not found: {path}",
                    detail={"path": str(path)},
                ),
            )
        except RecordLoadError as exc:
            return self._invalid_input(exc)
        except OSError as exc:
            return ServiceResult(
                ok=False,
                op="validate",
                error=ServiceError(
                    code=INVALID_INPUT,
                    message=f"Cannot read {path}: {exc.strerror or exc}",
                    detail={"source": str(path)},
                ),
            )
        return self.validate_document(document, game=game, source=str(path))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _run(self, record: Any, game: str | None) -> ValidationResult:
        if game is None:
            result = self._engine.validate_asset(record)
        else:
            result = self._engine.validate(game, record)
        identity = _identity(record, game)
        log.debug(
            "record_validated",
            game=identity["game"],
            type=identity["type"],
            success=result.success,
            issues=len(result.issues),
        )
        return result

    @staticmethod
    def _invalid_input(exc: RecordLoadError) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op="validate",
            error=ServiceError(
                code=INVALID_INPUT,
                message=str(exc),
                detail={"source": exc.source},
            ),
        )
