"""Tests for ValidateService."""

from __future__ import annotations

from pathlib import Path

import pytest

from gamecat.domain.engine import ValidationEngine
from gamecat.services.validate import ValidateService
from tests.conftest import make_record, write_json


@pytest.fixture
def service(engine: ValidationEngine) -> ValidateService:
    return ValidateService(engine)


class TestValidateRecord:
    def test_valid_record(self, service: ValidateService) -> None:
        result = service.validate_record(make_record("elden-ring", "talismans"))
        assert result.ok
        assert result.op == "validate"
        assert result.data["game"] == "elden-ring"
        assert result.data["type"] == "talismans"
        assert result.data["record"]["isActive"] is True

    def test_explicit_game(self, service: ValidateService) -> None:
        record = make_record("tainted-grail", "relic")
        del record["gameSlug"]
        result = service.validate_record(record, game="tainted-grail")
        assert not result.ok
        assert result.error is not None
        assert result.error.detail["issues"] == [
            {"path": ["gameSlug"], "code": "MissingRequiredField", "message": "gameSlug is required"}
        ]

    def test_invalid_record(self, service: ValidateService) -> None:
        record = make_record("tainted-grail", "weapon", category="shields")
        result = service.validate_record(record)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.message == "Record failed validation with 1 issue(s)"
        assert result.error.detail["type"] == "weapon"
        (issue,) = result.error.detail["issues"]
        assert issue["path"] == ["data", "block"]
        assert issue["code"] == "CrossFieldInvariantViolation"

    def test_unsupported_game(self, service: ValidateService) -> None:
        result = service.validate_record({"gameSlug": "hollow-knight", "type": "charms"})
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_GAME"

    def test_unsupported_type(self, service: ValidateService) -> None:
        result = service.validate_record({"gameSlug": "elden-ring", "type": "charms"})
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_TYPE"
        assert result.error.detail["issues"][0]["path"] == ["type"]


class TestValidateBatch:
    def test_all_pass(self, service: ValidateService) -> None:
        records = [make_record("elden-ring", "spells"), make_record("tainted-grail", "jewelry")]
        result = service.validate_batch(records)
        assert result.ok
        assert result.op == "validate_batch"
        assert result.data["total"] == 2
        assert result.data["passed"] == 2
        assert [entry["index"] for entry in result.data["results"]] == [0, 1]

    def test_records_are_independent(self, service: ValidateService) -> None:
        records = [
            make_record("elden-ring", "spells"),
            make_record("elden-ring", "spirit-ashes", data={"cost": {"fp": None, "hp": None}}),
            make_record("tainted-grail", "relic"),
        ]
        result = service.validate_batch(records)
        assert not result.ok
        assert result.error is not None
        assert result.error.message == "1 of 3 record(s) failed validation"
        summary = result.error.detail
        assert (summary["passed"], summary["failed"]) == (2, 1)
        failed = summary["results"][1]
        assert failed["success"] is False
        assert failed["issues"][0]["path"] == ["data", "cost"]
        assert "record" in summary["results"][2]

    def test_empty_batch(self, service: ValidateService) -> None:
        result = service.validate_batch([])
        assert result.ok
        assert result.data["total"] == 0


class TestValidateDocument:
    def test_scalar_document_rejected(self, service: ValidateService) -> None:
        result = service.validate_document("weapons", source="x.json")
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"

    def test_source_recorded_in_meta(self, service: ValidateService) -> None:
        result = service.validate_document(make_record("elden-ring", "armors"), source="a.json")
        assert result.ok
        assert result.meta == {"source": "a.json"}


class TestValidateText:
    def test_json_text(self, service: ValidateService) -> None:
        text = '{"gameSlug": "elden-ring", "type": "shields"}'
        result = service.validate_text(text)
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_TYPE"
        assert result.meta == {"source": "<stdin>"}

    def test_yaml_text(self, service: ValidateService) -> None:
        text = (
            "name: Twinned Armor\n"
            "slug: twinned-armor\n"
            "gameSlug: elden-ring\n"
            "type: armors\n"
            "category: chest\n"
            "description: null\n"
            "shortDescription: null\n"
            "iconUrl: /media/games/elden-ring/assets/twinned-armor-armors-elden-ring.webp\n"
            "data:\n"
            "  negation: {physical: 10, strike: 9.5, slash: 10.2, pierce: 10,"
            " magical: 8, fire: 9, lightning: 7.5, holy: 8}\n"
            "  resistance: {immunity: 30, robustness: 40, focus: 20, vitality: 22, poise: 26}\n"
            "  weight: 9.6\n"
        )
        result = service.validate_text(text)
        assert result.ok, result.error

    def test_unparseable_text(self, service: ValidateService) -> None:
        result = service.validate_text("{not: [valid", source="paste")
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"
        assert result.error.detail == {"source": "paste"}


class TestValidateFile:
    def test_missing_file(self, service: ValidateService, tmp_path: Path) -> None:
        result = service.validate_file(tmp_path / "absent.json")
        assert result.error is not None
        assert result.error.code == "FILE_NOT_FOUND"

    def test_batch_file(self, service: ValidateService, tmp_path: Path) -> None:
        path = write_json(
            tmp_path / "assets.json",
            [make_record("tainted-grail", "armor"), make_record("tainted-grail", "magic")],
        )
        result = service.validate_file(path)
        assert result.ok
        assert result.op == "validate_batch"
        assert result.meta == {"source": str(path)}

    def test_game_override(self, service: ValidateService, tmp_path: Path) -> None:
        path = write_json(tmp_path / "one.json", make_record("tainted-grail", "armor"))
        result = service.validate_file(path, game="elden-ring")
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_TYPE"

    def test_malformed_json_file(self, service: ValidateService, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        result = service.validate_file(path)
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"
        assert str(path) in result.error.message

    def test_directory_is_invalid_input(self, service: ValidateService, tmp_path: Path) -> None:
        result = service.validate_file(tmp_path)
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"
