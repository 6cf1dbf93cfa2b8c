"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from gamecat.config.logging import configure_logging, log_level, record_scope
from gamecat.domain.engine import ValidationEngine
from gamecat.services.validate import ValidateService
from tests.conftest import make_record


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    gamecat = logging.getLogger("gamecat")
    gamecat_level = gamecat.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    gamecat.setLevel(gamecat_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("gamecat").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("gamecat").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("gamecat.test")
        log.debug("record_validated", game="elden-ring", issues=0)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "record_validated"
        assert parsed["game"] == "elden-ring"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "gamecat.test"
        assert "timestamp" in parsed

    def test_debug_dropped_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("gamecat.test").debug("record_validated")
        assert capfd.readouterr().err == ""

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=False, log_json=True)

        logging.getLogger("gamecat.plugins.manager").warning("Skipping game 'x'")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Skipping game 'x'"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "gamecat.plugins.manager"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pluggy").debug("hook noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_quiet_hides_warnings(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(quiet=True, log_json=True)
        logging.getLogger("gamecat.plugins.manager").warning("Skipping game 'x'")
        assert capfd.readouterr().err == ""

    def test_writes_to_given_stream(self) -> None:
        stream = io.StringIO()
        configure_logging(log_json=True, stream=stream)
        logging.getLogger("gamecat.test").error("broken")
        assert json.loads(stream.getvalue())["event"] == "broken"


class TestLogLevel:
    @pytest.mark.parametrize(
        ("verbose", "quiet", "expected"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.DEBUG),
        ],
    )
    def test_levels(self, verbose: bool, quiet: bool, expected: int) -> None:
        assert log_level(verbose=verbose, quiet=quiet) == expected


class TestRecordScope:
    def _events(self, stream: io.StringIO) -> list[dict[str, object]]:
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    def test_fields_bound_inside_scope_only(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        log = structlog.get_logger("gamecat.test")
        with record_scope(source="assets.json", index=2, game=None):
            log.debug("inside")
        log.debug("outside")
        inside, outside = self._events(stream)
        assert inside["source"] == "assets.json"
        assert inside["index"] == 2
        assert "game" not in inside
        assert "source" not in outside

    def test_batch_events_carry_record_position(self, engine: ValidationEngine) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        records = [make_record("elden-ring", "talismans"), {"type": "talismans"}]
        ValidateService(engine).validate_document(records, source="batch.json")
        validated = [e for e in self._events(stream) if e["event"] == "record_validated"]
        assert [(e["index"], e["success"]) for e in validated] == [(0, True), (1, False)]
        assert {e["source"] for e in validated} == {"batch.json"}
