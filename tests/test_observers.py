"""Tests for LoggingObserver."""

from __future__ import annotations

import logging

import pytest

from field_rules import LoggingObserver, Validator

from .conftest import FailingRule


@pytest.fixture
def logged_validator() -> Validator:
    validator = Validator()
    validator.add_field("name").rule("required")
    validator.add_field("email").rule("email")
    return validator


class TestLoggingObserver:
    def test_default_logger_name(self) -> None:
        assert LoggingObserver().logger.name == "field_rules"

    def test_failures_logged_at_info(
        self, logged_validator: Validator, caplog: pytest.LogCaptureFixture
    ) -> None:
        logged_validator.add_observer(LoggingObserver())

        with caplog.at_level(logging.INFO, logger="field_rules"):
            logged_validator.run({"name": "John", "email": "bad"})

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.INFO
        assert "'email'" in record.getMessage()
        assert "email" in record.getMessage()
        assert "valid email" in record.getMessage()

    def test_debug_shows_run_lifecycle(
        self, logged_validator: Validator, caplog: pytest.LogCaptureFixture
    ) -> None:
        logged_validator.add_observer(LoggingObserver())

        with caplog.at_level(logging.DEBUG, logger="field_rules"):
            logged_validator.run({"name": "John"})

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0] == "Validation started: 1 field(s)"
        assert messages[1] == "Field 'name' validated"
        assert messages[2].startswith("Validation completed: valid=True validated=1 errors=0")

    def test_custom_logger_and_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.validation")
        validator = Validator()
        validator.add_field("x").add(FailingRule("nope"))
        validator.add_observer(
            LoggingObserver(logger, level=logging.INFO, failure_level=logging.WARNING)
        )

        with caplog.at_level(logging.INFO, logger="tests.validation"):
            validator.run({"x": 1})

        levels = [r.levelno for r in caplog.records]
        assert levels == [logging.INFO, logging.WARNING, logging.INFO]
        assert "failing" in caplog.records[1].getMessage()
