"""Logging observer for validation events."""

from __future__ import annotations

import logging

from field_rules.audit import rule_name
from field_rules.events import ValidationEvent, ValidationEventType

__all__ = ["LoggingObserver"]


class LoggingObserver:
    """Write validation events to a standard library logger.

    Failed fields are logged at ``failure_level`` (INFO by default), all
    other events at ``level`` (DEBUG by default). Handlers are left to the
    application.

    Example:
        logging.basicConfig(level=logging.DEBUG)
        validator.add_observer(LoggingObserver())
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        level: int = logging.DEBUG,
        failure_level: int = logging.INFO,
    ) -> None:
        self._logger = logger or logging.getLogger("field_rules")
        self._level = level
        self._failure_level = failure_level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def on_event(self, event: ValidationEvent) -> None:
        data = event.data
        if event.event_type == ValidationEventType.RUN_STARTED:
            self._logger.log(
                self._level, "Validation started: %d field(s)", data.get("field_count", 0)
            )

        elif event.event_type == ValidationEventType.FIELD_VALIDATED:
            self._logger.log(self._level, "Field %r validated", data.get("field"))

        elif event.event_type == ValidationEventType.FIELD_FAILED:
            self._logger.log(
                self._failure_level,
                "Field %r failed rule %s: %s",
                data.get("field"),
                rule_name(data.get("rule")),
                data.get("message"),
            )

        elif event.event_type == ValidationEventType.RUN_COMPLETED:
            self._logger.log(
                self._level,
                "Validation completed: valid=%s validated=%d errors=%d (%.2f ms)",
                data.get("is_valid"),
                data.get("validated_count", 0),
                data.get("error_count", 0),
                data.get("duration_ms", 0.0),
            )
