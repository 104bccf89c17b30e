"""Shared fixtures and Hypothesis strategies for tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest
from hypothesis import strategies as st

from field_rules import Validator
from field_rules.events import ValidationEvent, ValidationEventType
from field_rules.results import Result
from field_rules.rules import BaseRule, default_registry

# -----------------------------------------------------------------------------
# Hypothesis Strategies
# -----------------------------------------------------------------------------

# Strategy for valid field names (letters and numbers only)
field_names = st.text(
    min_size=1,
    max_size=30,
    alphabet=st.characters(whitelist_categories=("L", "N")),
)

# Strategy for messages
messages = st.text(min_size=1, max_size=100)

# Strategy for arbitrary field values
field_values = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False),
    st.text(max_size=30),
)


# -----------------------------------------------------------------------------
# Test Rule Classes
# -----------------------------------------------------------------------------


class PassingRule(BaseRule):
    """Rule that always passes."""

    name = "passing"
    default_message = "Never shown"

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        return True


class FailingRule(BaseRule):
    """Rule that always fails with a configurable message."""

    name = "failing"

    def __init__(self, message: str = "Failed") -> None:
        super().__init__(message=message)

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        return False


class RecordingRule:
    """Rule stub that records every invocation (does not subclass BaseRule)."""

    def __init__(self, outcome: bool = True, message: str = "Recorded failure") -> None:
        self.outcome = outcome
        self.message = message
        self.calls: list[tuple[Any, str]] = []

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        self.calls.append((value, field))
        return self.outcome

    def get_message(self) -> str:
        return self.message


class RecordingObserver:
    """Observer that records all events for testing."""

    def __init__(self) -> None:
        self.events: list[ValidationEvent] = []

    def on_event(self, event: ValidationEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> list[ValidationEventType]:
        return [e.event_type for e in self.events]


# -----------------------------------------------------------------------------
# Pytest Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def result() -> Result:
    """Create a fresh valid Result."""
    return Result()


@pytest.fixture
def validator() -> Validator:
    """Create an empty Validator with the built-in rules."""
    return Validator()


@pytest.fixture
def user_validator() -> Validator:
    """Validator for name/email/age records."""
    v = Validator(default_registry())
    v.add_field("name").rule("required")
    v.add_field("email").rule("required").rule("email")
    v.add_field("age").rule("number")
    return v


@pytest.fixture
def recording_observer() -> RecordingObserver:
    """Create a RecordingObserver instance."""
    return RecordingObserver()
