"""Observer pattern implementation for validation events.

Provides event types, observer protocol, and mixin for adding observer
support to validators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "ValidationEventType",
    "ValidationEvent",
    "ValidationObserver",
    "ObservableMixin",
]


class ValidationEventType(Enum):
    """Types of validation events that can be observed."""

    RUN_STARTED = auto()
    """Emitted when a validator begins a run over a record."""

    FIELD_VALIDATED = auto()
    """Emitted when a field passes every rule in its chain."""

    FIELD_FAILED = auto()
    """Emitted when a rule in a field's chain fails."""

    RUN_COMPLETED = auto()
    """Emitted when a run over a record finishes."""


@dataclass
class ValidationEvent:
    """A validation event that can be observed.

    Attributes:
        event_type: The type of event that occurred.
        source: The validator that emitted the event.
        data: Event-specific data dictionary.

    Example:
        event = ValidationEvent(
            event_type=ValidationEventType.FIELD_FAILED,
            source=validator,
            data={"field": "email", "message": "Invalid email", "value": "bad"}
        )
    """

    event_type: ValidationEventType
    source: object
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class ValidationObserver(Protocol):
    """Protocol for validation event observers.

    Example:
        class FailureCounter:
            def __init__(self) -> None:
                self.failures = 0

            def on_event(self, event: ValidationEvent) -> None:
                if event.event_type == ValidationEventType.FIELD_FAILED:
                    self.failures += 1
    """

    def on_event(self, event: ValidationEvent) -> None:
        """Handle a validation event."""
        ...


class ObservableMixin:
    """Mixin class to add observer support to any class.

    Observers are stored lazily so subclasses do not need to call a
    mixin ``__init__``.

    Example:
        validator = Validator()
        validator.add_field("name").rule("required")
        validator.add_observer(LoggingObserver())
        validator.run({"name": "John"})  # logs run and field events
    """

    _observers: list[ValidationObserver]

    def _ensure_observers(self) -> None:
        if not hasattr(self, "_observers") or self._observers is None:
            self._observers = []

    def add_observer(self, observer: ValidationObserver) -> None:
        """Add an observer to receive validation events.

        Adding the same observer twice has no effect.
        """
        self._ensure_observers()
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: ValidationObserver) -> None:
        """Remove an observer. Unknown observers are ignored."""
        self._ensure_observers()
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self, event: ValidationEvent) -> None:
        """Send ``event`` to every registered observer, in registration order."""
        self._ensure_observers()
        for observer in self._observers:
            observer.on_event(event)

    @property
    def has_observers(self) -> bool:
        """True if at least one observer is registered."""
        self._ensure_observers()
        return bool(self._observers)

    @property
    def observers(self) -> list[ValidationObserver]:
        """Get a copy of the current observers list."""
        self._ensure_observers()
        return self._observers.copy()

    def clear_observers(self) -> None:
        """Remove all observers."""
        self._ensure_observers()
        self._observers.clear()
