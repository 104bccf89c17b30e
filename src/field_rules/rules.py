"""Abstract base rule and the built-in rule set.

Concrete rules are plain predicates over a single value (and optionally the
whole record). :func:`default_registry` wires the built-ins to their short
names so they can be attached with ``builder.rule("email")``.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sized
from decimal import Decimal, InvalidOperation
from numbers import Real
from typing import Any, ClassVar

from field_rules.registry import RuleRegistry

__all__ = [
    "BaseRule",
    "Email",
    "MatchField",
    "MaxLength",
    "MinLength",
    "Number",
    "NumberBetween",
    "Regex",
    "Required",
    "default_registry",
]


class BaseRule(ABC):
    """Abstract base class for rules.

    Subclasses implement :meth:`validate` and set ``default_message``; the
    message is formatted with :meth:`message_params`, so parameterised rules
    can mention their bounds.

    Example:
        class Positive(BaseRule):
            name = "positive"
            default_message = "The field must be positive."

            def validate(self, value, field, record):
                return value > 0
    """

    name: ClassVar[str] = ""
    default_message: ClassVar[str] = "The field is not valid."

    def __init__(self, *, message: str | None = None) -> None:
        self._message = message

    @abstractmethod
    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        """Return True if ``value`` passes this rule."""
        ...

    def message_params(self) -> dict[str, Any]:
        """Values substituted into ``default_message``."""
        return {}

    def get_message(self) -> str:
        if self._message is not None:
            return self._message
        return self.default_message.format(**self.message_params())

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.message_params().items())
        return f"{self.__class__.__name__}({params})"


def _to_number(value: Any) -> Real | Decimal | None:
    """``value`` as a finite number, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, Real):
        return value if math.isfinite(value) else None
    return None


class Required(BaseRule):
    name = "required"
    default_message = "The field is required and has not been specified."

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip() != ""
        if isinstance(value, Sized):
            return len(value) > 0
        return True


class Email(BaseRule):
    name = "email"
    default_message = "The field does not contain a valid email address."

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$"
    )

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        return isinstance(value, str) and self.PATTERN.match(value) is not None


class Number(BaseRule):
    """Real numbers and numeric strings. Booleans are rejected."""

    name = "number"
    default_message = "The field is not a valid number."

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        return _to_number(value) is not None


class NumberBetween(BaseRule):
    name = "number_between"
    default_message = "The field is not between {minimum} and {maximum}."

    def __init__(self, minimum: Any, maximum: Any, *, message: str | None = None) -> None:
        super().__init__(message=message)
        low = _to_number(minimum)
        high = _to_number(maximum)
        if low is None or high is None:
            raise ValueError(f"bounds must be finite numbers, got {minimum!r} and {maximum!r}")
        if low > high:
            raise ValueError(f"minimum {low} is greater than maximum {high}")
        self.minimum = low
        self.maximum = high

    def message_params(self) -> dict[str, Any]:
        return {"minimum": self.minimum, "maximum": self.maximum}

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        number = _to_number(value)
        return number is not None and self.minimum <= number <= self.maximum


class MinLength(BaseRule):
    name = "min_length"
    default_message = "The field must be at least {length} characters long."

    def __init__(self, length: int, *, message: str | None = None) -> None:
        super().__init__(message=message)
        if length < 0:
            raise ValueError("length must not be negative")
        self.length = length

    def message_params(self) -> dict[str, Any]:
        return {"length": self.length}

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        return isinstance(value, Sized) and len(value) >= self.length


class MaxLength(BaseRule):
    name = "max_length"
    default_message = "The field must not be longer than {length} characters."

    def __init__(self, length: int, *, message: str | None = None) -> None:
        super().__init__(message=message)
        if length < 0:
            raise ValueError("length must not be negative")
        self.length = length

    def message_params(self) -> dict[str, Any]:
        return {"length": self.length}

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        return isinstance(value, Sized) and len(value) <= self.length


class MatchField(BaseRule):
    """Passes when the value equals another field of the same record."""

    name = "match_field"
    default_message = "The field does not match {other}."

    def __init__(self, other: str, *, message: str | None = None) -> None:
        super().__init__(message=message)
        self.other = other

    def message_params(self) -> dict[str, Any]:
        return {"other": self.other}

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        return self.other in record and record[self.other] == value


class Regex(BaseRule):
    name = "regex"
    default_message = "The field does not match the pattern {pattern}."

    def __init__(self, pattern: str, *, message: str | None = None) -> None:
        super().__init__(message=message)
        try:
            self._compiled = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"invalid pattern {pattern!r}: {e}") from e
        self.pattern = pattern

    def message_params(self) -> dict[str, Any]:
        return {"pattern": self.pattern}

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        return isinstance(value, str) and self._compiled.search(value) is not None


BUILTIN_RULES: tuple[type[BaseRule], ...] = (
    Required,
    Email,
    Number,
    NumberBetween,
    MinLength,
    MaxLength,
    MatchField,
    Regex,
)


def default_registry() -> RuleRegistry:
    """Fresh registry containing every built-in rule under its short name."""
    registry = RuleRegistry()
    for rule_class in BUILTIN_RULES:
        registry.register(rule_class.name, rule_class)
    return registry
