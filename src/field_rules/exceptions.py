"""Configuration and usage errors.

These are raised for caller mistakes (unknown fields, unknown rules).
Validation failures are never raised; they are reported through
:class:`~field_rules.results.Result`.
"""

from __future__ import annotations

__all__ = [
    "FieldRulesError",
    "InvalidField",
    "InvalidRule",
    "ResultMergeConflict",
]


class FieldRulesError(Exception):
    """Base class for all field_rules configuration errors."""


class InvalidField(FieldRulesError, KeyError):
    """Raised when rules are requested for a field that was never registered."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Field '{field}' has not been registered")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidRule(FieldRulesError):
    """Raised when a rule name cannot be resolved or constructed."""

    def __init__(self, rule_name: str, reason: str = "") -> None:
        self.rule_name = rule_name
        self.reason = reason
        message = f"Unknown or invalid rule '{rule_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ResultMergeConflict(FieldRulesError):
    """Raised when a merge hits a field that already has an error."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Field '{field}' already has an error in the target result")
