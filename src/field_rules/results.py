"""Validation result containers.

A :class:`Result` accumulates the outcome of one or more validator runs:
overall validity, the first error per field and the fields that passed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from field_rules.audit import AuditEntry, rule_name
from field_rules.exceptions import ResultMergeConflict

if TYPE_CHECKING:
    from field_rules.protocols import Rule

__all__ = ["FieldError", "MergePolicy", "Result"]


class MergePolicy(Enum):
    """What :meth:`Result.merge` does when both sides have an error for a field."""

    KEEP_EXISTING = "keep_existing"
    """First write wins: the target's error is kept."""

    REPLACE = "replace"
    """Last write wins: the incoming error replaces the target's."""

    RAISE = "raise"
    """Raise :class:`~field_rules.exceptions.ResultMergeConflict`."""


@dataclass
class FieldError:
    """The first failure recorded for a field."""

    field: str
    message: str
    rule: Rule | None = None


@dataclass
class Result:
    """Outcome of validating a record.

    Example:
        result = validator.run({"name": "", "age": 32})
        if not result.is_valid:
            for field, message in result.get_errors().items():
                print(field, message)
    """

    valid: bool = True
    _errors: dict[str, FieldError] = field(default_factory=dict, repr=False)
    _validated: dict[str, None] = field(default_factory=dict, repr=False)

    @property
    def is_valid(self) -> bool:
        """True if no processed field failed."""
        return self.valid

    def set_result(self, is_valid: bool) -> Result:
        """Set the overall validity flag."""
        self.valid = bool(is_valid)
        return self

    def set_error(self, field: str, message: str, rule: Rule | None = None) -> Result:
        """Record the error for ``field``, replacing any previous one.

        A field that was previously marked validated loses that mark.
        """
        self._validated.pop(field, None)
        self._errors[field] = FieldError(field=field, message=message, rule=rule)
        return self

    def get_error(self, field: str) -> str | None:
        """Error message for ``field``, or None if it has no error."""
        error = self._errors.get(field)
        return error.message if error else None

    def get_errors(self) -> dict[str, str]:
        """Mapping of field name to error message."""
        return {name: error.message for name, error in self._errors.items()}

    @property
    def errors(self) -> list[FieldError]:
        return list(self._errors.values())

    @property
    def error_count(self) -> int:
        return len(self._errors)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def set_validated(self, field: str) -> Result:
        """Mark ``field`` as having passed all its rules.

        Clears any error previously recorded for ``field``.
        """
        self._errors.pop(field, None)
        self._validated[field] = None
        return self

    def get_validated(self) -> list[str]:
        """Fields that passed validation, in the order they were recorded."""
        return list(self._validated)

    def get_failed_rules(self) -> dict[str, Rule | None]:
        """Mapping of field name to the rule that caused it to fail."""
        return {name: error.rule for name, error in self._errors.items()}

    def merge(
        self,
        other: Result,
        field_prefix: str = "",
        *,
        on_conflict: MergePolicy = MergePolicy.KEEP_EXISTING,
    ) -> Result:
        """Merge another result into this one.

        This method mutates the current instance in-place. Field names from
        ``other`` are prefixed with ``field_prefix``, which lets results from
        sub-records be combined without clashing (e.g. "address.city").

        Args:
            other: Result to absorb.
            field_prefix: Prefix added to every field name coming from ``other``.
            on_conflict: Policy for a field that already has an error here.

        Returns:
            Self, for method chaining.

        Raises:
            ResultMergeConflict: If ``on_conflict`` is ``MergePolicy.RAISE``
                and a prefixed field already has an error. Nothing is merged
                in that case.

        Example:
            combined = Result()
            combined.merge(user_result)
            combined.merge(address_result, "address.")
        """
        incoming = {f"{field_prefix}{name}": error for name, error in other._errors.items()}

        if on_conflict is MergePolicy.RAISE:
            for name in incoming:
                if name in self._errors:
                    raise ResultMergeConflict(name)

        for name, error in incoming.items():
            if name in self._errors and on_conflict is MergePolicy.KEEP_EXISTING:
                continue
            self._errors[name] = FieldError(field=name, message=error.message, rule=error.rule)

        incoming_validated = [f"{field_prefix}{name}" for name in other._validated]
        for name in incoming_validated:
            self._validated[name] = None

        self.valid = self.valid and other.valid
        return self

    def audit_log(self, source: str | None = None) -> list[dict[str, Any]]:
        """Export validated fields and errors for DataFrame analysis.

        Args:
            source: Optional source identifier added to each entry.

        Returns:
            List of dicts suitable for pd.DataFrame(); validated fields
            first, then errors, each in recorded order.
        """
        entries = [
            AuditEntry(entry_type="validated", field=name, source=source)
            for name in self._validated
        ]
        entries.extend(
            AuditEntry(
                entry_type="error",
                field=error.field,
                message=error.message,
                rule=rule_name(error.rule),
                source=source,
            )
            for error in self._errors.values()
        )
        return [entry.model_dump() for entry in entries]
