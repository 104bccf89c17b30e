"""Field registry and validation runner.

The :class:`Validator` owns the mapping of field names to ordered rule
chains and runs a record through it, producing a
:class:`~field_rules.results.Result`.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, overload

from field_rules.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
)
from field_rules.exceptions import InvalidField, InvalidRule
from field_rules.protocols import Rule
from field_rules.results import Result
from field_rules.rules import default_registry

if TYPE_CHECKING:
    from field_rules.config import ValidatorConfig
    from field_rules.registry import RuleRegistry

__all__ = ["FieldBuilder", "Validator"]


class Validator(ObservableMixin):
    """Validates flat records against per-field rule chains.

    Rules in a chain run in the order they were added and stop at the first
    failure, so each field reports at most one error. Only fields present in
    the record are checked; a registered field missing from the record is
    neither validated nor failed.

    Supports the Observer pattern - add observers to receive RUN_STARTED,
    FIELD_VALIDATED, FIELD_FAILED and RUN_COMPLETED events.

    Example:
        from field_rules import Validator

        validator = Validator()
        validator.add_field("email").rule("required").rule("email")
        validator.add_field("age").rule("number_between", 18, 130)

        result = validator.run({"email": "john@doe.example", "age": 32})
        assert result.is_valid
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        """Initialize the validator.

        Args:
            registry: Rule registry used to resolve rule names. Defaults to
                a fresh registry holding the built-in rules.
        """
        self._registry = registry if registry is not None else default_registry()
        self._rules: dict[str, list[Rule]] = {}

    @classmethod
    def from_config(
        cls,
        config: ValidatorConfig | Mapping[str, Any],
        registry: RuleRegistry | None = None,
    ) -> Validator:
        """Build a validator from a declarative configuration.

        Args:
            config: A ValidatorConfig, or a mapping validated into one.
            registry: Rule registry used to resolve rule names.

        Raises:
            pydantic.ValidationError: If a mapping is not a valid configuration.
            InvalidRule: If the configuration names an unknown rule.
        """
        from field_rules.config import ValidatorConfig

        if not isinstance(config, ValidatorConfig):
            config = ValidatorConfig.model_validate(config)
        return config.build(registry)

    @property
    def registry(self) -> RuleRegistry:
        """Rule registry used for name resolution."""
        return self._registry

    def add_field(self, name: str) -> FieldBuilder:
        """Register ``name`` with an empty rule chain.

        Re-adding a known field resets its chain.

        Returns:
            A builder for attaching rules to this field.
        """
        self._rules[name] = []
        return FieldBuilder(self, name)

    def add_rule(self, field: str, rule: Rule) -> Validator:
        """Append ``rule`` to the chain of ``field``, registering the field if needed.

        Returns:
            Self for method chaining.

        Raises:
            InvalidRule: If ``rule`` does not implement the rule protocol.
        """
        if not isinstance(rule, Rule):
            raise InvalidRule(type(rule).__name__, "object does not implement validate/get_message")

        self._rules.setdefault(field, []).append(rule)
        return self

    @overload
    def get_rules(self, field: None = None) -> dict[str, list[Rule]]: ...

    @overload
    def get_rules(self, field: str) -> list[Rule]: ...

    def get_rules(self, field: str | None = None) -> list[Rule] | dict[str, list[Rule]]:
        """Rules for ``field``, or every field's rules if no field is given.

        Returned containers are copies.

        Raises:
            InvalidField: If ``field`` has not been registered.
        """
        if field is None:
            return {name: list(chain) for name, chain in self._rules.items()}

        try:
            return list(self._rules[field])
        except KeyError:
            raise InvalidField(field) from None

    def create_rule_instance(self, name: str, *params: Any, **options: Any) -> Rule:
        """Build a rule by name using the registry.

        Raises:
            InvalidRule: If the name cannot be resolved or constructed.
        """
        return self._registry.create(name, *params, **options)

    def run(self, data: Mapping[str, Any], result: Result | None = None) -> Result:
        """Validate ``data`` against the registered rule chains.

        Args:
            data: Flat mapping of field name to value. Every key must be a
                registered field.
            result: Result to write into. A fresh one is created if omitted;
                pass an existing one to accumulate across runs. A field
                keeps only its latest outcome: passing clears an earlier error
                for it and failing clears an earlier validated mark.

        Returns:
            The result, with its validity flag reset to True before the run
            and set to False if any field failed.

        Raises:
            InvalidField: If ``data`` contains a field that was never registered.

        Note:
            Emits RUN_STARTED before the first field, FIELD_VALIDATED or
            FIELD_FAILED for every field processed, and RUN_COMPLETED at the end.
        """
        if result is None:
            result = Result()

        start_time = time.perf_counter()
        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.RUN_STARTED,
                source=self,
                data={"field_count": len(data)},
            )
        )

        result.set_result(True)
        record = MappingProxyType(data) if isinstance(data, dict) else data
        errors = 0
        validated = 0

        for field, value in data.items():
            if self._validate_field(field, value, record, result):
                validated += 1
            else:
                errors += 1
                result.set_result(False)

        duration_ms = (time.perf_counter() - start_time) * 1000
        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.RUN_COMPLETED,
                source=self,
                data={
                    "is_valid": result.is_valid,
                    "error_count": errors,
                    "validated_count": validated,
                    "duration_ms": duration_ms,
                    "result": result,
                },
            )
        )
        return result

    def _validate_field(
        self,
        field: str,
        value: Any,
        record: Mapping[str, Any],
        result: Result,
    ) -> bool:
        """Run one field's chain, stopping at the first failing rule."""
        for rule in self.get_rules(field):
            if not rule.validate(value, field, record):
                message = rule.get_message()
                result.set_error(field, message, rule)
                self.notify(
                    ValidationEvent(
                        event_type=ValidationEventType.FIELD_FAILED,
                        source=self,
                        data={"field": field, "value": value, "rule": rule, "message": message},
                    )
                )
                return False

        result.set_validated(field)
        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.FIELD_VALIDATED,
                source=self,
                data={"field": field, "value": value},
            )
        )
        return True

    @property
    def fields(self) -> list[str]:
        """Registered field names in registration order."""
        return list(self._rules)

    def __contains__(self, field: object) -> bool:
        return field in self._rules

    def __len__(self) -> int:
        """Return number of registered fields."""
        return len(self._rules)

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}({len(chain)})" for name, chain in self._rules.items())
        return f"Validator(fields=[{fields}])"


class FieldBuilder:
    """Fluent rule attachment for one field.

    Returned by :meth:`Validator.add_field`; it carries the current field so
    rules can be chained without repeating the field name.

    Example:
        (
            validator.add_field("password")
            .rule("required")
            .rule("min_length", 8)
            .add_field("password_confirm")
            .rule("match_field", "password")
        )
    """

    __slots__ = ("_field", "_validator")

    def __init__(self, validator: Validator, field: str) -> None:
        self._validator = validator
        self._field = field

    @property
    def field(self) -> str:
        return self._field

    @property
    def validator(self) -> Validator:
        return self._validator

    def rule(self, name: str, *params: Any, **options: Any) -> FieldBuilder:
        """Create the rule registered as ``name`` and attach it to this field.

        Raises:
            InvalidRule: If ``name`` cannot be resolved or constructed.
        """
        rule = self._validator.create_rule_instance(name, *params, **options)
        self._validator.add_rule(self._field, rule)
        return self

    def add(self, rule: Rule) -> FieldBuilder:
        """Attach an existing rule instance to this field."""
        self._validator.add_rule(self._field, rule)
        return self

    def add_field(self, name: str) -> FieldBuilder:
        """Register another field and continue the chain on it."""
        return self._validator.add_field(name)

    def __repr__(self) -> str:
        return f"FieldBuilder(field={self._field!r})"
