"""Declarative validator configuration.

Pydantic models describing fields and their rule chains, so validators can
be defined in JSON/YAML/TOML-style data instead of code.

Example:
    config = ValidatorConfig.model_validate({
        "fields": {
            "name": ["required"],
            "email": ["required", "email"],
            "age": [{"name": "number_between", "params": [18, 130]}],
        }
    })
    validator = config.build()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from field_rules.registry import RuleRegistry
    from field_rules.validator import Validator

__all__ = ["RuleConfig", "ValidatorConfig"]


class RuleConfig(BaseModel):
    """One rule in a field's chain.

    Attributes:
        name: Registered rule name.
        params: Positional constructor arguments.
        options: Keyword constructor arguments (e.g. a custom ``message``).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    params: list[Any] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)


class ValidatorConfig(BaseModel):
    """Fields and their ordered rule chains.

    A bare string in a chain is shorthand for a rule without parameters.
    """

    model_config = ConfigDict(extra="forbid")

    fields: dict[str, list[RuleConfig]] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            field: (
                [{"name": rule} if isinstance(rule, str) else rule for rule in chain]
                if isinstance(chain, list)
                else chain
            )
            for field, chain in value.items()
        }

    def build(self, registry: RuleRegistry | None = None) -> Validator:
        """Create a validator with every configured field and rule.

        Raises:
            InvalidRule: If a rule name is unknown or its parameters are rejected.
        """
        from field_rules.validator import Validator

        validator = Validator(registry)
        for field, chain in self.fields.items():
            builder = validator.add_field(field)
            for rule in chain:
                builder.rule(rule.name, *rule.params, **rule.options)
        return validator
