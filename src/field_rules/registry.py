"""Rule name resolution.

A :class:`RuleRegistry` maps short rule names ("required", "email") to the
factories that build them. Validators resolve names through it when rules
are attached by name.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, overload

from field_rules.exceptions import InvalidRule
from field_rules.protocols import Rule

__all__ = ["RuleFactory", "RuleRegistry"]

RuleFactory = Callable[..., Rule]


class RuleRegistry:
    """Explicit lookup table from rule name to rule factory.

    Example:
        registry = RuleRegistry()

        @registry.register("even")
        class Even(BaseRule):
            default_message = "The field must be even."

            def validate(self, value, field, record):
                return value % 2 == 0

        rule = registry.create("even")
    """

    def __init__(self, factories: dict[str, RuleFactory] | None = None) -> None:
        self._factories: dict[str, RuleFactory] = dict(factories or {})

    @overload
    def register(self, name: str) -> Callable[[RuleFactory], RuleFactory]: ...

    @overload
    def register(self, name: str, factory: RuleFactory) -> RuleFactory: ...

    def register(
        self, name: str, factory: RuleFactory | None = None
    ) -> RuleFactory | Callable[[RuleFactory], RuleFactory]:
        """Register ``factory`` under ``name``, replacing any existing entry.

        Called without a factory, returns a decorator.
        """
        if not name:
            raise ValueError("Rule name must be a non-empty string")

        if factory is None:

            def decorator(func: RuleFactory) -> RuleFactory:
                self._factories[name] = func
                return func

            return decorator

        self._factories[name] = factory
        return factory

    def unregister(self, name: str) -> bool:
        """Remove ``name``. Returns False if it was not registered."""
        return self._factories.pop(name, None) is not None

    def resolve(self, name: str) -> RuleFactory:
        """Return the factory registered under ``name``.

        Raises:
            InvalidRule: If no factory is registered under ``name``.
        """
        try:
            return self._factories[name]
        except KeyError:
            raise InvalidRule(name) from None

    def create(self, name: str, *params: Any, **options: Any) -> Rule:
        """Build a rule instance by name.

        Raises:
            InvalidRule: If the name is unknown, the factory rejects the
                parameters, or the product is not a rule.
        """
        factory = self.resolve(name)
        try:
            rule = factory(*params, **options)
        except (TypeError, ValueError) as e:
            raise InvalidRule(name, str(e)) from e

        if not isinstance(rule, Rule):
            raise InvalidRule(name, f"factory returned {type(rule).__name__}, not a rule")
        return rule

    def copy(self) -> RuleRegistry:
        """Independent copy; changes to it do not affect this registry."""
        return RuleRegistry(self._factories)

    @property
    def names(self) -> list[str]:
        """Registered rule names in registration order."""
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"RuleRegistry(rules=[{', '.join(self._factories)}])"
