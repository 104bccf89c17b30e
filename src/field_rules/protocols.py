"""Rule protocol for type checking.

Any object with ``validate`` and ``get_message`` can be registered on a
validator; subclassing :class:`~field_rules.rules.BaseRule` is optional.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

__all__ = ["Rule"]


@runtime_checkable
class Rule(Protocol):
    """Protocol for a single field rule.

    Rules are predicates: they must not mutate ``record`` and must return
    the same answer for the same inputs, since one instance may be shared
    across fields and runs.
    """

    def validate(self, value: Any, field: str, record: Mapping[str, Any]) -> bool:
        """Return True if ``value`` passes this rule."""
        ...

    def get_message(self) -> str:
        """Message describing why the rule failed."""
        ...
