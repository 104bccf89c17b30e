"""Audit entries for exporting validation outcomes.

Provides a Pydantic model describing one field outcome, used by
:meth:`Result.audit_log <field_rules.results.Result.audit_log>`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

__all__ = ["AuditEntry", "rule_name"]


def rule_name(rule: Any) -> str | None:
    """Name used to identify a rule in audit output."""
    if rule is None:
        return None
    name = getattr(rule, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(rule).__name__


class AuditEntry(BaseModel):
    """One field outcome in a validation result.

    Attributes:
        entry_type: "validated" for a field that passed, "error" for a failure.
        field: Name of the field (including any merge prefix).
        message: Failure message, None for validated fields.
        rule: Name of the failing rule, None for validated fields.
        source: Optional caller-supplied identifier (batch, file, ...).
        timestamp: ISO format timestamp of when the entry was exported.
    """

    entry_type: Literal["validated", "error"]
    field: str
    message: str | None = None
    rule: str | None = None
    source: str | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
