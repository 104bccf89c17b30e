"""Field-rule validation for flat records."""

from field_rules.audit import AuditEntry
from field_rules.config import RuleConfig, ValidatorConfig
from field_rules.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from field_rules.exceptions import (
    FieldRulesError,
    InvalidField,
    InvalidRule,
    ResultMergeConflict,
)
from field_rules.observers import LoggingObserver
from field_rules.protocols import Rule
from field_rules.registry import RuleRegistry
from field_rules.results import FieldError, MergePolicy, Result
from field_rules.rich_observers import RichResultObserver, result_table
from field_rules.rules import (
    BaseRule,
    Email,
    MatchField,
    MaxLength,
    MinLength,
    Number,
    NumberBetween,
    Regex,
    Required,
    default_registry,
)
from field_rules.validator import FieldBuilder, Validator

__all__ = [
    # Core
    "Validator",
    "FieldBuilder",
    "Rule",
    "RuleRegistry",
    "default_registry",
    # Results
    "Result",
    "FieldError",
    "MergePolicy",
    "AuditEntry",
    # Errors
    "FieldRulesError",
    "InvalidField",
    "InvalidRule",
    "ResultMergeConflict",
    # Built-in rules
    "BaseRule",
    "Email",
    "MatchField",
    "MaxLength",
    "MinLength",
    "Number",
    "NumberBetween",
    "Regex",
    "Required",
    # Configuration
    "RuleConfig",
    "ValidatorConfig",
    # Observer pattern
    "ObservableMixin",
    "ValidationEvent",
    "ValidationEventType",
    "ValidationObserver",
    "LoggingObserver",
    "RichResultObserver",
    "result_table",
]

__version__ = "0.1.0"
