"""Declarative field rules: models, predicates and builders."""

from itemconf.rules.models import (
    Branch,
    ConditionalRule,
    FieldRule,
    FieldType,
    Predicate,
    RuleConfigurationError,
    RuleContext,
    RuleSet,
    SimpleRule,
    UnexpectedReason,
    UnexpectedRule,
    describe_rule_set,
)
from itemconf.rules.predicates import field_in, stored_field_in
from itemconf.rules.builders import (
    delay_rule,
    id_rule,
    multiple,
    otherwise,
    string_rule,
    unexpected,
    when,
)

__all__ = [
    "Branch",
    "ConditionalRule",
    "FieldRule",
    "FieldType",
    "Predicate",
    "RuleConfigurationError",
    "RuleContext",
    "RuleSet",
    "SimpleRule",
    "UnexpectedReason",
    "UnexpectedRule",
    "describe_rule_set",
    "field_in",
    "stored_field_in",
    "delay_rule",
    "id_rule",
    "multiple",
    "otherwise",
    "string_rule",
    "unexpected",
    "when",
]
