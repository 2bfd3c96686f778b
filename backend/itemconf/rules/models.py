"""Field rule models — declarative per-field validation rules.

A rule set maps a field name to one of three rule kinds:

    SimpleRule       type, required / not-empty flags, length bound, allowed values
    ConditionalRule  ordered branches, first matching predicate wins, last branch is "else"
    UnexpectedRule   the field must not be submitted in this context

Rules are plain data. Nothing here touches submitted values except
ConditionalRule.resolve(), which only picks a branch.
"""

from enum import Enum
from typing import Callable, Literal, Optional, Union

from pydantic import BaseModel, model_validator

# (submitted record, stored record) -> bool
Predicate = Callable[[dict, dict], bool]


class RuleConfigurationError(Exception):
    """A rule set is malformed. Never a user error."""


class FieldType(str, Enum):
    """Value types understood by the validation engine."""

    ID = "id"
    STRING_UTF8 = "string_utf8"
    ITEM_DELAY = "item_delay"


class UnexpectedReason(str, Enum):
    """Why a field is forbidden in a context."""

    UNEXPECTED = "unexpected"
    INHERITED = "inherited"    # record comes from a template
    DISCOVERED = "discovered"  # record was created by discovery


class RuleContext(str, Enum):
    """Lifecycle context a rule set is built for."""

    CREATE = "create"
    UPDATE = "update"
    UPDATE_INHERITED = "update_inherited"
    UPDATE_DISCOVERED = "update_discovered"


class SimpleRule(BaseModel):
    """Constraints applied directly to a submitted value."""

    kind: Literal["simple"] = "simple"
    type: FieldType
    required: bool = False
    not_empty: bool = False
    length: Optional[int] = None
    allowed: Optional[tuple[str, ...]] = None

    model_config = {"frozen": True}

    def describe(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class Branch(BaseModel):
    """One branch of a conditional rule. No predicate means "else"."""

    rule: SimpleRule
    predicate: Optional[Predicate] = None
    label: str = "else"

    model_config = {"frozen": True}

    @property
    def is_else(self) -> bool:
        return self.predicate is None

    def matches(self, data: dict, db_item: dict) -> bool:
        return self.is_else or bool(self.predicate(data, db_item))


class ConditionalRule(BaseModel):
    """Ordered branch list, first match wins.

    Construction fails unless exactly the last branch is an "else" branch,
    so resolve() always finds a rule.
    """

    kind: Literal["multiple"] = "multiple"
    branches: tuple[Branch, ...]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_terminal_else(self) -> "ConditionalRule":
        if not self.branches:
            raise RuleConfigurationError("Conditional rule has no branches")

        if not self.branches[-1].is_else:
            raise RuleConfigurationError(
                f"Conditional rule must end with an else branch, last branch is '{self.branches[-1].label}'"
            )

        for branch in self.branches[:-1]:
            if branch.is_else:
                raise RuleConfigurationError("Else branch is only allowed as the last branch")

        return self

    def select(self, data: dict, db_item: dict) -> Branch:
        """Return the first branch whose predicate holds."""
        for branch in self.branches:
            if branch.matches(data, db_item):
                return branch

        # Unreachable: construction guarantees a terminal else
        raise RuleConfigurationError("Conditional rule has no matching branch")

    def resolve(self, data: dict, db_item: dict) -> SimpleRule:
        return self.select(data, db_item).rule

    def describe(self) -> dict:
        return {
            "kind": self.kind,
            "rules": [{"if": b.label, **b.rule.describe()} for b in self.branches],
        }


class UnexpectedRule(BaseModel):
    """The field is forbidden; submitting it is a violation of `reason`."""

    kind: Literal["unexpected"] = "unexpected"
    reason: UnexpectedReason = UnexpectedReason.UNEXPECTED

    model_config = {"frozen": True}

    def describe(self) -> dict:
        return {"kind": self.kind, "reason": self.reason.value}


FieldRule = Union[SimpleRule, ConditionalRule, UnexpectedRule]

# Field name -> rule, one per lifecycle context
RuleSet = dict[str, FieldRule]


def describe_rule_set(rules: RuleSet) -> dict[str, dict]:
    """Render a rule set as plain data, predicates replaced by their labels."""
    return {field: rule.describe() for field, rule in rules.items()}
