"""Shorthand constructors so rule tables read as declarations."""

from typing import Iterable, Optional

from itemconf.rules.models import (
    Branch,
    ConditionalRule,
    FieldType,
    Predicate,
    SimpleRule,
    UnexpectedReason,
    UnexpectedRule,
)
from itemconf.rules.predicates import label_of


def _allowed(values: Optional[Iterable]) -> Optional[tuple[str, ...]]:
    return None if values is None else tuple(str(v) for v in values)


def id_rule(*, required: bool = False, allowed: Optional[Iterable] = None) -> SimpleRule:
    return SimpleRule(type=FieldType.ID, required=required, allowed=_allowed(allowed))


def string_rule(
    length: int,
    *,
    required: bool = False,
    not_empty: bool = False,
    allowed: Optional[Iterable] = None,
) -> SimpleRule:
    return SimpleRule(
        type=FieldType.STRING_UTF8,
        required=required,
        not_empty=not_empty,
        length=length,
        allowed=_allowed(allowed),
    )


def delay_rule(length: int, *, required: bool = False) -> SimpleRule:
    return SimpleRule(type=FieldType.ITEM_DELAY, required=required, length=length)


def when(predicate: Predicate, rule: SimpleRule, label: Optional[str] = None) -> Branch:
    return Branch(rule=rule, predicate=predicate, label=label or label_of(predicate))


def otherwise(rule: SimpleRule) -> Branch:
    return Branch(rule=rule)


def multiple(*branches: Branch) -> ConditionalRule:
    return ConditionalRule(branches=branches)


def unexpected(reason: UnexpectedReason = UnexpectedReason.UNEXPECTED) -> UnexpectedRule:
    return UnexpectedRule(reason=reason)
