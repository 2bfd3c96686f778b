"""Predicate builders for conditional rules.

Every predicate takes (data, db_item) explicitly: `data` is the submitted
record (overlaid on the stored one during updates), `db_item` the stored
record or {} on create.
"""

from itemconf.rules.models import Predicate


def field_in(field: str, *values) -> Predicate:
    """Build a predicate that holds when data[field] is one of `values`.

    Values compare as strings, so "0" matches both 0 and "0".
    """
    names = [str(v) for v in values]
    accepted = frozenset(names)

    def predicate(data: dict, db_item: dict) -> bool:
        return field in data and str(data[field]) in accepted

    predicate.label = f"{field} in ({','.join(names)})"
    return predicate


def stored_field_in(field: str, *values) -> Predicate:
    """Like field_in(), but reads the stored record."""
    names = [str(v) for v in values]
    accepted = frozenset(names)

    def predicate(data: dict, db_item: dict) -> bool:
        return field in db_item and str(db_item[field]) in accepted

    predicate.label = f"stored {field} in ({','.join(names)})"
    return predicate


def label_of(predicate: Predicate) -> str:
    return getattr(predicate, "label", getattr(predicate, "__name__", repr(predicate)))
