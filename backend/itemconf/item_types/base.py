"""Base item type — abstract rule provider, one subclass per item type.

Each provider returns a rule set for one of four lifecycle contexts:

    create             every field is being set for the first time
    update             partial submission, conditionals see stored values too
    update_inherited   record comes from a template, most fields are read-only
    update_discovered  record was created by discovery, every field is read-only

Providers are pure: building a rule set never fails on user data. Length
bounds come from the schema registry, so a bad (table, column) pair fails
as soon as the rule set is built.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from itemconf.constants import INTERFACE_ITEM_TYPES, ITEMS_TABLE, HostStatus, ItemType
from itemconf.rules import (
    FieldRule,
    RuleConfigurationError,
    RuleContext,
    RuleSet,
    UnexpectedReason,
    delay_rule,
    field_in,
    id_rule,
    multiple,
    otherwise,
    unexpected,
    when,
)
from itemconf.schema import SchemaRegistry, get_schema_registry


def is_template_item(data: dict, db_item: dict) -> bool:
    """Stored item belongs to a template."""
    return str(db_item.get("host_status")) == str(HostStatus.TEMPLATE.value)


def is_switching_to_interface_type(data: dict, db_item: dict) -> bool:
    """Stored item type was polled without a host interface."""
    try:
        return ItemType(int(db_item.get("type"))) not in INTERFACE_ITEM_TYPES
    except (TypeError, ValueError):
        return True


class BaseItemType(ABC):
    """Abstract rule provider for one item type.

    Contract:
        - every rule set has exactly one entry per name in field_names
        - building rules has no side effects and no I/O besides the
          (cached) schema registry
    """

    type: ClassVar[ItemType]
    field_names: ClassVar[tuple[str, ...]] = ()

    def __init__(self, schema: Optional[SchemaRegistry] = None):
        self.schema = schema or get_schema_registry()

    @property
    def name(self) -> str:
        return self.type.name.lower()

    # ── Rule sets ──

    @abstractmethod
    def get_create_rules(self, item: dict) -> RuleSet:
        """Rules for a record whose fields are all being set."""
        ...

    @abstractmethod
    def get_update_rules(self, item: dict, db_item: dict) -> RuleSet:
        """Rules for a partial update of a stored record."""
        ...

    @abstractmethod
    def get_inherited_update_rules(self, item: dict, db_item: dict) -> RuleSet:
        """Rules for a record inherited from a template."""
        ...

    def get_discovered_update_rules(self, item: dict, db_item: dict) -> RuleSet:
        """Rules for a record created by discovery: nothing is editable."""
        return {field: unexpected(UnexpectedReason.DISCOVERED) for field in self.field_names}

    def get_rules(self, context: RuleContext, item: dict, db_item: Optional[dict] = None) -> RuleSet:
        """Build the rule set for a context and check it covers field_names.

        Raises:
            RuleConfigurationError: rule set is missing a field or declares an extra one
        """
        context = RuleContext(context)
        db_item = db_item or {}

        if context is RuleContext.CREATE:
            rules = self.get_create_rules(item)
        elif context is RuleContext.UPDATE:
            rules = self.get_update_rules(item, db_item)
        elif context is RuleContext.UPDATE_INHERITED:
            rules = self.get_inherited_update_rules(item, db_item)
        else:
            rules = self.get_discovered_update_rules(item, db_item)

        missing = set(self.field_names) - set(rules)
        extra = set(rules) - set(self.field_names)
        if missing or extra:
            raise RuleConfigurationError(
                f"Rule set '{context.value}' of item type '{self.name}' does not match its fields"
                f" (missing: {sorted(missing)}, extra: {sorted(extra)})"
            )

        return rules

    # ── Shared field rules ──

    def _field_length(self, column: str) -> int:
        return self.schema.get_field_length(ITEMS_TABLE, column)

    def _create_field_rule(self, field_name: str) -> FieldRule:
        if field_name == "interfaceid":
            return multiple(
                when(
                    field_in("host_status", HostStatus.MONITORED.value, HostStatus.NOT_MONITORED.value),
                    id_rule(required=True),
                    label="host item",
                ),
                otherwise(id_rule(allowed=["0"])),
            )

        if field_name == "delay":
            return delay_rule(self._field_length("delay"), required=True)

        raise RuleConfigurationError(f"No shared create rule for field '{field_name}'")

    def _update_field_rule(self, field_name: str, db_item: dict) -> FieldRule:
        if field_name == "interfaceid":
            return multiple(
                when(is_template_item, id_rule(allowed=["0"])),
                when(is_switching_to_interface_type, id_rule(required=True)),
                otherwise(id_rule()),
            )

        if field_name == "delay":
            return delay_rule(self._field_length("delay"))

        raise RuleConfigurationError(f"No shared update rule for field '{field_name}'")

    def _inherited_field_rule(self, field_name: str, db_item: dict) -> FieldRule:
        if field_name == "interfaceid":
            return multiple(
                when(is_template_item, id_rule(allowed=["0"])),
                otherwise(id_rule()),
            )

        if field_name == "delay":
            return delay_rule(self._field_length("delay"))

        return unexpected(UnexpectedReason.INHERITED)
