"""IPMI item type — sensor polling through a host IPMI interface."""

from itemconf.constants import IPMI_GET_KEY, ItemType
from itemconf.item_types.base import BaseItemType
from itemconf.rules import (
    RuleSet,
    UnexpectedReason,
    field_in,
    multiple,
    otherwise,
    string_rule,
    unexpected,
    when,
)


def is_switching_to_ipmi(data: dict, db_item: dict) -> bool:
    """Item becomes an IPMI sensor item: stored type differs and the key is not ipmi.get."""
    return str(db_item.get("type")) != str(ItemType.IPMI.value) and data.get("key_") != IPMI_GET_KEY


class IpmiItemType(BaseItemType):
    """Rule provider for IPMI items.

    `ipmi_sensor` names the sensor to poll. It may stay empty only when the
    key is ipmi.get, which collects all sensors at once.
    """

    type = ItemType.IPMI
    field_names = ("interfaceid", "ipmi_sensor", "delay")

    def get_create_rules(self, item: dict) -> RuleSet:
        sensor_length = self._field_length("ipmi_sensor")

        return {
            "interfaceid": self._create_field_rule("interfaceid"),
            "ipmi_sensor": multiple(
                when(field_in("key_", IPMI_GET_KEY), string_rule(sensor_length)),
                otherwise(string_rule(sensor_length, required=True, not_empty=True)),
            ),
            "delay": self._create_field_rule("delay"),
        }

    def get_update_rules(self, item: dict, db_item: dict) -> RuleSet:
        sensor_length = self._field_length("ipmi_sensor")

        return {
            "interfaceid": self._update_field_rule("interfaceid", db_item),
            "ipmi_sensor": multiple(
                when(is_switching_to_ipmi, string_rule(sensor_length, required=True, not_empty=True)),
                when(field_in("key_", IPMI_GET_KEY), string_rule(sensor_length)),
                otherwise(string_rule(sensor_length, not_empty=True)),
            ),
            "delay": self._update_field_rule("delay", db_item),
        }

    def get_inherited_update_rules(self, item: dict, db_item: dict) -> RuleSet:
        return {
            "interfaceid": self._inherited_field_rule("interfaceid", db_item),
            "ipmi_sensor": unexpected(UnexpectedReason.INHERITED),
            "delay": self._inherited_field_rule("delay", db_item),
        }

