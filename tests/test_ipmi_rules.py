"""Tests for the IPMI rule provider."""

import pytest

from itemconf.constants import IPMI_GET_KEY, HostStatus, ItemType
from itemconf.item_types import (
    IpmiItemType,
    UnsupportedItemTypeError,
    get_item_type,
    supported_item_types,
)
from itemconf.item_types.ipmi import is_switching_to_ipmi
from itemconf.rules import (
    ConditionalRule,
    FieldType,
    RuleConfigurationError,
    RuleContext,
    SimpleRule,
    UnexpectedReason,
    UnexpectedRule,
    string_rule,
)

SENSOR_LENGTH = 128
DELAY_LENGTH = 1024


class TestRegistry:
    """Test provider lookup by item type."""

    @pytest.mark.parametrize("type_value", [ItemType.IPMI, 12, "12"])
    def test_ipmi_provider(self, type_value, schema):
        assert isinstance(get_item_type(type_value, schema), IpmiItemType)

    @pytest.mark.parametrize("type_value", [ItemType.TRAPPER, "2", "abc", None, 999])
    def test_unsupported_type(self, type_value, schema):
        with pytest.raises(UnsupportedItemTypeError):
            get_item_type(type_value, schema)

    def test_supported_types(self):
        assert supported_item_types() == [ItemType.IPMI]


class TestCoverage:
    """Every context covers exactly the declared fields."""

    @pytest.mark.parametrize("context", list(RuleContext))
    def test_every_context_covers_field_names(self, ipmi, ipmi_item, db_ipmi_item, context):
        rules = ipmi.get_rules(context, ipmi_item, db_ipmi_item)

        assert set(rules) == {"interfaceid", "ipmi_sensor", "delay"}

    def test_incomplete_rule_set_is_configuration_error(self, schema, ipmi_item):
        class BrokenIpmi(IpmiItemType):
            def get_create_rules(self, item):
                rules = super().get_create_rules(item)
                del rules["delay"]
                return rules

        with pytest.raises(RuleConfigurationError):
            BrokenIpmi(schema).get_rules(RuleContext.CREATE, ipmi_item)


class TestCreateRules:
    """Sensor is optional only for the ipmi.get key."""

    @pytest.mark.parametrize("host_status", list(HostStatus))
    def test_create_rules_build_for_every_host_status(self, ipmi, ipmi_item, host_status):
        item = {**ipmi_item, "host_status": host_status.value}

        rules = ipmi.get_rules(RuleContext.CREATE, item)

        assert set(rules) == set(ipmi.field_names)
        expected = "else" if host_status is HostStatus.TEMPLATE else "host item"
        assert rules["interfaceid"].select(item, {}).label == expected

    def test_create_interface_branch_labels(self, ipmi, ipmi_item):
        rule = ipmi.get_create_rules(ipmi_item)["interfaceid"]

        assert [b.label for b in rule.branches] == ["host item", "else"]

    def test_sensor_optional_for_ipmi_get(self, ipmi):
        item = {"key_": IPMI_GET_KEY}
        rule = ipmi.get_create_rules(item)["ipmi_sensor"]

        assert isinstance(rule, ConditionalRule)
        assert rule.select(item, {}) is rule.branches[0]
        assert rule.resolve(item, {}) == string_rule(SENSOR_LENGTH)

    @pytest.mark.parametrize("key", ["other.key", "ipmi.get[x]", ""])
    def test_sensor_required_for_other_keys(self, ipmi, key):
        item = {"key_": key}
        rule = ipmi.get_create_rules(item)["ipmi_sensor"]

        assert rule.select(item, {}).is_else
        assert rule.resolve(item, {}) == string_rule(SENSOR_LENGTH, required=True, not_empty=True)

    def test_delay_required(self, ipmi, ipmi_item):
        rule = ipmi.get_create_rules(ipmi_item)["delay"]

        assert rule == SimpleRule(type=FieldType.ITEM_DELAY, required=True, length=DELAY_LENGTH)

    def test_interface_required_on_host(self, ipmi, ipmi_item):
        rule = ipmi.get_create_rules(ipmi_item)["interfaceid"].resolve(ipmi_item, {})

        assert rule.type == FieldType.ID
        assert rule.required is True

    def test_interface_zero_on_template(self, ipmi, ipmi_item):
        item = {**ipmi_item, "host_status": HostStatus.TEMPLATE.value}
        rule = ipmi.get_create_rules(item)["interfaceid"].resolve(item, {})

        assert rule.required is False
        assert rule.allowed == ("0",)


class TestUpdateRules:
    """Type transition guard and fallthrough on update."""

    def test_switching_to_ipmi_requires_sensor(self, ipmi, db_agent_item):
        item = {"type": ItemType.IPMI.value, "key_": "ipmi.sensor.fan"}
        data = {**db_agent_item, **item}
        rule = ipmi.get_update_rules(item, db_agent_item)["ipmi_sensor"]

        assert rule.resolve(data, db_agent_item) == string_rule(SENSOR_LENGTH, required=True, not_empty=True)

    def test_switching_to_ipmi_get_keeps_sensor_optional(self, ipmi, db_agent_item):
        item = {"type": ItemType.IPMI.value, "key_": IPMI_GET_KEY}
        data = {**db_agent_item, **item}
        rule = ipmi.get_update_rules(item, db_agent_item)["ipmi_sensor"]

        assert rule.resolve(data, db_agent_item) == string_rule(SENSOR_LENGTH)

    def test_existing_ipmi_item_sensor_not_required(self, ipmi, db_ipmi_item):
        item = {"delay": "5m"}
        data = {**db_ipmi_item, **item}
        rule = ipmi.get_update_rules(item, db_ipmi_item)["ipmi_sensor"]

        assert rule.resolve(data, db_ipmi_item) == string_rule(SENSOR_LENGTH, not_empty=True)

    def test_existing_ipmi_item_with_ipmi_get(self, ipmi, db_ipmi_item):
        item = {"key_": IPMI_GET_KEY}
        data = {**db_ipmi_item, **item}
        rule = ipmi.get_update_rules(item, db_ipmi_item)["ipmi_sensor"]

        assert rule.resolve(data, db_ipmi_item) == string_rule(SENSOR_LENGTH)

    def test_delay_optional(self, ipmi, db_ipmi_item):
        rule = ipmi.get_update_rules({}, db_ipmi_item)["delay"]

        assert rule == SimpleRule(type=FieldType.ITEM_DELAY, length=DELAY_LENGTH)

    @pytest.mark.parametrize(
        "stored_type, key, expected",
        [
            ("2", "trap.value", True),
            ("0", "agent.ping", True),
            ("2", IPMI_GET_KEY, False),
            ("12", "ipmi.sensor", False),
            ("12", IPMI_GET_KEY, False),
        ],
    )
    def test_type_transition_guard(self, stored_type, key, expected):
        assert is_switching_to_ipmi({"key_": key}, {"type": stored_type}) is expected

    def test_interface_required_when_switching_from_trapper(self, ipmi, db_agent_item):
        rule = ipmi.get_update_rules({}, db_agent_item)["interfaceid"].resolve(db_agent_item, db_agent_item)

        assert rule.required is True

    def test_interface_optional_for_existing_ipmi_item(self, ipmi, db_ipmi_item):
        rule = ipmi.get_update_rules({}, db_ipmi_item)["interfaceid"].resolve(db_ipmi_item, db_ipmi_item)

        assert rule.required is False
        assert rule.allowed is None


class TestInheritedRules:
    """Only the interface and the polling interval may diverge from the template."""

    def test_sensor_is_unexpected_inherited(self, ipmi, db_ipmi_item):
        rules = ipmi.get_inherited_update_rules({}, db_ipmi_item)

        assert rules["ipmi_sensor"] == UnexpectedRule(reason=UnexpectedReason.INHERITED)

    def test_delay_is_relaxed(self, ipmi, db_ipmi_item):
        rules = ipmi.get_inherited_update_rules({}, db_ipmi_item)

        assert rules["delay"] == SimpleRule(type=FieldType.ITEM_DELAY, length=DELAY_LENGTH)

    def test_only_editable_fields_escape_inheritance(self, ipmi, db_ipmi_item):
        rules = ipmi.get_inherited_update_rules({}, db_ipmi_item)

        inherited = {
            field for field, rule in rules.items()
            if isinstance(rule, UnexpectedRule) and rule.reason is UnexpectedReason.INHERITED
        }
        assert inherited == set(ipmi.field_names) - {"interfaceid", "delay"}


class TestDiscoveredRules:
    """Nothing is editable on discovered items."""

    def test_all_fields_unexpected_discovered(self, ipmi, db_ipmi_item):
        rules = ipmi.get_discovered_update_rules({}, db_ipmi_item)

        assert set(rules) == set(ipmi.field_names)
        assert all(rule == UnexpectedRule(reason=UnexpectedReason.DISCOVERED) for rule in rules.values())


class TestPurity:
    """Building rules never touches the submitted record."""

    def test_rules_do_not_mutate_item(self, ipmi, ipmi_item, db_ipmi_item):
        before = dict(ipmi_item)

        for context in RuleContext:
            ipmi.get_rules(context, ipmi_item, db_ipmi_item)

        assert ipmi_item == before
