"""Pytest configuration and shared fixtures for itemconf tests."""

import pytest

from itemconf.constants import HostStatus, ItemFlag, ItemType
from itemconf.item_types import IpmiItemType
from itemconf.messages import MessageCollector
from itemconf.schema import SchemaRegistry, get_schema_registry
from itemconf.services import ItemValidationService
from itemconf.validators import ValidationEngine


@pytest.fixture
def schema() -> SchemaRegistry:
    """Registry over the bundled column table."""
    return get_schema_registry()


@pytest.fixture
def ipmi(schema) -> IpmiItemType:
    return IpmiItemType(schema)


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine()


@pytest.fixture
def messages() -> MessageCollector:
    return MessageCollector()


@pytest.fixture
def service(engine, schema) -> ItemValidationService:
    return ItemValidationService(engine=engine, schema=schema)


@pytest.fixture
def ipmi_item() -> dict:
    """A valid IPMI item as submitted on create, on a monitored host."""
    return {
        "type": ItemType.IPMI.value,
        "key_": "ipmi.sensor.cpu_temp",
        "host_status": HostStatus.MONITORED.value,
        "interfaceid": "15",
        "ipmi_sensor": "CPU Temp",
        "delay": "1m",
    }


@pytest.fixture
def db_ipmi_item() -> dict:
    """A stored IPMI item as read back from the database (string values)."""
    return {
        "itemid": "42",
        "type": str(ItemType.IPMI.value),
        "key_": "ipmi.sensor.cpu_temp",
        "host_status": str(HostStatus.MONITORED.value),
        "interfaceid": "15",
        "ipmi_sensor": "CPU Temp",
        "delay": "1m",
        "templateid": "0",
        "flags": str(ItemFlag.NORMAL.value),
    }


@pytest.fixture
def db_agent_item(db_ipmi_item) -> dict:
    """A stored trapper item, about to be switched to IPMI."""
    return {
        **db_ipmi_item,
        "type": str(ItemType.TRAPPER.value),
        "key_": "trap.value",
        "ipmi_sensor": "",
        "interfaceid": "0",
    }
