"""Item configuration constants shared by rule providers and validators."""

from enum import IntEnum


class ItemType(IntEnum):
    """Item type discriminators (how a value is collected)."""

    ZABBIX = 0
    TRAPPER = 2
    SIMPLE = 3
    INTERNAL = 5
    ZABBIX_ACTIVE = 7
    EXTERNAL = 10
    DB_MONITOR = 11
    IPMI = 12
    SSH = 13
    TELNET = 14
    CALCULATED = 15
    JMX = 16
    SNMPTRAP = 17
    DEPENDENT = 18
    HTTPAGENT = 19
    SNMP = 20
    SCRIPT = 21


class HostStatus(IntEnum):
    MONITORED = 0
    NOT_MONITORED = 1
    TEMPLATE = 3


class ItemFlag(IntEnum):
    """Origin of an item record."""

    NORMAL = 0
    DISCOVERY_RULE = 1
    PROTOTYPE = 2
    DISCOVERY_CREATED = 4


# Item types that are polled through a host interface
INTERFACE_ITEM_TYPES = frozenset({
    ItemType.ZABBIX,
    ItemType.SIMPLE,
    ItemType.EXTERNAL,
    ItemType.IPMI,
    ItemType.SSH,
    ItemType.TELNET,
    ItemType.JMX,
    ItemType.SNMPTRAP,
    ItemType.HTTPAGENT,
    ItemType.SNMP,
})

# Key that collects every sensor of an IPMI interface at once
IPMI_GET_KEY = "ipmi.get"

ITEMS_TABLE = "items"

# Polling interval limits, in seconds
DELAY_MAX = 86400
ZBX_MAX_UINT64 = 2 ** 64 - 1
