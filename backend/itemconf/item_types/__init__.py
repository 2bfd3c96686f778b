"""Rule providers per item type.

Usage:
    from itemconf.item_types import get_item_type

    provider = get_item_type(item["type"])
    rules = provider.get_rules(RuleContext.CREATE, item)
"""

from typing import Optional, Union

from itemconf.constants import ItemType
from itemconf.item_types.base import BaseItemType
from itemconf.item_types.ipmi import IpmiItemType
from itemconf.schema import SchemaRegistry

ITEM_TYPE_PROVIDERS: dict[ItemType, type[BaseItemType]] = {
    ItemType.IPMI: IpmiItemType,
}


class UnsupportedItemTypeError(LookupError):
    """No rule provider is registered for an item type."""

    def __init__(self, type_value):
        self.type_value = type_value
        super().__init__(f"Unsupported item type: {type_value!r}")


def get_item_type(type_value: Union[int, str], schema: Optional[SchemaRegistry] = None) -> BaseItemType:
    """Return the rule provider for an item type discriminator.

    Args:
        type_value: ItemType member, int or numeric string
        schema: Registry for length bounds. Defaults to the cached one

    Raises:
        UnsupportedItemTypeError: value is not a registered item type
    """
    try:
        item_type = ItemType(int(type_value))
    except (TypeError, ValueError):
        raise UnsupportedItemTypeError(type_value) from None

    provider = ITEM_TYPE_PROVIDERS.get(item_type)
    if provider is None:
        raise UnsupportedItemTypeError(type_value)

    return provider(schema)


def supported_item_types() -> list[ItemType]:
    return list(ITEM_TYPE_PROVIDERS.keys())


__all__ = [
    "BaseItemType",
    "IpmiItemType",
    "ITEM_TYPE_PROVIDERS",
    "UnsupportedItemTypeError",
    "get_item_type",
    "supported_item_types",
]
