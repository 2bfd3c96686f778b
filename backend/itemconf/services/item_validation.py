"""Item validation service — validates a batch of items within one request unit.

Picks the lifecycle context of each record, builds its rule set through
the item type's rule provider, runs the validation engine and reports
every violation to the unit's message collector.
"""

from typing import Optional

import structlog

from itemconf.constants import ItemFlag
from itemconf.item_types import UnsupportedItemTypeError, get_item_type, supported_item_types
from itemconf.messages import MessageCollector
from itemconf.rules import RuleContext
from itemconf.schema import SchemaRegistry, get_schema_registry
from itemconf.validators import ErrorCode, ValidationEngine, ValidationError, ValidationReport

logger = structlog.get_logger()


def update_context(db_item: dict) -> RuleContext:
    """Lifecycle context of an update, from the stored record's origin."""
    if str(db_item.get("flags", ItemFlag.NORMAL.value)) == str(ItemFlag.DISCOVERY_CREATED.value):
        return RuleContext.UPDATE_DISCOVERED

    if str(db_item.get("templateid", "0")) not in ("", "0"):
        return RuleContext.UPDATE_INHERITED

    return RuleContext.UPDATE


class ItemValidationService:
    """Validates item create / update requests and reports to a MessageCollector."""

    def __init__(
        self,
        engine: Optional[ValidationEngine] = None,
        schema: Optional[SchemaRegistry] = None,
    ):
        self.engine = engine or ValidationEngine()
        self.schema = schema or get_schema_registry()

    def validate_create(self, items: list[dict], messages: MessageCollector) -> ValidationReport:
        """Validate items about to be created.

        Args:
            items: Submitted records, each with at least "type"
            messages: Collector of the current unit

        Returns:
            ValidationReport over all items
        """
        errors: list[ValidationError] = []

        for index, item in enumerate(items, start=1):
            errors.extend(self._validate_item(RuleContext.CREATE, item, None, f"/{index}"))

        return self._finish(errors, messages, "Cannot add item", "Item added", len(items))

    def validate_update(
        self,
        items: list[dict],
        db_items: dict[str, dict],
        messages: MessageCollector,
    ) -> ValidationReport:
        """Validate partial updates of stored items.

        Args:
            items: Submitted records, each with "itemid"
            db_items: Stored records by itemid
            messages: Collector of the current unit

        Returns:
            ValidationReport over all items
        """
        errors: list[ValidationError] = []

        for index, item in enumerate(items, start=1):
            path = f"/{index}"
            db_item = db_items.get(str(item.get("itemid")))

            if db_item is None:
                errors.append(ValidationError.create(
                    ErrorCode.ITEM_NOT_FOUND, path, "object does not exist or you have no permissions to it",
                    field="itemid",
                ))
                continue

            errors.extend(self._validate_item(update_context(db_item), item, db_item, path))

        return self._finish(errors, messages, "Cannot update item", "Item updated", len(items))

    def _validate_item(
        self,
        context: RuleContext,
        item: dict,
        db_item: Optional[dict],
        path: str,
    ) -> list[ValidationError]:
        type_value = item.get("type", (db_item or {}).get("type"))

        try:
            provider = get_item_type(type_value, self.schema)
        except UnsupportedItemTypeError:
            allowed = ", ".join(str(t.value) for t in supported_item_types())
            return [ValidationError.create(
                ErrorCode.ITEM_TYPE_UNSUPPORTED, f"{path}/type", f"value must be one of {allowed}", field="type",
            )]

        rules = provider.get_rules(context, item, db_item)
        return self.engine.validate(rules, item, db_item, path)

    def _finish(
        self,
        errors: list[ValidationError],
        messages: MessageCollector,
        error_title: str,
        success_title: str,
        total: int,
    ) -> ValidationReport:
        report = ValidationReport.build(errors)

        if report.passed:
            messages.add_success(f"{total} item(s) validated")
            messages.set_success_title(success_title)
        else:
            for error in report.errors:
                messages.add_error(error.message, source=error.path)
            messages.set_error_title(error_title)

        logger.info(
            "item_validation_complete",
            passed=report.passed,
            items=total,
            summary=report.summary,
            total_errors=len(errors),
        )

        return report
