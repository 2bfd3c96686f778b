"""Validation Engine — applies a rule set to a submitted record.

This is the consumer of rule providers. It resolves conditional rules,
checks presence, dispatches values to the field validator registered for
their type and returns every violation found.

Usage:
    engine = ValidationEngine()
    errors = engine.validate(rules, item, db_item, path="/1")
"""

import time
from typing import Optional

import structlog

from itemconf.rules import (
    ConditionalRule,
    FieldRule,
    FieldType,
    RuleConfigurationError,
    RuleSet,
    SimpleRule,
    UnexpectedReason,
    UnexpectedRule,
)
from itemconf.validators.base import BaseFieldValidator
from itemconf.validators.delay_validator import DelayValidator
from itemconf.validators.id_validator import IdValidator
from itemconf.validators.models import ErrorCode, ValidationError
from itemconf.validators.string_validator import StringValidator

logger = structlog.get_logger()

UNEXPECTED_CODES = {
    UnexpectedReason.UNEXPECTED: ErrorCode.UNEXPECTED_FIELD,
    UnexpectedReason.INHERITED: ErrorCode.UNEXPECTED_INHERITED,
    UnexpectedReason.DISCOVERED: ErrorCode.UNEXPECTED_DISCOVERED,
}


class ValidationEngine:
    """Evaluates field rules against submitted records.

    Design principles:
        - Deterministic: same input → same output
        - Conditionals see the stored record overlaid by the draft
        - Value checks only apply to what the draft actually submits
        - Broken rule sets raise, they are never reported as user errors
    """

    def __init__(self, validators: Optional[list[BaseFieldValidator]] = None):
        """Initialize with default validators or a custom list.

        Args:
            validators: Optional list of validators. If None, uses all defaults.
        """
        self.validators: dict[FieldType, BaseFieldValidator] = {}
        for validator in validators or self._default_validators():
            self.add_validator(validator)

    @staticmethod
    def _default_validators() -> list[BaseFieldValidator]:
        return [IdValidator(), StringValidator(), DelayValidator()]

    def add_validator(self, validator: BaseFieldValidator) -> None:
        """Register a validator, replacing any previous one for its field type."""
        self.validators[validator.field_type] = validator

    def resolve(self, rule: FieldRule, data: dict, db_item: dict) -> FieldRule:
        """Reduce a conditional rule to the simple rule of its first matching branch."""
        if isinstance(rule, ConditionalRule):
            return rule.resolve(data, db_item)
        return rule

    def validate(
        self,
        rules: RuleSet,
        item: dict,
        db_item: Optional[dict] = None,
        path: str = "/1",
    ) -> list[ValidationError]:
        """Validate one record against a rule set.

        Args:
            rules: Rule set for the record's lifecycle context
            item: Submitted (draft) record
            db_item: Stored record for updates, None on create
            path: Parameter path of the record, e.g. "/1"

        Returns:
            List of ValidationError findings in rule set order (empty if valid)

        Raises:
            RuleConfigurationError: no validator is registered for a rule's type
        """
        start_time = time.perf_counter()

        db_item = db_item or {}
        data = {**db_item, **item}
        errors: list[ValidationError] = []

        for field, rule in rules.items():
            rule = self.resolve(rule, data, db_item)
            submitted = field in item

            if isinstance(rule, UnexpectedRule):
                if submitted:
                    errors.append(self._unexpected_error(field, path, rule.reason))
                continue

            if not submitted:
                if rule.required:
                    errors.append(ValidationError.create(
                        ErrorCode.FIELD_MISSING, path, f'the parameter "{field}" is missing', field=field,
                    ))
                continue

            errors.extend(self._validate_value(field, f"{path}/{field}", item[field], rule))

        logger.debug(
            "record_validated",
            path=path,
            fields=len(rules),
            errors=len(errors),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        )

        return errors

    def _validate_value(self, field: str, path: str, value, rule: SimpleRule) -> list[ValidationError]:
        validator = self.validators.get(rule.type)
        if validator is None:
            raise RuleConfigurationError(f"No validator registered for field type '{rule.type.value}'")
        return validator.validate(field, path, value, rule)

    @staticmethod
    def _unexpected_error(field: str, path: str, reason: UnexpectedReason) -> ValidationError:
        if reason is UnexpectedReason.UNEXPECTED:
            detail = f'unexpected parameter "{field}"'
        else:
            detail = f'cannot update readonly parameter "{field}" of {reason.value} object'
        return ValidationError.create(UNEXPECTED_CODES[reason], path, detail, field=field)
