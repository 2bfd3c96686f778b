"""Base field validator — abstract class implementing the Strategy Pattern.

One validator per FieldType. The engine resolves the rule and checks
presence; validators only judge a value that was actually submitted.
"""

from abc import ABC, abstractmethod
from typing import Any

from itemconf.rules import FieldType, SimpleRule
from itemconf.validators.models import ErrorCode, ValidationError


class BaseFieldValidator(ABC):
    """Abstract base for value validators.

    Contract:
        - validate() is deterministic and side-effect free
        - validate() returns a list of ValidationError (empty = value accepted)
        - at most one error per value: checks stop at the first failure
    """

    @property
    @abstractmethod
    def field_type(self) -> FieldType:
        """Field type this validator handles."""
        ...

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def validate(self, field: str, path: str, value: Any, rule: SimpleRule) -> list[ValidationError]:
        """Check a submitted value against a rule.

        Args:
            field: Field name
            path: Parameter path of the value, e.g. "/1/delay"
            value: Submitted value
            rule: Resolved simple rule

        Returns:
            List of ValidationError findings (empty if the value is valid)
        """
        ...

    # ── Helper Methods ──

    def _error(self, code: ErrorCode, field: str, path: str, detail: str) -> ValidationError:
        """Convenience method to create a ValidationError."""
        return ValidationError.create(code, path, detail, field=field)

    def _check_string(self, field: str, path: str, value: str, rule: SimpleRule) -> list[ValidationError]:
        """Shared not-empty / length / allowed-values checks on a string value."""
        if rule.not_empty and value == "":
            return [self._error(ErrorCode.FIELD_EMPTY, field, path, "cannot be empty")]

        if rule.length is not None and len(value) > rule.length:
            return [self._error(ErrorCode.FIELD_TOO_LONG, field, path, "value is too long")]

        if rule.allowed is not None and value not in rule.allowed:
            return [self._error(
                ErrorCode.FIELD_NOT_ALLOWED, field, path,
                f"value must be one of {', '.join(rule.allowed)}",
            )]

        return []
