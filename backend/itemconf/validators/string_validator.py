"""String validator — UTF-8 text fields."""

from typing import Any

from itemconf.rules import FieldType, SimpleRule
from itemconf.validators.base import BaseFieldValidator
from itemconf.validators.models import ErrorCode, ValidationError


class StringValidator(BaseFieldValidator):
    """Validates free text fields: type, emptiness, length in characters, allowed values."""

    @property
    def field_type(self) -> FieldType:
        return FieldType.STRING_UTF8

    def validate(self, field: str, path: str, value: Any, rule: SimpleRule) -> list[ValidationError]:
        if not isinstance(value, str):
            return [self._error(ErrorCode.FIELD_INVALID_TYPE, field, path, "a character string is expected")]

        return self._check_string(field, path, value, rule)
