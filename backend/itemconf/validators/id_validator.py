"""ID validator — object identifiers (unsigned 64-bit, int or digit string)."""

from typing import Any

from itemconf.constants import ZBX_MAX_UINT64
from itemconf.rules import FieldType, SimpleRule
from itemconf.validators.base import BaseFieldValidator
from itemconf.validators.models import ErrorCode, ValidationError


class IdValidator(BaseFieldValidator):
    """Validates identifier fields."""

    @property
    def field_type(self) -> FieldType:
        return FieldType.ID

    def validate(self, field: str, path: str, value: Any, rule: SimpleRule) -> list[ValidationError]:
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            return [self._error(ErrorCode.FIELD_INVALID_TYPE, field, path, "a number is expected")]

        text = str(value)
        if not text.isdigit() or not text.isascii():
            return [self._error(ErrorCode.FIELD_INVALID_TYPE, field, path, "a number is expected")]

        if int(text) > ZBX_MAX_UINT64:
            return [self._error(ErrorCode.FIELD_INVALID_TYPE, field, path, "a number is too large")]

        # Normalise "007" to "7" before comparing with allowed ids
        return self._check_string(field, path, str(int(text)), rule)
