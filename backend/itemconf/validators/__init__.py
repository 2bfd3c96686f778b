"""Item validator — deterministic validation of submitted item records.

Usage:
    from itemconf.validators import ValidationEngine, ValidationReport

    errors = ValidationEngine().validate(rules, item, db_item)
    report = ValidationReport.build(errors)
"""

from itemconf.validators.engine import ValidationEngine
from itemconf.validators.base import BaseFieldValidator
from itemconf.validators.models import ValidationReport, ValidationError, ErrorCategory, ErrorCode

__all__ = [
    "ValidationEngine",
    "BaseFieldValidator",
    "ValidationReport",
    "ValidationError",
    "ErrorCategory",
    "ErrorCode",
]
