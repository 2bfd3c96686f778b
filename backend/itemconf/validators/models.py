"""Validation models — error codes, categories and report structure.

User-recoverable problems are ValidationError values, never exceptions.
"""

from enum import Enum
from pydantic import BaseModel, Field


class ErrorCategory(str, Enum):
    """Violation taxonomy."""

    FIELD = "field"            # value fails type/length/required/allowed constraints
    UNEXPECTED = "unexpected"  # field submitted where it is forbidden
    ITEM = "item"              # whole record cannot be validated (unknown type, unknown id)


class ErrorCode(str, Enum):
    """Deterministic error codes for every check.

    Naming convention: CATEGORY_SPECIFIC_ISSUE
    """

    # Field errors
    FIELD_MISSING = "FIELD_MISSING"
    FIELD_EMPTY = "FIELD_EMPTY"
    FIELD_INVALID_TYPE = "FIELD_INVALID_TYPE"
    FIELD_TOO_LONG = "FIELD_TOO_LONG"
    FIELD_NOT_ALLOWED = "FIELD_NOT_ALLOWED"
    FIELD_INVALID_DELAY = "FIELD_INVALID_DELAY"

    # Unexpected field errors
    UNEXPECTED_FIELD = "UNEXPECTED_FIELD"
    UNEXPECTED_INHERITED = "UNEXPECTED_INHERITED"
    UNEXPECTED_DISCOVERED = "UNEXPECTED_DISCOVERED"

    # Item errors
    ITEM_TYPE_UNSUPPORTED = "ITEM_TYPE_UNSUPPORTED"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"


ERROR_CATEGORY_MAP = {
    ErrorCode.FIELD_MISSING: ErrorCategory.FIELD,
    ErrorCode.FIELD_EMPTY: ErrorCategory.FIELD,
    ErrorCode.FIELD_INVALID_TYPE: ErrorCategory.FIELD,
    ErrorCode.FIELD_TOO_LONG: ErrorCategory.FIELD,
    ErrorCode.FIELD_NOT_ALLOWED: ErrorCategory.FIELD,
    ErrorCode.FIELD_INVALID_DELAY: ErrorCategory.FIELD,
    ErrorCode.UNEXPECTED_FIELD: ErrorCategory.UNEXPECTED,
    ErrorCode.UNEXPECTED_INHERITED: ErrorCategory.UNEXPECTED,
    ErrorCode.UNEXPECTED_DISCOVERED: ErrorCategory.UNEXPECTED,
    ErrorCode.ITEM_TYPE_UNSUPPORTED: ErrorCategory.ITEM,
    ErrorCode.ITEM_NOT_FOUND: ErrorCategory.ITEM,
}


class ValidationError(BaseModel):
    """A single violation."""

    code: ErrorCode
    category: ErrorCategory
    field: str = ""   # Offending field, empty for item-level errors
    path: str         # Parameter path shown to the user, e.g. "/1/ipmi_sensor"
    message: str      # Full user-facing message

    model_config = {"use_enum_values": True}

    @classmethod
    def create(cls, code: ErrorCode, path: str, detail: str, field: str = "") -> "ValidationError":
        """Build an error with the standard 'Invalid parameter' wording."""
        return cls(
            code=code,
            category=ERROR_CATEGORY_MAP[code],
            field=field,
            path=path,
            message=f'Invalid parameter "{path}": {detail}.',
        )


class ValidationReport(BaseModel):
    """Outcome of validating one request."""

    passed: bool = Field(description="True if no violation was found")
    summary: dict = Field(
        description="Count of errors by category",
        default_factory=lambda: {c.value: 0 for c in ErrorCategory},
    )
    errors: list[ValidationError] = Field(default_factory=list)
    verdict: str = Field(default="", description="Human-readable verdict")

    @classmethod
    def build(cls, errors: list[ValidationError]) -> "ValidationReport":
        """Build a report from a list of validation errors, keeping their order."""
        summary = {c.value: 0 for c in ErrorCategory}
        for err in errors:
            summary[err.category] += 1

        passed = not errors
        if passed:
            verdict = "PASS — no violations."
        else:
            verdict = (
                f"FAIL — {len(errors)} violation(s): "
                f"{summary['field']} field, {summary['unexpected']} unexpected, {summary['item']} item."
            )

        return cls(passed=passed, summary=summary, errors=list(errors), verdict=verdict)
