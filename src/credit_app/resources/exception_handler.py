"""Maps credit-app errors to client-facing problem details."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from credit_app.core.errors import (
    AccessViolationError,
    BusinessRuleError,
    CreditAppError,
    DuplicateRecordError,
    FieldValidationError,
)

BAD_REQUEST_TITLE = "Bad Request! Consult the Documentation"
CONFLICT_TITLE = "Conflict! Consult the Documentation"

# Looked up along the exception's MRO, so subclasses inherit their parent's entry.
ERROR_STATUS_TABLE: dict[type[CreditAppError], tuple[int, str]] = {
    FieldValidationError: (400, BAD_REQUEST_TITLE),
    BusinessRuleError: (400, BAD_REQUEST_TITLE),
    AccessViolationError: (400, BAD_REQUEST_TITLE),
    DuplicateRecordError: (409, CONFLICT_TITLE),
}


@dataclass
class ProblemDetails:
    title: str
    timestamp: datetime
    status: int
    exception: str
    details: dict[str, str] = field(default_factory=dict)


def _lookup(error: Exception) -> tuple[int, str] | None:
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS_TABLE:
            return ERROR_STATUS_TABLE[cls]
    return None


def to_problem_details(error: Exception) -> ProblemDetails:
    """Translate a mapped error; anything unmapped is re-raised unchanged."""
    mapped = _lookup(error)
    if mapped is None:
        raise error
    status, title = mapped

    if isinstance(error, FieldValidationError):
        details = {violation.field: violation.message for violation in error.violations}
    else:
        details = {"cause": str(error)}

    error_type = type(error)
    return ProblemDetails(
        title=title,
        timestamp=datetime.now(),
        status=status,
        exception=f"{error_type.__module__}.{error_type.__qualname__}",
        details=details,
    )
