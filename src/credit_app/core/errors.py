"""Exception hierarchy for credit-app."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class FieldViolation:
    """One rejected input field."""

    field: str
    message: str


class CreditAppError(Exception):
    """Base exception for all credit-app errors."""


class FieldValidationError(CreditAppError):
    """Raised when an inbound transfer object has invalid fields."""

    def __init__(self, violations: list[FieldViolation]):
        self.violations = list(violations)
        fields = ", ".join(violation.field for violation in self.violations)
        super().__init__(f"Invalid fields: {fields}")


class BusinessRuleError(CreditAppError):
    """Raised when a domain rule rejects an operation."""


class CustomerNotFoundError(BusinessRuleError):
    """Raised when a customer id does not exist."""

    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"Id {customer_id} not found")


class CreditNotFoundError(BusinessRuleError):
    """Raised when a credit code does not exist."""

    def __init__(self, credit_code: UUID):
        self.credit_code = credit_code
        super().__init__(f"creditCode {credit_code} not found")


class AccessViolationError(CreditAppError):
    """Raised when a credit exists but belongs to another customer."""

    def __init__(self, customer_id: int, credit_code: UUID):
        self.customer_id = customer_id
        self.credit_code = credit_code
        super().__init__("Contact Admin")


class DuplicateRecordError(CreditAppError):
    """Raised when a unique column would be duplicated."""


class ConfigurationError(CreditAppError):
    """Raised when configuration or runtime keys are invalid or missing."""
