"""Credit request handling: payload validation and view assembly."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from uuid import UUID

from credit_app.core.config import CreditConfig
from credit_app.core.errors import FieldValidationError, FieldViolation
from credit_app.core.validation import validate_credit_create
from credit_app.models.credit import CreditCreate, CreditView, CreditViewList
from credit_app.services.credit_service import CreditService
from credit_app.services.customer_service import CustomerService


class CreditResource:
    """Entry points for issuing and querying credits."""

    def __init__(
        self,
        credit_service: CreditService,
        customer_service: CustomerService,
        credit_config: CreditConfig | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self._credit_service = credit_service
        self._customer_service = customer_service
        self._credit_config = credit_config or CreditConfig()
        self._clock = clock

    def save(self, payload: CreditCreate) -> CreditView:
        """Validate fields, issue the credit and render it with its owner."""
        violations = validate_credit_create(
            payload,
            today=self._clock(),
            min_installments=self._credit_config.min_installments,
            max_installments=self._credit_config.max_installments,
        )
        if violations:
            raise FieldValidationError(violations)

        credit = self._credit_service.save(payload)
        customer = self._customer_service.find_by_id(credit.customer_id)
        return CreditView.from_credit(credit, customer)

    def find_all_by_customer(self, customer_id: int) -> list[CreditViewList]:
        credits = self._credit_service.find_all_by_customer(customer_id)
        return [CreditViewList.from_credit(credit) for credit in credits]

    def find_by_credit_code(self, customer_id: int, credit_code: UUID | str) -> CreditView:
        """Fetch one credit for its owner, rendered with the owner's data."""
        code = self._parse_code(credit_code)
        credit = self._credit_service.find_by_credit_code(customer_id, code)
        customer = self._customer_service.find_by_id(credit.customer_id)
        return CreditView.from_credit(credit, customer)

    @staticmethod
    def _parse_code(credit_code: UUID | str) -> UUID:
        if isinstance(credit_code, UUID):
            return credit_code
        try:
            return UUID(credit_code.strip())
        except (AttributeError, ValueError) as error:
            raise FieldValidationError(
                [FieldViolation(field="credit_code", message="Invalid credit code")]
            ) from error
