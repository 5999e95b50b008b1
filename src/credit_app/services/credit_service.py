"""Credit service: issuance rules and owner-checked lookups."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import date
from uuid import UUID

from credit_app.core.dates import plus_months
from credit_app.core.errors import AccessViolationError, BusinessRuleError, CreditNotFoundError
from credit_app.core.logging import get_logger
from credit_app.models.credit import Credit, CreditCreate
from credit_app.repositories.credit_repository import CreditRepository
from credit_app.services.customer_service import CustomerService

logger = get_logger(__name__)

DEFAULT_MAX_FIRST_INSTALLMENT_MONTHS = 3


class CreditService:
    """Coordinates credit use cases."""

    def __init__(
        self,
        credit_repo: CreditRepository,
        customer_service: CustomerService,
        max_first_installment_months: int = DEFAULT_MAX_FIRST_INSTALLMENT_MONTHS,
        clock: Callable[[], date] = date.today,
    ):
        self._credit_repo = credit_repo
        self._customer_service = customer_service
        self._max_first_installment_months = max_first_installment_months
        self._clock = clock

    def save(self, credit: CreditCreate) -> Credit:
        """Check the first-installment window, resolve the owner, then persist."""
        self._validate_day_first_installment(credit.day_first_of_installment)
        customer = self._customer_service.find_by_id(credit.customer_id)
        saved = self._credit_repo.save(replace(credit, customer_id=customer.id))
        logger.info("Credit %s issued for customer %d", saved.credit_code, customer.id)
        return saved

    def find_all_by_customer(self, customer_id: int) -> list[Credit]:
        """List every credit owned by the customer, possibly none."""
        return self._credit_repo.list_by_customer_id(customer_id)

    def find_by_credit_code(self, customer_id: int, credit_code: UUID) -> Credit:
        """Return the credit only when it belongs to customer_id."""
        credit = self._credit_repo.get_by_code(credit_code)
        if credit is None:
            raise CreditNotFoundError(credit_code)
        if credit.customer_id != customer_id:
            logger.warning(
                "Customer %d requested credit %s owned by another customer",
                customer_id,
                credit_code,
            )
            raise AccessViolationError(customer_id, credit_code)
        return credit

    def _validate_day_first_installment(self, day_first_installment: date | None) -> None:
        if day_first_installment is None:
            raise BusinessRuleError("Day of first installment cannot be empty")
        limit = plus_months(self._clock(), self._max_first_installment_months)
        if day_first_installment >= limit:
            logger.warning("Rejected first installment %s (limit %s)", day_first_installment, limit)
            raise BusinessRuleError(
                f"First Installment cannot be later than "
                f"{self._max_first_installment_months} months from now"
            )
