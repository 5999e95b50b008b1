"""Credit domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from credit_app.models.customer import Customer


class Status(str, Enum):
    """Credit status. Stored as given, never transitioned."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass
class CreditCreate:
    """Input model for issuing a credit."""

    credit_value: Decimal | None
    day_first_of_installment: date | None
    number_of_installments: int | None
    customer_id: int | None
    status: Status = Status.PENDING


@dataclass
class Credit:
    """Persisted credit; the owner is referenced by id only."""

    id: int
    credit_code: UUID
    credit_value: Decimal
    day_first_of_installment: date
    number_of_installments: int
    status: Status
    customer_id: int


@dataclass
class CreditView:
    """Full credit output. Customer fields are None when not resolved."""

    credit_code: UUID
    credit_value: Decimal
    number_of_installments: int
    day_first_of_installment: date
    status: Status
    email_customer: str | None
    income_customer: Decimal | None
    customer_id: int | None

    @classmethod
    def from_credit(cls, credit: Credit, customer: Customer | None = None) -> "CreditView":
        return cls(
            credit_code=credit.credit_code,
            credit_value=credit.credit_value,
            number_of_installments=credit.number_of_installments,
            day_first_of_installment=credit.day_first_of_installment,
            status=credit.status,
            email_customer=customer.email if customer else None,
            income_customer=customer.income if customer else None,
            customer_id=customer.id if customer else None,
        )


@dataclass
class CreditViewList:
    """Lightweight credit output for customer listings."""

    credit_code: UUID
    credit_value: Decimal
    number_of_installments: int

    @classmethod
    def from_credit(cls, credit: Credit) -> "CreditViewList":
        return cls(
            credit_code=credit.credit_code,
            credit_value=credit.credit_value,
            number_of_installments=credit.number_of_installments,
        )
