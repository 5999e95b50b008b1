"""Customer domain models."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from credit_app.core.crypto import mask_cpf


@dataclass(frozen=True)
class Address:
    """Address embedded in a customer record."""

    zip_code: str
    street: str


@dataclass
class CustomerCreate:
    """Input model for registering a customer."""

    first_name: str
    last_name: str
    cpf: str
    income: Decimal | None
    email: str
    password: str
    zip_code: str
    street: str

    def address(self) -> Address:
        return Address(zip_code=self.zip_code, street=self.street)


@dataclass
class Customer:
    """Persisted customer."""

    id: int
    first_name: str
    last_name: str
    cpf: str
    income: Decimal
    email: str
    password: str
    address: Address


@dataclass
class CustomerView:
    """Output model for customer retrieval."""

    id: int
    first_name: str
    last_name: str
    cpf: str
    income: Decimal
    email: str
    zip_code: str
    street: str

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerView":
        return cls(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            cpf=mask_cpf(customer.cpf),
            income=customer.income,
            email=customer.email,
            zip_code=customer.address.zip_code,
            street=customer.address.street,
        )
