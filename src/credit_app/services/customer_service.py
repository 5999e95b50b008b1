"""Customer service."""

from __future__ import annotations

from credit_app.core.errors import CustomerNotFoundError
from credit_app.core.logging import get_logger
from credit_app.models.customer import Customer, CustomerCreate, CustomerView
from credit_app.repositories.customer_repository import CustomerRepository

logger = get_logger(__name__)


class CustomerService:
    """Coordinates customer use cases."""

    def __init__(self, customer_repo: CustomerRepository):
        self._customer_repo = customer_repo

    def save(self, payload: CustomerCreate) -> Customer:
        """Persist a new customer; the caller has already validated the payload."""
        customer = self._customer_repo.save(payload)
        logger.info("Customer %d registered", customer.id)
        return customer

    def find_by_id(self, customer_id: int) -> Customer:
        """Resolve a customer id or raise CustomerNotFoundError."""
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    def get_view(self, customer_id: int) -> CustomerView:
        """Fetch one customer with the CPF masked."""
        return CustomerView.from_customer(self.find_by_id(customer_id))
