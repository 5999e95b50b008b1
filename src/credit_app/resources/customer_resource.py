"""Customer request handling: validate the payload, then delegate."""

from __future__ import annotations

from credit_app.core.errors import FieldValidationError
from credit_app.core.validation import NON_DIGIT_PATTERN, validate_customer_create
from credit_app.models.customer import CustomerCreate, CustomerView
from credit_app.services.customer_service import CustomerService


class CustomerResource:
    def __init__(self, customer_service: CustomerService):
        self._customer_service = customer_service

    @staticmethod
    def _normalize(payload: CustomerCreate) -> CustomerCreate:
        return CustomerCreate(
            first_name=payload.first_name.strip(),
            last_name=payload.last_name.strip(),
            cpf=NON_DIGIT_PATTERN.sub("", payload.cpf),
            income=payload.income,
            email=payload.email.strip(),
            password=payload.password,
            zip_code=payload.zip_code.strip(),
            street=payload.street.strip(),
        )

    def save(self, payload: CustomerCreate) -> CustomerView:
        """Register a customer and return its view."""
        violations = validate_customer_create(payload)
        if violations:
            raise FieldValidationError(violations)
        customer = self._customer_service.save(self._normalize(payload))
        return CustomerView.from_customer(customer)

    def find_by_id(self, customer_id: int) -> CustomerView:
        return self._customer_service.get_view(customer_id)
