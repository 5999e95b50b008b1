"""Input validation rules for customer and credit transfer objects."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date
from decimal import Decimal

from credit_app.core.errors import FieldViolation
from credit_app.models.credit import CreditCreate
from credit_app.models.customer import CustomerCreate

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
NON_DIGIT_PATTERN = re.compile(r"[^\d]")

MIN_INSTALLMENTS = 1
MAX_INSTALLMENTS = 48


def validate_required_text(value: str | None, message: str) -> str:
    """Validate non-empty text fields."""
    normalized = (value or "").strip()
    if not normalized:
        raise ValueError(message)
    return normalized


def validate_cpf(cpf: str | None) -> str:
    """Validate a Brazilian CPF with both check digits and return the 11 digits."""
    raw = validate_required_text(cpf, "CPF cannot be empty")
    digits = NON_DIGIT_PATTERN.sub("", raw)
    if len(digits) != 11 or len(set(digits)) == 1:
        raise ValueError("Error,please insert a valid CPF")

    numbers = [int(digit) for digit in digits]
    for position in (9, 10):
        total = sum(n * w for n, w in zip(numbers[:position], range(position + 1, 1, -1)))
        check = 11 - (total % 11)
        if (0 if check >= 10 else check) != numbers[position]:
            raise ValueError("Error,please insert a valid CPF")
    return digits


def validate_email(email: str | None) -> str:
    """Validate email presence and shape."""
    normalized = validate_required_text(email, "Email cannot be empty")
    if not EMAIL_PATTERN.match(normalized):
        raise ValueError("Error,insert a valid Email")
    return normalized


def validate_income(income: Decimal | None) -> Decimal:
    """Income is required and cannot be negative."""
    if income is None:
        raise ValueError("Income cannot be empty")
    if not income.is_finite():
        raise ValueError("Income must be a finite number")
    if income < 0:
        raise ValueError("Income cannot be negative")
    return income


def validate_credit_value(credit_value: Decimal | None) -> Decimal:
    """Credit value is required and must be positive."""
    if credit_value is None:
        raise ValueError("Credit Value cannot be empty")
    if not credit_value.is_finite():
        raise ValueError("Credit Value must be a finite number")
    if credit_value <= 0:
        raise ValueError("Credit Value must be positive")
    return credit_value


def validate_future_date(value: date | None, today: date) -> date:
    """Disallow today and past dates for the first installment."""
    if value is None:
        raise ValueError("Day of first installment cannot be empty")
    if value <= today:
        raise ValueError("Day of first installment must be a future date")
    return value


def validate_installments(
    number_of_installments: int | None,
    min_installments: int = MIN_INSTALLMENTS,
    max_installments: int = MAX_INSTALLMENTS,
) -> int:
    """Validate the installment count range."""
    if number_of_installments is None:
        raise ValueError("Number of installments cannot be empty")
    if number_of_installments < min_installments:
        raise ValueError(f"Installments cannot be lower than {min_installments}")
    if number_of_installments > max_installments:
        raise ValueError(f"installments cannot be more than {max_installments}")
    return number_of_installments


def validate_customer_id(customer_id: int | None) -> int:
    if customer_id is None:
        raise ValueError("Customer ID cannot be empty")
    return customer_id


def _check(violations: list[FieldViolation], field: str, rule: Callable[[], object]) -> None:
    try:
        rule()
    except ValueError as error:
        violations.append(FieldViolation(field=field, message=str(error)))


def validate_customer_create(payload: CustomerCreate) -> list[FieldViolation]:
    """Return every field violation of a customer registration payload."""
    violations: list[FieldViolation] = []
    _check(violations, "first_name",
           lambda: validate_required_text(payload.first_name, "First Name cannot be empty"))
    _check(violations, "last_name",
           lambda: validate_required_text(payload.last_name, "Last Name cannot be empty"))
    _check(violations, "cpf", lambda: validate_cpf(payload.cpf))
    _check(violations, "income", lambda: validate_income(payload.income))
    _check(violations, "email", lambda: validate_email(payload.email))
    _check(violations, "password",
           lambda: validate_required_text(payload.password, "Password cannot be empty"))
    _check(violations, "zip_code",
           lambda: validate_required_text(payload.zip_code, "Zip Code cannot be empty"))
    _check(violations, "street",
           lambda: validate_required_text(payload.street, "Street cannot be empty"))
    return violations


def validate_credit_create(
    payload: CreditCreate,
    today: date | None = None,
    min_installments: int = MIN_INSTALLMENTS,
    max_installments: int = MAX_INSTALLMENTS,
) -> list[FieldViolation]:
    """Return every field violation of a credit issuance payload."""
    reference_day = today or date.today()
    violations: list[FieldViolation] = []
    _check(violations, "credit_value", lambda: validate_credit_value(payload.credit_value))
    _check(violations, "day_first_of_installment",
           lambda: validate_future_date(payload.day_first_of_installment, reference_day))
    _check(
        violations,
        "number_of_installments",
        lambda: validate_installments(
            payload.number_of_installments,
            min_installments=min_installments,
            max_installments=max_installments,
        ),
    )
    _check(violations, "customer_id", lambda: validate_customer_id(payload.customer_id))
    return violations
