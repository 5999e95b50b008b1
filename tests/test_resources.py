"""Tests for the request-handling resources."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest

from conftest import OTHER_VALID_CPF, build_credit, build_customer
from credit_app.core.dates import plus_months
from credit_app.core.errors import (
    AccessViolationError,
    BusinessRuleError,
    CustomerNotFoundError,
    FieldValidationError,
)
from credit_app.models.credit import Status


def test_register_customer_returns_masked_view(container) -> None:
    view = container.customer_resource.save(build_customer(cpf="284.759.346-25", first_name=" Gil "))

    assert view.id == 1
    assert view.first_name == "Gil"
    assert view.cpf == "284.***.***-25"
    assert container.customer_service.find_by_id(view.id).cpf == "28475934625"


def test_register_customer_with_invalid_fields_reports_each_field(container) -> None:
    with pytest.raises(FieldValidationError) as excinfo:
        container.customer_resource.save(build_customer(cpf="28475934626", email="nope", street=""))

    fields = {violation.field for violation in excinfo.value.violations}
    assert fields == {"cpf", "email", "street"}


def test_issue_credit_scenario(container) -> None:
    customer = container.customer_resource.save(build_customer())

    view = container.credit_resource.save(build_credit(customer.id))

    assert view.credit_value == Decimal("5000.00")
    assert view.number_of_installments == 15
    assert view.day_first_of_installment == plus_months(date.today(), 2)
    assert view.status is Status.PENDING
    assert view.customer_id == 1
    assert view.email_customer == "email@teste.com"
    assert view.income_customer == Decimal("1000.0")


def test_more_than_48_installments_is_rejected_before_the_service(container) -> None:
    customer = container.customer_resource.save(build_customer())

    with pytest.raises(FieldValidationError) as excinfo:
        container.credit_resource.save(build_credit(customer.id, number_of_installments=49))

    assert excinfo.value.violations[0].field == "number_of_installments"
    assert container.credit_resource.find_all_by_customer(customer.id) == []


def test_first_installment_five_months_out_is_a_business_rule_violation(container) -> None:
    customer = container.customer_resource.save(build_customer())

    with pytest.raises(BusinessRuleError) as excinfo:
        container.credit_resource.save(
            build_credit(customer.id, day_first_of_installment=plus_months(date.today(), 5))
        )

    assert not isinstance(excinfo.value, FieldValidationError)


def test_past_first_installment_is_a_field_violation(container) -> None:
    customer = container.customer_resource.save(build_customer())

    with pytest.raises(FieldValidationError):
        container.credit_resource.save(
            build_credit(customer.id, day_first_of_installment=date.today())
        )


def test_issue_credit_for_unknown_customer(container) -> None:
    with pytest.raises(CustomerNotFoundError):
        container.credit_resource.save(build_credit(customer_id=5))


def test_list_returns_lightweight_views(container) -> None:
    customer = container.customer_resource.save(build_customer())
    issued = container.credit_resource.save(build_credit(customer.id))

    listed = container.credit_resource.find_all_by_customer(customer.id)

    assert len(listed) == 1
    assert listed[0].credit_code == issued.credit_code
    assert listed[0].credit_value == Decimal("5000.00")
    assert listed[0].number_of_installments == 15


def test_find_by_credit_code_accepts_text_codes(container) -> None:
    customer = container.customer_resource.save(build_customer())
    issued = container.credit_resource.save(build_credit(customer.id))

    found = container.credit_resource.find_by_credit_code(customer.id, f" {issued.credit_code} ")

    assert found == issued


def test_find_by_credit_code_rejects_malformed_code(container) -> None:
    with pytest.raises(FieldValidationError):
        container.credit_resource.find_by_credit_code(1, "not-a-uuid")


def test_find_by_credit_code_rejects_non_text_code(container) -> None:
    with pytest.raises(FieldValidationError) as excinfo:
        container.credit_resource.find_by_credit_code(1, 12345)

    assert excinfo.value.violations[0].field == "credit_code"


def test_find_by_credit_code_of_other_customer(container) -> None:
    owner = container.customer_resource.save(build_customer())
    other = container.customer_resource.save(
        build_customer(cpf=OTHER_VALID_CPF, email="other@teste.com")
    )
    issued = container.credit_resource.save(build_credit(owner.id))

    with pytest.raises(AccessViolationError):
        container.credit_resource.find_by_credit_code(other.id, issued.credit_code)

    with pytest.raises(BusinessRuleError):
        container.credit_resource.find_by_credit_code(owner.id, uuid.uuid4())
