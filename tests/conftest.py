"""Shared fixtures: a fully wired app over a throwaway SQLite file."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from credit_app.core import config as app_config
from credit_app.core.config import (
    AppConfig,
    CreditConfig,
    DatabaseConfig,
    EncryptionConfig,
    LoggingConfig,
)
from credit_app.core.container import ServiceContainer, build_container
from credit_app.core.crypto import CryptoService
from credit_app.core.dates import plus_months
from credit_app.models.credit import CreditCreate
from credit_app.models.customer import CustomerCreate
from credit_app.repositories import db_pool

VALID_CPF = "28475934625"
OTHER_VALID_CPF = "52998224725"


@pytest.fixture
def runtime_keys(monkeypatch):
    monkeypatch.setenv("CREDIT_APP_DB_KEY", "test-db-key")
    monkeypatch.setenv("CREDIT_APP_ENCRYPTION_KEY", CryptoService.generate_base64_key())
    monkeypatch.setattr(app_config, "_RUNTIME_ENV_LOADED", True)
    monkeypatch.setattr(db_pool, "SQLCIPHER_AVAILABLE", False)


@pytest.fixture
def test_config(tmp_path) -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(
            path=str(tmp_path / "test.db"),
            key_env="CREDIT_APP_DB_KEY",
            allow_sqlite_fallback=True,
        ),
        encryption=EncryptionConfig(key_env="CREDIT_APP_ENCRYPTION_KEY"),
        logging=LoggingConfig(level="DEBUG"),
        credit=CreditConfig(),
    )


@pytest.fixture
def container(runtime_keys, test_config) -> ServiceContainer:
    return build_container(config=test_config)


def build_customer(**overrides) -> CustomerCreate:
    fields = {
        "first_name": "Gil",
        "last_name": "Teste",
        "cpf": VALID_CPF,
        "income": Decimal("1000.0"),
        "email": "email@teste.com",
        "password": "12345",
        "zip_code": "12345-000",
        "street": "Rua",
    }
    fields.update(overrides)
    return CustomerCreate(**fields)


def build_credit(customer_id: int = 1, **overrides) -> CreditCreate:
    fields = {
        "credit_value": Decimal("5000.00"),
        "day_first_of_installment": plus_months(date.today(), 2),
        "number_of_installments": 15,
        "customer_id": customer_id,
    }
    fields.update(overrides)
    return CreditCreate(**fields)
