"""Application dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from credit_app.core.config import AppConfig, ensure_runtime_keys, get_required_env, load_config
from credit_app.core.crypto import CryptoService
from credit_app.core.logging import setup_logging
from credit_app.repositories.credit_repository import CreditRepository
from credit_app.repositories.customer_repository import CustomerRepository
from credit_app.repositories.db_pool import ThreadLocalConnection
from credit_app.repositories.schema import initialize_schema
from credit_app.resources.credit_resource import CreditResource
from credit_app.resources.customer_resource import CustomerResource
from credit_app.services.credit_service import CreditService
from credit_app.services.customer_service import CustomerService


@dataclass
class ServiceContainer:
    """Wires repositories, services and resources."""

    config: AppConfig
    customer_service: CustomerService
    credit_service: CreditService
    customer_resource: CustomerResource
    credit_resource: CreditResource


def build_container(config: AppConfig | None = None, config_path: Path | None = None) -> ServiceContainer:
    """Build dependencies and initialize schema."""
    config = config or load_config(config_path)
    setup_logging(config.logging.level, config.logging.format)
    ensure_runtime_keys(config)
    crypto = CryptoService.from_base64_key(get_required_env(config.encryption.key_env))

    pool = ThreadLocalConnection(config.database)
    initialize_schema(pool)

    customer_service = CustomerService(CustomerRepository(pool, crypto))
    credit_service = CreditService(
        CreditRepository(pool),
        customer_service,
        max_first_installment_months=config.credit.max_first_installment_months,
    )

    return ServiceContainer(
        config=config,
        customer_service=customer_service,
        credit_service=credit_service,
        customer_resource=CustomerResource(customer_service),
        credit_resource=CreditResource(credit_service, customer_service, config.credit),
    )
