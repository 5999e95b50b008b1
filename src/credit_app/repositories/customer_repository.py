"""Customer repository with encrypted sensitive fields."""

from __future__ import annotations

import sqlite3
from decimal import Decimal
from typing import Any

from credit_app.core.crypto import CryptoService, hash_lookup_value
from credit_app.core.errors import DuplicateRecordError
from credit_app.models.customer import Address, Customer, CustomerCreate
from credit_app.repositories.db_pool import ThreadLocalConnection

_UNIQUE_MESSAGES = {
    "customers.cpf_hash": "CPF already registered",
    "customers.email": "Email already registered",
}


class CustomerRepository:
    """Handles customer persistence and retrieval."""

    def __init__(self, pool: ThreadLocalConnection, crypto_service: CryptoService):
        self._pool = pool
        self._crypto = crypto_service

    def _to_customer(self, row: dict[str, Any]) -> Customer:
        return Customer(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            cpf=self._crypto.decrypt_text(row["cpf_encrypted"]),
            income=Decimal(row["income"]),
            email=row["email"],
            password=self._crypto.decrypt_text(row["password_encrypted"]),
            address=Address(zip_code=row["zip_code"], street=row["street"]),
        )

    def save(self, payload: CustomerCreate) -> Customer:
        """Insert customer with encrypted sensitive fields and return it with its id."""
        try:
            cursor = self._pool.execute(
                """
                INSERT INTO customers (
                    first_name,
                    last_name,
                    cpf_encrypted,
                    cpf_hash,
                    income,
                    email,
                    password_encrypted,
                    zip_code,
                    street
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payload.first_name,
                    payload.last_name,
                    self._crypto.encrypt_text(payload.cpf),
                    hash_lookup_value(payload.cpf),
                    str(payload.income),
                    payload.email,
                    self._crypto.encrypt_text(payload.password),
                    payload.zip_code,
                    payload.street,
                ),
            )
        except sqlite3.IntegrityError as error:
            for column, message in _UNIQUE_MESSAGES.items():
                if column in str(error):
                    raise DuplicateRecordError(message) from error
            raise

        return Customer(
            id=int(cursor.lastrowid),
            first_name=payload.first_name,
            last_name=payload.last_name,
            cpf=payload.cpf,
            income=Decimal(str(payload.income)),
            email=payload.email,
            password=payload.password,
            address=payload.address(),
        )

    def get_by_id(self, customer_id: int) -> Customer | None:
        """Fetch a single customer."""
        row = self._pool.fetch_one(
            """
            SELECT
                id,
                first_name,
                last_name,
                cpf_encrypted,
                income,
                email,
                password_encrypted,
                zip_code,
                street
            FROM customers
            WHERE id = ?
            """,
            (customer_id,),
        )
        return self._to_customer(dict(row)) if row else None
