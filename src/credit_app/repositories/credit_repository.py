"""Credit repository."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from credit_app.models.credit import Credit, CreditCreate, Status
from credit_app.repositories.db_pool import ThreadLocalConnection

_CREDIT_COLUMNS = """
    id,
    credit_code,
    credit_value,
    day_first_installment,
    number_of_installments,
    status,
    customer_id
"""


class CreditRepository:
    """Handles credit persistence. Credit codes are generated on insert."""

    def __init__(self, pool: ThreadLocalConnection):
        self._pool = pool

    @staticmethod
    def _to_credit(row: dict[str, Any]) -> Credit:
        return Credit(
            id=row["id"],
            credit_code=UUID(row["credit_code"]),
            credit_value=Decimal(row["credit_value"]),
            day_first_of_installment=date.fromisoformat(row["day_first_installment"]),
            number_of_installments=row["number_of_installments"],
            status=Status(row["status"]),
            customer_id=row["customer_id"],
        )

    def save(self, payload: CreditCreate) -> Credit:
        """Insert a credit for an already resolved customer and return it."""
        credit_code = uuid.uuid4()
        cursor = self._pool.execute(
            """
            INSERT INTO credits (
                credit_code,
                credit_value,
                day_first_installment,
                number_of_installments,
                status,
                customer_id
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                str(credit_code),
                str(payload.credit_value),
                payload.day_first_of_installment.isoformat(),
                payload.number_of_installments,
                payload.status.value,
                payload.customer_id,
            ),
        )
        return Credit(
            id=int(cursor.lastrowid),
            credit_code=credit_code,
            credit_value=Decimal(str(payload.credit_value)),
            day_first_of_installment=payload.day_first_of_installment,
            number_of_installments=payload.number_of_installments,
            status=payload.status,
            customer_id=payload.customer_id,
        )

    def get_by_code(self, credit_code: UUID) -> Credit | None:
        """Fetch one credit by its public code."""
        row = self._pool.fetch_one(
            f"SELECT {_CREDIT_COLUMNS} FROM credits WHERE credit_code = ?",
            (str(credit_code),),
        )
        return self._to_credit(dict(row)) if row else None

    def list_by_customer_id(self, customer_id: int) -> list[Credit]:
        """List a customer's credits in insertion order."""
        rows = self._pool.fetch_all(
            f"SELECT {_CREDIT_COLUMNS} FROM credits WHERE customer_id = ? ORDER BY id ASC",
            (customer_id,),
        )
        return [self._to_credit(dict(row)) for row in rows]

    def count(self) -> int:
        """Return the number of stored credits."""
        row = self._pool.fetch_one("SELECT COUNT(*) AS total FROM credits")
        return int(row["total"]) if row else 0
