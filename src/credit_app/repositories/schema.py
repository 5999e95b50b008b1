"""Database schema management."""

from __future__ import annotations

from credit_app.repositories.db_pool import ThreadLocalConnection


def initialize_schema(pool: ThreadLocalConnection) -> None:
    """Create required tables and indexes if they do not exist."""
    pool.execute(
        """
        CREATE TABLE IF NOT EXISTS customers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            cpf_encrypted BLOB NOT NULL,
            cpf_hash TEXT NOT NULL UNIQUE,
            income TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password_encrypted BLOB NOT NULL,
            zip_code TEXT NOT NULL,
            street TEXT NOT NULL,
            created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
        """
    )

    pool.execute(
        """
        CREATE TABLE IF NOT EXISTS credits (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            credit_code TEXT NOT NULL UNIQUE,
            credit_value TEXT NOT NULL,
            day_first_installment TEXT NOT NULL,
            number_of_installments INTEGER NOT NULL,
            status TEXT NOT NULL,
            customer_id INTEGER NOT NULL,
            created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (customer_id) REFERENCES customers(id) ON DELETE RESTRICT
        )
        """
    )

    pool.execute("CREATE INDEX IF NOT EXISTS idx_credits_customer ON credits(customer_id)")
    pool.execute("CREATE INDEX IF NOT EXISTS idx_credits_code ON credits(credit_code)")
