"""Per-thread connections to the credit database."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Any

from credit_app.core.config import DatabaseConfig, get_required_env
from credit_app.core.errors import ConfigurationError
from credit_app.core.logging import get_logger

try:
    from pysqlcipher3 import dbapi2 as sqlcipher

    SQLCIPHER_AVAILABLE = True
except ImportError:
    sqlcipher = None
    SQLCIPHER_AVAILABLE = False

logger = get_logger(__name__)


class ThreadLocalConnection:
    """One connection per thread; the UI loads credits from worker threads."""

    def __init__(self, database: DatabaseConfig):
        self._database = database
        self._local = threading.local()

    def _connect(self) -> sqlite3.Connection:
        path = Path(self._database.path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if SQLCIPHER_AVAILABLE:
            connection = sqlcipher.connect(str(path), check_same_thread=False)
            key = get_required_env(self._database.key_env).replace("'", "''")
            connection.execute(f"PRAGMA key = '{key}'")
            connection.execute("PRAGMA cipher_compatibility = 4")
        elif self._database.allow_sqlite_fallback:
            logger.warning("SQLCipher unavailable, opening %s as plain SQLite", path)
            connection = sqlite3.connect(str(path), check_same_thread=False)
        else:
            raise ConfigurationError(
                "SQLCipher is required but unavailable. Install pysqlcipher3 or set "
                "db.allow_sqlite_fallback."
            )

        # credits.customer_id references customers(id)
        connection.execute("PRAGMA foreign_keys = ON")
        connection.row_factory = sqlite3.Row
        logger.debug("Opened connection to %s on %s", path, threading.current_thread().name)
        return connection

    @property
    def connection(self) -> sqlite3.Connection:
        connection = getattr(self._local, "connection", None)
        if connection is None:
            connection = self._local.connection = self._connect()
        return connection

    def execute(self, query: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        """Run a write in its own transaction; rolled back if the statement fails."""
        with self.connection as connection:
            return connection.execute(query, params)

    def fetch_all(self, query: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        return self.connection.execute(query, params).fetchall()

    def fetch_one(self, query: str, params: tuple[Any, ...] = ()) -> sqlite3.Row | None:
        return self.connection.execute(query, params).fetchone()
