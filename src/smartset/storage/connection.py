"""SQLite connection management for the Smart Set record store.

One connection is shared by every caller and guarded by a re-entrant lock:
the store has a single writer and ``:memory:`` databases must be reachable
from the threads FastAPI runs synchronous work on.
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, cast

from smartset.config import get_logger
from smartset.exceptions import StorageError

logger = get_logger(__name__)

MEMORY_DATABASE = ":memory:"


class DatabaseConnection:
    """Manages the SQLite connection backing the production store."""

    def __init__(self, db_path: str | Path, timeout: float = 30.0) -> None:
        """Initialize database connection manager.

        Args:
            db_path: Path to SQLite database file, or ``":memory:"``
            timeout: Seconds to wait on a locked database
        """
        self.db_path = str(db_path)
        self.timeout = timeout
        self._lock = threading.RLock()
        self._connection: sqlite3.Connection | None = None

    @property
    def is_memory(self) -> bool:
        """Whether the database lives only in this process."""
        return self.db_path == MEMORY_DATABASE

    def _get_connection(self) -> sqlite3.Connection:
        """Open the shared connection on first use."""
        if self._connection is None:
            if not self.is_memory:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(
                    self.db_path,
                    timeout=self.timeout,
                    check_same_thread=False,
                    isolation_level=None,  # Autocommit; transactions are explicit
                )
            except sqlite3.Error as e:
                raise StorageError(
                    message=f"Cannot open database: {self.db_path}",
                    hint="Check SMARTSET_DATABASE_PATH and directory permissions",
                    details={"error": str(e)},
                ) from e
            self._configure_connection(conn)
            self._connection = conn
            logger.debug("Opened database connection", path=self.db_path)
        return cast(sqlite3.Connection, self._connection)

    def _configure_connection(self, conn: sqlite3.Connection) -> None:
        """Configure SQLite connection pragmas and row access."""
        if not self.is_memory:
            conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
        conn.execute("PRAGMA temp_store = MEMORY")
        conn.row_factory = sqlite3.Row

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get the shared connection for read operations.

        Yields:
            SQLite connection object
        """
        with self._lock:
            yield self._get_connection()

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Execute operations in a database transaction.

        Yields:
            SQLite connection object in transaction mode

        Raises:
            StorageError: If the transaction cannot be committed
        """
        with self._lock:
            conn = self._get_connection()
            conn.execute("BEGIN")
            try:
                yield conn
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                logger.error("Transaction failed, rolling back", error=str(e))
                conn.execute("ROLLBACK")
                raise StorageError(
                    message="Database write failed",
                    details={"path": self.db_path, "error": str(e)},
                ) from e
            except Exception:
                conn.execute("ROLLBACK")
                raise

    def fetch_one(
        self, sql: str, parameters: tuple[Any, ...] = ()
    ) -> sqlite3.Row | None:
        """Execute query and fetch one result."""
        with self.get_connection() as conn:
            return cast(sqlite3.Row | None, conn.execute(sql, parameters).fetchone())

    def fetch_all(
        self, sql: str, parameters: tuple[Any, ...] = ()
    ) -> list[sqlite3.Row]:
        """Execute query and fetch all results."""
        with self.get_connection() as conn:
            return list(conn.execute(sql, parameters).fetchall())

    def close(self) -> None:
        """Close the shared connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                logger.debug("Closed database connection", path=self.db_path)
