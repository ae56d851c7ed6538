"""Per-entity record storage.

Every persisted entity is one row keyed by ``(kind, id)`` holding its JSON
document, so a mutation rewrites only the records it touches. Rows also carry
the owning project and a position used to keep list order stable.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from smartset.config import get_logger
from smartset.storage.connection import DatabaseConnection

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS records (
    kind TEXT NOT NULL,
    id TEXT NOT NULL,
    project_id TEXT,
    position INTEGER NOT NULL DEFAULT 0,
    data TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (kind, id)
);
CREATE INDEX IF NOT EXISTS idx_records_project
    ON records (kind, project_id, position);
"""


def _now() -> str:
    return datetime.now(UTC).isoformat()


class RecordStore:
    """Minimal get/put/delete storage of JSON documents by entity id."""

    def __init__(self, connection: DatabaseConnection) -> None:
        """Initialize record store.

        Args:
            connection: Database connection instance
        """
        self.connection = connection

    def initialize(self) -> None:
        """Create the records table if it does not exist."""
        with self.connection.get_connection() as conn:
            conn.executescript(SCHEMA)
        logger.debug("Record store initialized", path=self.connection.db_path)

    def get(self, kind: str, record_id: str) -> dict[str, Any] | None:
        """Load one record.

        Args:
            kind: Entity kind
            record_id: Entity id

        Returns:
            Decoded document or None if absent
        """
        row = self.connection.fetch_one(
            "SELECT data FROM records WHERE kind = ? AND id = ?",
            (kind, record_id),
        )
        return json.loads(row["data"]) if row else None

    def list(self, kind: str, project_id: str | None = None) -> list[dict[str, Any]]:
        """Load all records of a kind, optionally restricted to one project.

        Records come back in insertion/replacement order.
        """
        if project_id is None:
            rows = self.connection.fetch_all(
                "SELECT data FROM records WHERE kind = ? ORDER BY position, rowid",
                (kind,),
            )
        else:
            rows = self.connection.fetch_all(
                """
                SELECT data FROM records
                WHERE kind = ? AND project_id = ?
                ORDER BY position, rowid
                """,
                (kind, project_id),
            )
        return [json.loads(row["data"]) for row in rows]

    def put(
        self,
        kind: str,
        record_id: str,
        data: dict[str, Any],
        project_id: str | None = None,
    ) -> None:
        """Insert or update one record, keeping the position of existing rows."""
        payload = json.dumps(data, default=str)
        with self.connection.transaction() as conn:
            row = conn.execute(
                """
                SELECT COALESCE(MAX(position), -1) + 1 FROM records
                WHERE kind = ? AND project_id IS ?
                """,
                (kind, project_id),
            ).fetchone()
            conn.execute(
                """
                INSERT INTO records (kind, id, project_id, position, data, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT (kind, id) DO UPDATE SET
                    project_id = excluded.project_id,
                    data = excluded.data,
                    updated_at = excluded.updated_at
                """,
                (kind, record_id, project_id, row[0], payload, _now()),
            )

    def delete(self, kind: str, record_id: str) -> bool:
        """Delete one record.

        Returns:
            True if a record was removed
        """
        with self.connection.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM records WHERE kind = ? AND id = ?",
                (kind, record_id),
            )
            return cursor.rowcount > 0

    def replace_project(
        self,
        kind: str,
        project_id: str,
        records: list[tuple[str, dict[str, Any]]],
    ) -> None:
        """Replace every record of a kind in a project with a new ordered list.

        Args:
            kind: Entity kind
            project_id: Owning project
            records: ``(id, document)`` pairs in display order
        """
        now = _now()
        with self.connection.transaction() as conn:
            conn.execute(
                "DELETE FROM records WHERE kind = ? AND project_id = ?",
                (kind, project_id),
            )
            conn.executemany(
                """
                INSERT INTO records (kind, id, project_id, position, data, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (kind, record_id, project_id, i, json.dumps(data, default=str), now)
                    for i, (record_id, data) in enumerate(records)
                ],
            )
        logger.debug(
            "Replaced project records",
            kind=kind,
            project_id=project_id,
            count=len(records),
        )
