"""Tracked connection identifier store backed by SQLite."""
from __future__ import annotations

import logging
import sqlite3
from typing import Sequence

from src.shared.db.connection import ConnectionPool
from src.shared.models.events import TrackedConnectionIdentifier

logger = logging.getLogger(__name__)


class TrackedIdentifierStore:
    """CRUD on the ``tracked_connection_identifiers`` table."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @staticmethod
    def _row_to_identifier(row: sqlite3.Row) -> TrackedConnectionIdentifier:
        return TrackedConnectionIdentifier(
            id=row["id"],
            service_name=row["service_name"],
            communication_type=row["communication_type"],
            connection_identifier=row["connection_identifier"],
        )

    def replace_for_service_and_type(
        self,
        service_name: str,
        communication_type: str,
        connection_identifiers: Sequence[str],
    ) -> int:
        """Replace every identifier stored for *service_name* and *communication_type*.

        The delete and the inserts run in one transaction, so readers never
        see a half-loaded batch and a failed load leaves the old batch intact.
        """
        conn = self._pool.get()
        try:
            cleared = conn.execute(
                """
                DELETE FROM tracked_connection_identifiers
                WHERE service_name = ? AND communication_type = ?
                """,
                (service_name, communication_type),
            ).rowcount
            conn.executemany(
                """
                INSERT INTO tracked_connection_identifiers
                    (service_name, communication_type, connection_identifier)
                VALUES (?, ?, ?)
                """,
                [
                    (service_name, communication_type, identifier)
                    for identifier in connection_identifiers
                ],
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        logger.debug(
            "Replaced tracked identifiers: service=%s type=%s cleared=%d loaded=%d",
            service_name, communication_type, cleared, len(connection_identifiers),
        )
        return len(connection_identifiers)

    def find_all(self) -> list[TrackedConnectionIdentifier]:
        rows = self._pool.get().execute(
            "SELECT * FROM tracked_connection_identifiers ORDER BY id"
        ).fetchall()
        return [self._row_to_identifier(row) for row in rows]

    def find_by_service_name(
        self, service_name: str
    ) -> list[TrackedConnectionIdentifier]:
        rows = self._pool.get().execute(
            "SELECT * FROM tracked_connection_identifiers WHERE service_name = ? ORDER BY id",
            (service_name,),
        ).fetchall()
        return [self._row_to_identifier(row) for row in rows]

    def find_all_service_names(self) -> set[str]:
        rows = self._pool.get().execute(
            "SELECT DISTINCT service_name FROM tracked_connection_identifiers"
        ).fetchall()
        return {row["service_name"] for row in rows}
