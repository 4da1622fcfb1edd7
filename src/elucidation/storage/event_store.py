"""Connection event store -- queries on the ``connection_events`` SQLite table."""
from __future__ import annotations

import logging
import sqlite3

from src.shared.db.connection import ConnectionPool
from src.shared.models.events import ConnectionEvent, Direction
from src.shared.utils import now_millis

logger = logging.getLogger(__name__)


class ConnectionEventStore:
    """SQLite implementation of the event store."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_event(row: sqlite3.Row) -> ConnectionEvent:
        """Convert a ``sqlite3.Row`` into a :class:`ConnectionEvent`."""
        return ConnectionEvent(
            id=row["id"],
            service_name=row["service_name"],
            event_direction=Direction(row["event_direction"]),
            communication_type=row["communication_type"],
            connection_identifier=row["connection_identifier"],
            observed_at=row["observed_at"],
        )

    def _query(self, sql: str, params: tuple = ()) -> list[ConnectionEvent]:
        rows = self._pool.get().execute(sql, params).fetchall()
        return [self._row_to_event(row) for row in rows]

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------

    def insert(self, event: ConnectionEvent) -> int:
        conn = self._pool.get()
        cursor = conn.execute(
            """
            INSERT INTO connection_events
                (service_name, event_direction, communication_type,
                 connection_identifier, observed_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.service_name,
                event.event_direction.value,
                event.communication_type,
                event.connection_identifier,
                event.observed_at,
            ),
        )
        conn.commit()
        return cursor.lastrowid

    def touch_observed_at(self, event: ConnectionEvent, timestamp: int) -> None:
        conn = self._pool.get()
        conn.execute(
            """
            UPDATE connection_events
            SET observed_at = MAX(observed_at, ?)
            WHERE service_name = ? AND event_direction = ?
              AND communication_type = ? AND connection_identifier = ?
            """,
            (
                timestamp,
                event.service_name,
                event.event_direction.value,
                event.communication_type,
                event.connection_identifier,
            ),
        )
        conn.commit()

    def create_or_update(self, event: ConnectionEvent) -> None:
        """Insert *event* or touch the existing row with the same natural key.

        Uses ``INSERT ... ON CONFLICT(<natural key>) DO UPDATE`` so two
        reporters racing on the same key still end up with a single row. A
        touch sets ``observed_at`` to the current time but never moves it
        backwards.
        """
        conn = self._pool.get()
        conn.execute(
            """
            INSERT INTO connection_events
                (service_name, event_direction, communication_type,
                 connection_identifier, observed_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(service_name, event_direction, communication_type,
                        connection_identifier) DO UPDATE SET
                observed_at = MAX(connection_events.observed_at, ?)
            """,
            (
                event.service_name,
                event.event_direction.value,
                event.communication_type,
                event.connection_identifier,
                event.observed_at,
                now_millis(),
            ),
        )
        conn.commit()

    def delete_older_than(self, timestamp: int) -> int:
        conn = self._pool.get()
        cursor = conn.execute(
            "DELETE FROM connection_events WHERE observed_at < ?",
            (timestamp,),
        )
        conn.commit()
        return cursor.rowcount

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    def find_by_natural_key(
        self,
        service_name: str,
        event_direction: Direction,
        communication_type: str,
        connection_identifier: str,
    ) -> ConnectionEvent | None:
        row = self._pool.get().execute(
            """
            SELECT * FROM connection_events
            WHERE service_name = ? AND event_direction = ?
              AND communication_type = ? AND connection_identifier = ?
            """,
            (service_name, event_direction.value, communication_type, connection_identifier),
        ).fetchone()
        return self._row_to_event(row) if row is not None else None

    def find_by_service_name(self, service_name: str) -> list[ConnectionEvent]:
        return self._query(
            "SELECT * FROM connection_events WHERE service_name = ? ORDER BY id",
            (service_name,),
        )

    def find_by_direction_and_identifier(
        self,
        event_direction: Direction,
        communication_type: str,
        connection_identifier: str,
    ) -> list[ConnectionEvent]:
        return self._query(
            """
            SELECT * FROM connection_events
            WHERE event_direction = ? AND communication_type = ?
              AND connection_identifier = ?
            ORDER BY id
            """,
            (event_direction.value, communication_type, connection_identifier),
        )

    def find_all_service_names(self) -> set[str]:
        rows = self._pool.get().execute(
            "SELECT DISTINCT service_name FROM connection_events"
        ).fetchall()
        return {row["service_name"] for row in rows}

    def find_by_connection_identifier(
        self, connection_identifier: str
    ) -> list[ConnectionEvent]:
        return self._query(
            "SELECT * FROM connection_events WHERE connection_identifier = ? ORDER BY id",
            (connection_identifier,),
        )

    def find_since(self, since: int, limit: int) -> list[ConnectionEvent]:
        return self._query(
            """
            SELECT * FROM connection_events
            WHERE observed_at > ?
            ORDER BY observed_at DESC
            LIMIT ?
            """,
            (since, limit),
        )

    def count(self) -> int:
        row = self._pool.get().execute(
            "SELECT COUNT(*) AS cnt FROM connection_events"
        ).fetchone()
        return row["cnt"]
