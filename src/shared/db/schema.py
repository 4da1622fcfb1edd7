"""Database schema initialization for the Elucidation service."""
from __future__ import annotations

from src.shared.db.connection import ConnectionPool


def init_elucidation_db(pool: ConnectionPool) -> None:
    """Create the connection event and tracked identifier tables."""
    conn = pool.get()
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS connection_events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            service_name TEXT NOT NULL,
            event_direction TEXT NOT NULL
                CHECK(event_direction IN ('INBOUND','OUTBOUND')),
            communication_type TEXT NOT NULL,
            connection_identifier TEXT NOT NULL,
            observed_at INTEGER NOT NULL,
            UNIQUE(service_name, event_direction, communication_type, connection_identifier)
        );
        CREATE INDEX IF NOT EXISTS idx_events_service ON connection_events(service_name);
        CREATE INDEX IF NOT EXISTS idx_events_counterpart
            ON connection_events(event_direction, communication_type, connection_identifier);
        CREATE INDEX IF NOT EXISTS idx_events_identifier ON connection_events(connection_identifier);
        CREATE INDEX IF NOT EXISTS idx_events_observed ON connection_events(observed_at);

        CREATE TABLE IF NOT EXISTS tracked_connection_identifiers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            service_name TEXT NOT NULL,
            communication_type TEXT NOT NULL,
            connection_identifier TEXT NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_tracked_service_type
            ON tracked_connection_identifiers(service_name, communication_type);
    """)
    conn.commit()
