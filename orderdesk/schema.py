"""
Centralized SQLite Schema Initialization.

Defines the canonical schema for the OrderDesk local database and provides
a single entry-point -- :func:`initialize_schema` -- that creates all
required tables idempotently.  A ``schema_version`` table records the
applied version so that start-up can skip work on an up-to-date database.

Usage::

    from orderdesk.schema import initialize_schema

    initialize_schema(db.sqlite, StructuredLogger(name="schema"))
"""

from __future__ import annotations

import sqlite3

from orderdesk.logger import StructuredLogger

__all__ = ["CURRENT_SCHEMA_VERSION", "initialize_schema"]

CURRENT_SCHEMA_VERSION: int = 1

_TABLE_DEFINITIONS: list[str] = [
    # -- single-row version tracker -------------------------------------------
    """
    CREATE TABLE IF NOT EXISTS schema_version (
        id INTEGER PRIMARY KEY CHECK (id = 1),
        version INTEGER NOT NULL,
        applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    # -- app_settings (key-value local storage) -------------------------------
    """
    CREATE TABLE IF NOT EXISTS app_settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


def _ensure_version_table(conn: sqlite3.Connection) -> None:
    """Create the ``schema_version`` table before any version check."""
    conn.execute(_TABLE_DEFINITIONS[0])
    conn.commit()


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Return the current schema version, or ``0`` if unset."""
    row = conn.execute(
        "SELECT version FROM schema_version WHERE id = 1"
    ).fetchone()
    return row[0] if row is not None else 0


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Upsert the version tracker.  Does **not** commit."""
    conn.execute(
        """
        INSERT INTO schema_version (id, version) VALUES (1, ?)
        ON CONFLICT(id) DO UPDATE SET version = excluded.version,
                                      applied_at = CURRENT_TIMESTAMP
        """,
        (version,),
    )


def initialize_schema(conn: sqlite3.Connection, logger: StructuredLogger) -> None:
    """Create or verify every table in the local database.

    Safe to call on every start-up.  The table creation and the version
    bump run in one transaction; on failure the transaction is rolled
    back and the exception re-raised so the next start-up retries.

    Args:
        conn: An open SQLite connection.
        logger: Structured logger for progress messages.
    """
    _ensure_version_table(conn)
    current: int = _get_schema_version(conn)

    if current >= CURRENT_SCHEMA_VERSION:
        logger.info("Schema is up to date (version %d).", current)
        return

    try:
        for ddl in _TABLE_DEFINITIONS:
            conn.execute(ddl)
        _set_schema_version(conn, CURRENT_SCHEMA_VERSION)
        conn.commit()
    except Exception:
        conn.rollback()
        logger.error(
            "Schema initialisation failed; rolled back to version %d.", current,
        )
        raise

    logger.info("Schema initialised at version %d.", CURRENT_SCHEMA_VERSION)
