"""
Application Settings Service.

Read/write access to the ``app_settings`` key-value table in the local
SQLite database.  This is the durable client-side store behind the
persisted login session (see ``SessionStoreService``)::

    CREATE TABLE IF NOT EXISTS app_settings (
        key   TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

from __future__ import annotations

from typing import Optional

from orderdesk.database import DatabaseManager
from orderdesk.logger import StructuredLogger


class AppSettingsService:
    """Manages persistent key-value state in local SQLite.

    Parameters
    ----------
    db:
        Initialised ``DatabaseManager`` with active SQLite connection.
    logger:
        Structured logger instance.
    """

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        self._db = db
        self._logger = logger

    def get(self, key: str) -> Optional[str]:
        """Read a setting value by key.  Returns ``None`` if not found.

        Raises
        ------
        sqlite3.Error
            When the table cannot be read.  Callers decide whether a
            storage failure is fatal.
        """
        row = self._db.sqlite.execute(
            "SELECT value FROM app_settings WHERE key = ?",
            (key,),
        ).fetchone()
        return row["value"] if row is not None else None

    def set(self, key: str, value: str) -> bool:
        """Upsert a setting value.  Returns ``True`` on success."""
        try:
            with self._db.write_lock:
                self._db.sqlite.execute(
                    """
                    INSERT INTO app_settings (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value      = excluded.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (key, value),
                )
                self._db.sqlite.commit()
            self._logger.info("app_settings[%s] updated.", key)
            return True
        except Exception as exc:
            self._logger.error("Failed to write app_settings[%s]: %s", key, exc)
            return False

    def delete(self, key: str) -> bool:
        """Remove a setting.  Returns ``True`` on success (including absent keys)."""
        try:
            with self._db.write_lock:
                self._db.sqlite.execute(
                    "DELETE FROM app_settings WHERE key = ?",
                    (key,),
                )
                self._db.sqlite.commit()
            self._logger.info("app_settings[%s] removed.", key)
            return True
        except Exception as exc:
            self._logger.error("Failed to delete app_settings[%s]: %s", key, exc)
            return False
