"""
Local Storage Layer.

Owns the single SQLite connection that backs the durable client-side
key-value store (``app_settings``).  The store plays the part a browser's
local storage plays for a web client: it survives restarts, holds small
JSON blobs under fixed keys, and is never treated as authoritative for
domain data.

This module only manages the raw database *connection*; it contains no
query logic.

Usage (dependency injection at app startup)::

    from orderdesk.database import DatabaseManager
    from orderdesk.logger import StructuredLogger

    db = DatabaseManager(
        sqlite_path=Path("orderdesk_local.db"),
        logger=StructuredLogger(name="database"),
    )
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

from orderdesk.logger import StructuredLogger


class DatabaseManager:
    """Manages the connection to the local SQLite database.

    Parameters
    ----------
    sqlite_path:
        Filesystem path for the SQLite database file, or ``":memory:"``
        for a throwaway in-process database.
    logger:
        A ``StructuredLogger`` instance for structured JSON log output.
    """

    def __init__(self, sqlite_path: Path, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger
        self._write_lock: threading.RLock = threading.RLock()
        self._closed: bool = False
        self._sqlite_conn: sqlite3.Connection = self._connect_sqlite(sqlite_path)

    @property
    def sqlite(self) -> sqlite3.Connection:
        """Return the initialised SQLite connection."""
        return self._sqlite_conn

    @property
    def write_lock(self) -> threading.RLock:
        """Return the write lock for thread-safe SQLite operations.

        All code that performs SQLite writes should acquire this lock
        first::

            with db.write_lock:
                db.sqlite.execute("INSERT ...")
                db.sqlite.commit()
        """
        return self._write_lock

    def close(self) -> None:
        """Close the SQLite connection.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        with self._write_lock:
            if self._closed:
                return
            try:
                self._sqlite_conn.close()
                self._logger.info("SQLite connection closed.")
            except sqlite3.ProgrammingError:
                pass
            self._closed = True

    def _connect_sqlite(self, path: Path) -> sqlite3.Connection:
        """Open (or create) a SQLite database.

        Raises
        ------
        PermissionError
            If the OS denies access to the database file or its directory.
            The message is suitable for display to the end user.
        """
        try:
            conn = sqlite3.connect(str(path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL;")
            self._logger.info("SQLite database opened at %s", path)
            return conn
        except PermissionError as exc:
            msg = (
                f"Cannot open the local database at '{path}'. "
                "The file or its directory may be read-only or locked by "
                "another process.  Please check file permissions and try again."
            )
            self._logger.error(msg)
            raise PermissionError(msg) from exc
