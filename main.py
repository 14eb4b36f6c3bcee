"""
OrderDesk Desktop Application Entry Point.

Bootstraps the entire dependency graph via constructor injection,
initialises the local SQLite schema, restores any persisted login, and
launches the CustomTkinter GUI.  Every subsystem is wired here; there
are no module-level globals.

Usage::

    python main.py
"""

from __future__ import annotations

import atexit
import sys
import traceback
from pathlib import Path

from orderdesk.auth import SessionManager
from orderdesk.config import get_config
from orderdesk.database import DatabaseManager
from orderdesk.logger import StructuredLogger, get_logger
from orderdesk.schema import initialize_schema
from orderdesk.services import create_services
from orderdesk.ui.app_shell import AppShell


def main() -> None:
    """Application entry point: wire dependencies and launch the GUI."""
    logger: StructuredLogger = get_logger("main")
    logger.info("Starting OrderDesk...")

    # ------------------------------------------------------------------
    # 1. Configuration (from .env / environment variables)
    # ------------------------------------------------------------------
    config = get_config()

    # ------------------------------------------------------------------
    # 2. Local storage
    # ------------------------------------------------------------------
    db = DatabaseManager(
        sqlite_path=Path(config.SQLITE_PATH),
        logger=StructuredLogger(name="database"),
    )

    # close() is idempotent; the explicit close below may run first.
    atexit.register(db.close)

    # ------------------------------------------------------------------
    # 3. SQLite Schema Initialization (idempotent)
    # ------------------------------------------------------------------
    initialize_schema(db.sqlite, StructuredLogger(name="schema"))

    # ------------------------------------------------------------------
    # 4. Session + services
    # ------------------------------------------------------------------
    session = SessionManager()
    services = create_services(db=db, config=config, session=session)

    restored = services["auth_service"].restore_session()
    if restored is not None:
        logger.info("Resuming session for %s.", restored.email)

    # ------------------------------------------------------------------
    # 5. Launch the GUI (blocks until window closes)
    # ------------------------------------------------------------------
    logger.info("Launching GUI...")
    app = AppShell(
        config=config,
        session=session,
        services=services,
        logger=get_logger("ui"),
    )
    try:
        app.mainloop()
    finally:
        db.close()
        logger.info("OrderDesk shut down.")


def _show_fatal_error(exc: BaseException) -> None:
    """Display a fatal-error dialog so double-click users get feedback.

    Uses ``tkinter.messagebox`` (stdlib) rather than CustomTkinter so
    the dialog works even when CTk initialisation itself is the thing
    that failed.
    """
    detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    try:
        import tkinter
        from tkinter import messagebox

        # messagebox needs a (hidden) root window when no Tk instance exists.
        root = tkinter.Tk()
        root.withdraw()
        messagebox.showerror(
            title="OrderDesk: Fatal Error",
            message=(
                "The application encountered an unexpected error and "
                "cannot continue.\n\n"
                f"{type(exc).__name__}: {exc}"
            ),
            detail=detail,
        )
        root.destroy()
    except Exception:
        # Headless environment or missing Tcl/Tk: fall back to stderr.
        sys.stderr.write(
            f"FATAL: {type(exc).__name__}: {exc}\n{detail}"
        )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        _show_fatal_error(exc)
        sys.exit(1)
