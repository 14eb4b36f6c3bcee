"""
Application Configuration.

Pydantic Settings model for the OrderDesk application.
All configuration is loaded from environment variables and .env files.
Inject an AppConfig instance via dependency injection where needed.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

_PACKAGED_FIXTURES: Path = Path(__file__).resolve().parent / "data"


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Local storage ---
    SQLITE_PATH: str = "orderdesk_local.db"
    SESSION_STORAGE_KEY: str = "orderdesk_user"

    # --- Mock API ---
    FIXTURES_DIR: Path = Field(default_factory=lambda: _PACKAGED_FIXTURES)
    API_DELAY_S: float = Field(default=0.5, ge=0)

    # --- Search / dashboard ---
    DEFAULT_PAGE_SIZE: int = Field(default=10, ge=1)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1)
    RECENT_ACTIVITY_LIMIT: int = Field(default=5, ge=1)

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "orderdesk.log"
    LOG_MAX_BYTES: int = 5_242_880  # 5 MB
    LOG_BACKUP_COUNT: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _warn_missing_env(self) -> "AppConfig":
        """Emit a startup warning when configuration looks incomplete.

        Pydantic silently falls back to defaults when ``.env`` is missing,
        and a mistyped ``FIXTURES_DIR`` only surfaces later as empty
        dashboards.  Both are reported here for first-run diagnostics.
        """
        _log = logging.getLogger("orderdesk.config")

        if not Path(".env").exists():
            _log.info(
                "No .env file found; all configuration loaded from "
                "environment variables or defaults."
            )

        if not self.FIXTURES_DIR.is_dir():
            _log.warning(
                "FIXTURES_DIR '%s' does not exist; the mock API will "
                "report every dataset as unavailable.",
                self.FIXTURES_DIR,
            )

        if self.DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            _log.warning(
                "DEFAULT_PAGE_SIZE (%d) exceeds MAX_PAGE_SIZE (%d).",
                self.DEFAULT_PAGE_SIZE,
                self.MAX_PAGE_SIZE,
            )

        return self


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    Uses a check-lock-check pattern to avoid the lock overhead on the
    fast path while remaining thread-safe during first initialisation.
    Prefer constructor injection of ``AppConfig`` in new code.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = AppConfig()
    return _config_instance
