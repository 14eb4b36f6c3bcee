"""
Persisted Session Store.

Keeps the logged-in identity across application restarts by storing the
``AuthUser`` as JSON in the ``app_settings`` table under a fixed key.

Reads are a typed boundary: the stored text is validated against
``AuthUser`` and any failure (unreadable storage, invalid JSON, schema
mismatch) removes the entry and reports the user as logged out.
Nothing here raises to the caller.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from orderdesk.logger import StructuredLogger
from orderdesk.models.auth_models import AuthUser
from orderdesk.services.app_settings_service import AppSettingsService
from orderdesk.services.base_service import BaseService


class SessionStoreService(BaseService):
    """Load, save and clear the persisted ``AuthUser``.

    Parameters
    ----------
    settings:
        Key-value store backing the session entry.
    storage_key:
        The ``app_settings`` key holding the serialised identity.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        settings: AppSettingsService,
        storage_key: str,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(logger)
        self._settings: AppSettingsService = settings
        self._key: str = storage_key

    @property
    def storage_key(self) -> str:
        return self._key

    def load(self) -> Optional[AuthUser]:
        """Return the stored identity, or ``None`` when absent or unusable."""
        try:
            raw = self._settings.get(self._key)
        except Exception as exc:
            self._logger.warning("Could not read stored session: %s", exc)
            self._discard()
            return None

        if raw is None:
            return None

        try:
            return AuthUser.model_validate_json(raw)
        except ValidationError as exc:
            self._logger.warning(
                "Discarding invalid stored session (%d error(s)).",
                exc.error_count(),
            )
            self._discard()
            return None

    def save(self, user: AuthUser) -> bool:
        """Persist *user*.  Returns ``False`` when storage fails."""
        saved = self._settings.set(self._key, user.model_dump_json())
        if not saved:
            self._logger.warning("Session for user %s was not persisted.", user.id)
        return saved

    def clear(self) -> None:
        """Remove the persisted identity, if any."""
        if not self._settings.delete(self._key):
            self._logger.warning("Stored session could not be removed.")

    def _discard(self) -> None:
        self._settings.delete(self._key)
