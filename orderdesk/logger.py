"""
Structured JSON Logging.

Every OrderDesk component receives a ``StructuredLogger`` through its
constructor.  Output is one JSON object per line, written to stdout and
to a rotating log file, so audit entries (``AUDIT: {...}``) and service
warnings can be grepped or loaded line by line.

Mock API calls, dashboard loads and logout run on worker threads; each
entry names the thread that produced it.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union

from orderdesk.config import get_config

JsonScalar = Union[str, int, float, bool, None]


class JSONFormatter(logging.Formatter):
    """Render a ``LogRecord`` as a single-line JSON object.

    Keys: ``timestamp`` (ISO-8601 UTC), ``level``, ``logger_name``,
    ``thread``, ``message``; plus ``extra`` for caller-supplied context
    and ``exception`` when a traceback is attached.
    """

    _STANDARD_ATTRS: frozenset[str] = frozenset(
        logging.LogRecord(
            name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
        ).__dict__.keys()
    ) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger_name": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }

        extra_fields = {
            key: _json_scalar(value)
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        if extra_fields:
            entry["extra"] = extra_fields

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            entry["exception"] = record.exc_text

        return json.dumps(entry, ensure_ascii=False)


def _json_scalar(value: object) -> JsonScalar:
    # Enum members and other objects fall back to their string form.
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


class StructuredLogger:
    """Injectable JSON logger for OrderDesk services and views.

    Handlers are attached once per logger *name*; constructing a second
    ``StructuredLogger`` with the same name reuses them.  Unset arguments
    fall back to ``AppConfig`` (``LOG_LEVEL``, ``LOG_FILE``,
    ``LOG_MAX_BYTES``, ``LOG_BACKUP_COUNT``).

    Usage::

        log = StructuredLogger(name="orderdesk.search")
        log.info("Orders loaded", extra={"count": 28})
    """

    def __init__(
        self,
        name: str = "orderdesk",
        level: Optional[Union[int, str]] = None,
        stream: Optional[TextIO] = None,
        log_file: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        cfg = get_config()

        resolved_level = _resolve_level(level if level is not None else cfg.LOG_LEVEL)
        self._logger: logging.Logger = logging.getLogger(name)
        self._logger.setLevel(resolved_level)

        if self._logger.handlers:
            return

        formatter = JSONFormatter()

        console = logging.StreamHandler(stream or sys.stdout)
        console.setFormatter(formatter)
        self._logger.addHandler(console)

        target = Path(log_file or cfg.LOG_FILE)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=str(target),
                maxBytes=max_bytes if max_bytes is not None else cfg.LOG_MAX_BYTES,
                backupCount=backup_count if backup_count is not None else cfg.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as exc:
            self._logger.warning(
                "Log file '%s' unavailable (%s); logging to console only.",
                target,
                exc,
            )
            return
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)

    @property
    def logger(self) -> logging.Logger:
        """The underlying ``logging.Logger``."""
        return self._logger

    def debug(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.critical(msg, *args, **kwargs)


def get_logger(name: str = "orderdesk") -> StructuredLogger:
    """Return a ``StructuredLogger`` for *name* configured from ``AppConfig``."""
    return StructuredLogger(name=name)
