"""Shared utility functions and models for the OrderDesk application.

Convenience re-exports so consumers can import directly from
``orderdesk.utils`` (e.g. ``from orderdesk.utils import normalize_keys``).
"""

from orderdesk.utils.audit import AuditEvent, log_audit_event
from orderdesk.utils.string_helpers import normalize_keys, to_snake_case

__all__ = [
    "AuditEvent",
    "log_audit_event",
    "normalize_keys",
    "to_snake_case",
]
