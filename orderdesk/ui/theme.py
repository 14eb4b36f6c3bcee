"""UI Theme Constants for OrderDesk.

Centralises all colour, font, and sizing constants for the
CustomTkinter interface.

This file contains **zero logic**; only ``Final`` constants.
"""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

HEADER_BG: Final[str] = "#1a1a2e"
HEADER_TEXT: Final[str] = "#e0e0e0"

CONTENT_BG: Final[str] = "#f0f0f0"
CONTENT_CARD_BG: Final[str] = "#ffffff"
ROW_ALT_BG: Final[str] = "#f8f9fa"

ACCENT_PRIMARY: Final[str] = "#5B4FCF"
ACCENT_HOVER: Final[str] = "#4A3FBF"
TEXT_PRIMARY: Final[str] = "#1a1a2e"
TEXT_SECONDARY: Final[str] = "#6c757d"
TEXT_LIGHT: Final[str] = "#ffffff"

# Input / form
INPUT_BG: Final[str] = "#ffffff"
INPUT_BORDER: Final[str] = "#ced4da"
ERROR_TEXT: Final[str] = "#dc3545"
SUCCESS_TEXT: Final[str] = "#27ae60"

# Tab / interactive
TAB_HOVER: Final[str] = "#f0f0f0"
LOGOUT_PRIMARY: Final[str] = "#e74c3c"
LOGOUT_HOVER: Final[str] = "#c0392b"

# Order status badges (keyed by ``OrderStatus`` value)
ORDER_STATUS_COLORS: Final[dict[str, str]] = {
    "PENDING": "#f39c12",
    "PROCESSING": "#3498db",
    "SHIPPED": "#8e44ad",
    "DELIVERED": "#27ae60",
    "CANCELLED": "#e74c3c",
}

# Activity badges (keyed by ``ActivityType`` value)
ACTIVITY_COLORS: Final[dict[str, str]] = {
    "LOGIN": "#27ae60",
    "LOGOUT": "#6c757d",
}

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------

FONT_FAMILY: Final[str] = "Segoe UI"
FONT_BRAND: Final[tuple[str, int, str]] = (FONT_FAMILY, 22, "bold")
FONT_HEADING: Final[tuple[str, int, str]] = (FONT_FAMILY, 20, "bold")
FONT_SECTION: Final[tuple[str, int, str]] = (FONT_FAMILY, 15, "bold")
FONT_SUBTITLE: Final[tuple[str, int]] = (FONT_FAMILY, 12)
FONT_BODY: Final[tuple[str, int]] = (FONT_FAMILY, 13)
FONT_LABEL: Final[tuple[str, int, str]] = (FONT_FAMILY, 11, "bold")
FONT_SMALL: Final[tuple[str, int]] = (FONT_FAMILY, 11)
FONT_CAPTION: Final[tuple[str, int]] = (FONT_FAMILY, 10)
FONT_BUTTON: Final[tuple[str, int, str]] = (FONT_FAMILY, 13, "bold")

# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------

DATE_DISPLAY_FORMAT: Final[str] = "%b %d, %Y %H:%M"
DATE_INPUT_FORMAT_HINT: Final[str] = "YYYY-MM-DD"

# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------

LOGIN_WINDOW_WIDTH: Final[int] = 480
LOGIN_WINDOW_HEIGHT: Final[int] = 760
MAIN_WINDOW_WIDTH: Final[int] = 1200
MAIN_WINDOW_HEIGHT: Final[int] = 780
CORNER_RADIUS: Final[int] = 8
PADDING_SM: Final[int] = 8
PADDING_MD: Final[int] = 16
PADDING_LG: Final[int] = 24
