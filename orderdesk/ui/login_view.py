"""Login View: Authentication Screen.

Presents a login card with Sign In / Register tabs.  Signing in accepts
an email address or mobile number; registration collects the account
details and hands them to ``AuthService``.

**Thin UI Rule**: This module contains ZERO business logic.  It
gathers inputs, delegates to ``AuthService``, and displays results.
"""

from __future__ import annotations

import threading
import tkinter as tk
from typing import Callable, Optional

import customtkinter as ctk

from orderdesk.logger import StructuredLogger
from orderdesk.models.auth_models import AuthResult
from orderdesk.services.auth_service import AuthService
from orderdesk.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    ERROR_TEXT,
    FONT_BODY,
    FONT_BRAND,
    FONT_BUTTON,
    FONT_CAPTION,
    FONT_LABEL,
    FONT_SMALL,
    FONT_SUBTITLE,
    INPUT_BG,
    INPUT_BORDER,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    SUCCESS_TEXT,
    TAB_HOVER,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_CARD_WIDTH: int = 420
_TAB_HEIGHT: int = 42
_INPUT_HEIGHT: int = 40
_BUTTON_HEIGHT: int = 46

_SIGN_IN: str = "sign_in"
_REGISTER: str = "register"

# (form field, label, placeholder)
_REGISTRATION_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("first_name", "FIRST NAME", "John"),
    ("last_name", "LAST NAME", "Doe"),
    ("email", "EMAIL ADDRESS", "name@example.com"),
    ("mobile_number", "MOBILE NUMBER", "+15551234567"),
    ("address", "ADDRESS", "123 Main Street, Springfield"),
)


def format_result_errors(result: AuthResult) -> str:
    """Render an ``AuthResult`` failure as display text, one line per field error."""
    if result.field_errors:
        return "\n".join(f"• {error.message}" for error in result.field_errors)
    return result.error_message or "Something went wrong. Please try again."


class LoginView(ctk.CTkFrame):
    """Full-screen login frame with Sign In / Register tabs.

    Parameters
    ----------
    parent:
        The root ``CTk`` window this frame belongs to.
    auth_service:
        Centralised authentication service encapsulating all auth logic.
    on_login_success:
        Callback invoked (on the main thread) after successful login.
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        auth_service: AuthService,
        on_login_success: Callable[[], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)

        self._auth_service: AuthService = auth_service
        self._on_login_success: Callable[[], None] = on_login_success
        self._logger: StructuredLogger = logger

        self._active_tab: str = _SIGN_IN

        # Sign In widgets
        self._username_entry: Optional[ctk.CTkEntry] = None
        self._password_entry: Optional[ctk.CTkEntry] = None
        self._login_button: Optional[ctk.CTkButton] = None
        self._error_label: Optional[ctk.CTkLabel] = None
        self._info_label: Optional[ctk.CTkLabel] = None

        # Register widgets
        self._register_entries: dict[str, ctk.CTkEntry] = {}
        self._register_button: Optional[ctk.CTkButton] = None
        self._register_error_label: Optional[ctk.CTkLabel] = None

        # Tabs
        self._sign_in_tab: Optional[ctk.CTkButton] = None
        self._register_tab: Optional[ctk.CTkButton] = None
        self._sign_in_frame: Optional[ctk.CTkFrame] = None
        self._register_frame: Optional[ctk.CTkFrame] = None

        self._build_ui()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        """Create the centred login card."""
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)
        self.grid_rowconfigure(2, weight=1)
        self.grid_columnconfigure(0, weight=1)

        card = ctk.CTkFrame(
            self,
            width=_CARD_WIDTH,
            fg_color=CONTENT_CARD_BG,
            corner_radius=16,
            border_width=1,
            border_color="#e0e0e0",
        )
        card.grid(row=1, column=0, pady=PADDING_SM)

        inner = ctk.CTkFrame(card, fg_color="transparent")
        inner.pack(fill="both", expand=True, padx=36, pady=28)

        ctk.CTkLabel(
            inner,
            text="OrderDesk",
            font=FONT_BRAND,
            text_color=TEXT_PRIMARY,
        ).pack(pady=(0, 2))

        ctk.CTkLabel(
            inner,
            text="Sign in to search and track orders",
            font=FONT_SUBTITLE,
            text_color=TEXT_SECONDARY,
        ).pack(pady=(0, PADDING_LG))

        # -- Tab bar --
        tab_bar = ctk.CTkFrame(inner, fg_color="transparent", height=_TAB_HEIGHT)
        tab_bar.pack(fill="x", pady=(0, PADDING_MD))
        tab_bar.pack_propagate(False)
        tab_bar.grid_columnconfigure(0, weight=1)
        tab_bar.grid_columnconfigure(1, weight=1)

        self._sign_in_tab = self._make_tab(tab_bar, "Sign In", _SIGN_IN)
        self._sign_in_tab.grid(row=0, column=0, sticky="nsew")
        self._register_tab = self._make_tab(tab_bar, "Register", _REGISTER)
        self._register_tab.grid(row=0, column=1, sticky="nsew")

        self._sign_in_frame = ctk.CTkFrame(inner, fg_color="transparent")
        self._build_sign_in_tab(self._sign_in_frame)

        self._register_frame = ctk.CTkFrame(inner, fg_color="transparent")
        self._build_register_tab(self._register_frame)

        self._sign_in_frame.pack(fill="both", expand=True)
        self._style_tabs()

        ctk.CTkLabel(
            inner,
            text="Demo mode: any non-empty password is accepted.",
            font=FONT_CAPTION,
            text_color=TEXT_SECONDARY,
        ).pack(side="bottom", pady=(PADDING_SM, 0))

    def _make_tab(self, parent: ctk.CTkFrame, text: str, tab: str) -> ctk.CTkButton:
        return ctk.CTkButton(
            parent,
            text=text,
            font=FONT_BODY,
            fg_color="transparent",
            hover_color=TAB_HOVER,
            text_color=TEXT_SECONDARY,
            height=_TAB_HEIGHT,
            corner_radius=0,
            border_width=1,
            border_color=INPUT_BORDER,
            command=lambda: self._switch_tab(tab),
        )

    def _make_entry(
        self,
        parent: ctk.CTkFrame,
        label: str,
        placeholder: str,
        show: str = "",
    ) -> ctk.CTkEntry:
        ctk.CTkLabel(
            parent,
            text=label,
            font=FONT_LABEL,
            text_color=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", pady=(0, 4))

        entry = ctk.CTkEntry(
            parent,
            placeholder_text=placeholder,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            show=show,
            height=_INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        entry.pack(fill="x", pady=(0, PADDING_SM))
        return entry

    def _make_message_label(self, parent: ctk.CTkFrame, color: str) -> ctk.CTkLabel:
        label = ctk.CTkLabel(
            parent,
            text="",
            font=FONT_SMALL,
            text_color=color,
            justify="left",
            anchor="w",
            wraplength=_CARD_WIDTH - 80,
        )
        # Packed only when there is something to show
        return label

    def _build_sign_in_tab(self, parent: ctk.CTkFrame) -> None:
        """Build the Sign In form fields inside the given parent frame."""
        self._username_entry = self._make_entry(
            parent, "EMAIL OR MOBILE NUMBER", "name@example.com"
        )
        self._password_entry = self._make_entry(
            parent, "PASSWORD", "•" * 8, show="*"
        )

        self._login_button = ctk.CTkButton(
            parent,
            text="Sign In  →",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            height=_BUTTON_HEIGHT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_login,
        )
        self._login_button.pack(fill="x", pady=(PADDING_SM, PADDING_SM))

        self._error_label = self._make_message_label(parent, ERROR_TEXT)
        self._info_label = self._make_message_label(parent, SUCCESS_TEXT)

        self._username_entry.bind("<Return>", self._on_enter_key)
        self._password_entry.bind("<Return>", self._on_enter_key)

    def _build_register_tab(self, parent: ctk.CTkFrame) -> None:
        """Build the registration form."""
        for field, label, placeholder in _REGISTRATION_FIELDS:
            self._register_entries[field] = self._make_entry(parent, label, placeholder)

        self._register_button = ctk.CTkButton(
            parent,
            text="Create Account  →",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            height=_BUTTON_HEIGHT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_register,
        )
        self._register_button.pack(fill="x", pady=(PADDING_SM, PADDING_SM))

        self._register_error_label = self._make_message_label(parent, ERROR_TEXT)

    # ------------------------------------------------------------------
    # Tab switching
    # ------------------------------------------------------------------

    def _switch_tab(self, tab: str) -> None:
        """Switch between Sign In and Register tabs."""
        if tab == self._active_tab:
            return
        self._active_tab = tab
        self._clear_messages()

        if tab == _SIGN_IN:
            self._register_frame.pack_forget()
            self._sign_in_frame.pack(fill="both", expand=True)
        else:
            self._sign_in_frame.pack_forget()
            self._register_frame.pack(fill="both", expand=True)
        self._style_tabs()

    def _style_tabs(self) -> None:
        active, inactive = (
            (self._sign_in_tab, self._register_tab)
            if self._active_tab == _SIGN_IN
            else (self._register_tab, self._sign_in_tab)
        )
        active.configure(
            text_color=ACCENT_PRIMARY,
            border_color=ACCENT_PRIMARY,
            border_width=2,
            font=FONT_BUTTON,
        )
        inactive.configure(
            text_color=TEXT_SECONDARY,
            border_color=INPUT_BORDER,
            border_width=1,
            font=FONT_BODY,
        )

    # ------------------------------------------------------------------
    # Event Handlers: Sign In
    # ------------------------------------------------------------------

    def _on_enter_key(self, event: tk.Event[tk.Misc]) -> None:
        """Trigger the login flow when the user presses Enter."""
        self._handle_login()

    def _handle_login(self) -> None:
        """Gather inputs and start background authentication."""
        username = self._username_entry.get().strip()
        password = self._password_entry.get()

        self._clear_messages()
        self._set_loading(self._login_button, True, "Signing in...")

        threading.Thread(
            target=self._authenticate,
            args=(username, password),
            daemon=True,
        ).start()

    def _authenticate(self, username: str, password: str) -> None:
        """Background thread: delegate to AuthService.login().

        All UI mutations are dispatched back via ``self.after(0, ...)``.
        """
        try:
            result = self._auth_service.login(username, password)
            if result.success:
                self.after(0, self._on_login_success)
            else:
                self.after(0, lambda: self._show(self._error_label, format_result_errors(result)))
        except Exception as exc:
            self._logger.error("Login flow crashed: %s", exc, exc_info=True)
            error_msg = str(exc)
            self.after(
                0,
                lambda msg=error_msg: self._show(self._error_label, f"Login failed: {msg}"),
            )
        finally:
            self.after(
                0, lambda: self._set_loading(self._login_button, False, "Sign In  →")
            )

    # ------------------------------------------------------------------
    # Event Handlers: Register
    # ------------------------------------------------------------------

    def _handle_register(self) -> None:
        """Gather inputs and start background registration."""
        data = {
            field: entry.get().strip() for field, entry in self._register_entries.items()
        }
        self._clear_messages()
        self._set_loading(self._register_button, True, "Creating account...")

        threading.Thread(
            target=self._do_register,
            args=(data,),
            daemon=True,
        ).start()

    def _do_register(self, data: dict[str, str]) -> None:
        """Background thread: delegate to AuthService.register()."""
        try:
            result = self._auth_service.register(data)

            def show_registration_result() -> None:
                if result.success:
                    for entry in self._register_entries.values():
                        entry.delete(0, "end")
                    self._switch_tab(_SIGN_IN)
                    self._username_entry.delete(0, "end")
                    self._username_entry.insert(0, data.get("email", "").lower())
                    self.show_message(result.message or "Account created.")
                else:
                    self._show(self._register_error_label, format_result_errors(result))

            self.after(0, show_registration_result)
        except Exception as exc:
            self._logger.error("Registration flow crashed: %s", exc, exc_info=True)
            error_msg = str(exc)
            self.after(
                0,
                lambda msg=error_msg: self._show(
                    self._register_error_label, f"Registration failed: {msg}"
                ),
            )
        finally:
            self.after(
                0,
                lambda: self._set_loading(
                    self._register_button, False, "Create Account  →"
                ),
            )

    # ------------------------------------------------------------------
    # UI Helper Methods
    # ------------------------------------------------------------------

    def show_message(self, message: str) -> None:
        """Display an informational message on the Sign In tab."""
        self._show(self._info_label, message)

    @staticmethod
    def _show(label: Optional[ctk.CTkLabel], message: str) -> None:
        if label is not None:
            label.configure(text=message)
            label.pack(fill="x", pady=(PADDING_SM, 0))

    def _clear_messages(self) -> None:
        for label in (
            self._error_label,
            self._info_label,
            self._register_error_label,
        ):
            if label is not None:
                label.configure(text="")
                label.pack_forget()

    @staticmethod
    def _set_loading(button: Optional[ctk.CTkButton], loading: bool, text: str) -> None:
        """Disable *button* while a request is in flight to prevent double submits."""
        if button is None:
            return
        button.configure(text=text, state="disabled" if loading else "normal")
