"""Dashboard View: order search landing page after login.

Shows the signed-in user, the most recent login activity, and a
searchable, sortable, paginated order table.

**Thin UI Rule**: Zero business logic.  Form values are validated by
``OrderSearchForm`` and every query runs through ``OrderSearchService``.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Optional

import customtkinter as ctk
from pydantic import ValidationError

from orderdesk.auth import SessionManager
from orderdesk.logger import StructuredLogger
from orderdesk.models.enums import OrderStatus, SortOrder
from orderdesk.models.forms import OrderSearchForm, field_errors
from orderdesk.models.login_record import LoginRecord
from orderdesk.models.order import Order
from orderdesk.models.search_models import PaginatedResponse
from orderdesk.services.activity import ActivityService
from orderdesk.services.order_search import OrderSearchService
from orderdesk.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    ACTIVITY_COLORS,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    DATE_DISPLAY_FORMAT,
    DATE_INPUT_FORMAT_HINT,
    ERROR_TEXT,
    FONT_BODY,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_LABEL,
    FONT_SECTION,
    FONT_SMALL,
    HEADER_BG,
    HEADER_TEXT,
    INPUT_BORDER,
    LOGOUT_HOVER,
    LOGOUT_PRIMARY,
    ORDER_STATUS_COLORS,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    ROW_ALT_BG,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

_ALL_STATUSES: str = "All statuses"

_SORT_FIELDS: dict[str, str] = {
    "Order date": "order_date",
    "Order number": "order_number",
    "Buyer": "buyer_name",
    "Status": "status",
}

_SORT_ORDERS: dict[str, SortOrder] = {
    "Newest / Z-A first": SortOrder.DESC,
    "Oldest / A-Z first": SortOrder.ASC,
}

_TABLE_COLUMNS: tuple[tuple[str, int], ...] = (
    ("ORDER NUMBER", 220),
    ("BUYER", 240),
    ("STATUS", 140),
    ("ORDER DATE", 200),
)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp for display, e.g. ``Feb 26, 2024 08:50``."""
    return value.strftime(DATE_DISPLAY_FORMAT)


class DashboardView(ctk.CTkFrame):
    """Order search dashboard.

    Parameters
    ----------
    parent:
        The root window or container frame.
    session:
        Used to read the current user's identity.
    order_search:
        Loads the orders and answers search requests.
    activity:
        Source of the recent login activity panel.
    on_logout:
        Callback invoked when the user clicks *Log out*.
    logger:
        Structured logger instance.
    recent_limit:
        Number of activity entries shown.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        session: SessionManager,
        order_search: OrderSearchService,
        activity: ActivityService,
        on_logout: Callable[[], None],
        logger: StructuredLogger,
        recent_limit: int = 5,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)
        self._session = session
        self._order_search = order_search
        self._activity = activity
        self._on_logout = on_logout
        self._logger = logger
        self._recent_limit = recent_limit

        self._page: int = 1
        self._loading: bool = False
        self._has_next: bool = False
        self._has_previous: bool = False

        # Search form widgets
        self._query_entry: Optional[ctk.CTkEntry] = None
        self._buyer_entry: Optional[ctk.CTkEntry] = None
        self._order_number_entry: Optional[ctk.CTkEntry] = None
        self._date_from_entry: Optional[ctk.CTkEntry] = None
        self._date_to_entry: Optional[ctk.CTkEntry] = None
        self._status_menu: Optional[ctk.CTkOptionMenu] = None
        self._sort_field_menu: Optional[ctk.CTkOptionMenu] = None
        self._sort_order_menu: Optional[ctk.CTkOptionMenu] = None
        self._search_button: Optional[ctk.CTkButton] = None
        self._reset_button: Optional[ctk.CTkButton] = None

        # Result widgets
        self._activity_frame: Optional[ctk.CTkFrame] = None
        self._table: Optional[ctk.CTkScrollableFrame] = None
        self._page_label: Optional[ctk.CTkLabel] = None
        self._prev_button: Optional[ctk.CTkButton] = None
        self._next_button: Optional[ctk.CTkButton] = None
        self._error_label: Optional[ctk.CTkLabel] = None

        self._build_ui()
        self._load_initial_data()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self._build_header()

        body = ctk.CTkFrame(self, fg_color="transparent")
        body.pack(fill="both", expand=True, padx=PADDING_LG, pady=PADDING_MD)
        body.grid_columnconfigure(0, weight=0)
        body.grid_columnconfigure(1, weight=1)
        body.grid_rowconfigure(0, weight=1)

        self._build_activity_panel(body)

        main = ctk.CTkFrame(body, fg_color="transparent")
        main.grid(row=0, column=1, sticky="nsew")
        self._build_search_form(main)
        self._build_results(main)

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, fg_color=HEADER_BG, corner_radius=0, height=64)
        header.pack(fill="x")
        header.pack_propagate(False)

        user = self._session.current_user
        name = user.full_name if user is not None else "there"
        ctk.CTkLabel(
            header,
            text=f"Welcome, {name}",
            font=FONT_HEADING,
            text_color=TEXT_LIGHT,
        ).pack(side="left", padx=PADDING_LG)

        if user is not None:
            ctk.CTkLabel(
                header,
                text=user.email,
                font=FONT_SMALL,
                text_color=HEADER_TEXT,
            ).pack(side="left")

        ctk.CTkButton(
            header,
            text="Log out",
            font=FONT_BUTTON,
            fg_color=LOGOUT_PRIMARY,
            hover_color=LOGOUT_HOVER,
            text_color=TEXT_LIGHT,
            width=100,
            corner_radius=CORNER_RADIUS,
            command=self._on_logout,
        ).pack(side="right", padx=PADDING_LG)

    def _build_activity_panel(self, parent: ctk.CTkFrame) -> None:
        card = ctk.CTkFrame(parent, fg_color=CONTENT_CARD_BG, corner_radius=CORNER_RADIUS, width=300)
        card.grid(row=0, column=0, sticky="nsw", padx=(0, PADDING_MD))
        card.grid_propagate(False)

        ctk.CTkLabel(
            card,
            text="Recent activity",
            font=FONT_SECTION,
            text_color=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", padx=PADDING_MD, pady=(PADDING_MD, PADDING_SM))

        self._activity_frame = ctk.CTkFrame(card, fg_color="transparent")
        self._activity_frame.pack(fill="both", expand=True, padx=PADDING_MD)

        ctk.CTkLabel(
            self._activity_frame,
            text="Loading...",
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
        ).pack(anchor="w")

    def _labeled_entry(
        self, parent: ctk.CTkFrame, row: int, column: int, label: str, placeholder: str
    ) -> ctk.CTkEntry:
        ctk.CTkLabel(
            parent, text=label, font=FONT_LABEL, text_color=TEXT_PRIMARY, anchor="w"
        ).grid(row=row, column=column, sticky="w", padx=PADDING_SM, pady=(PADDING_SM, 0))
        entry = ctk.CTkEntry(
            parent,
            placeholder_text=placeholder,
            font=FONT_BODY,
            border_color=INPUT_BORDER,
            corner_radius=CORNER_RADIUS,
        )
        entry.grid(row=row + 1, column=column, sticky="ew", padx=PADDING_SM)
        entry.bind("<Return>", lambda _event: self._run_search(page=1))
        return entry

    def _labeled_menu(
        self, parent: ctk.CTkFrame, row: int, column: int, label: str, values: list[str]
    ) -> ctk.CTkOptionMenu:
        ctk.CTkLabel(
            parent, text=label, font=FONT_LABEL, text_color=TEXT_PRIMARY, anchor="w"
        ).grid(row=row, column=column, sticky="w", padx=PADDING_SM, pady=(PADDING_SM, 0))
        menu = ctk.CTkOptionMenu(
            parent,
            values=values,
            font=FONT_BODY,
            fg_color=ACCENT_PRIMARY,
            button_color=ACCENT_PRIMARY,
            button_hover_color=ACCENT_HOVER,
            corner_radius=CORNER_RADIUS,
        )
        menu.set(values[0])
        menu.grid(row=row + 1, column=column, sticky="ew", padx=PADDING_SM)
        return menu

    def _build_search_form(self, parent: ctk.CTkFrame) -> None:
        form = ctk.CTkFrame(parent, fg_color=CONTENT_CARD_BG, corner_radius=CORNER_RADIUS)
        form.pack(fill="x", pady=(0, PADDING_MD))
        for column in range(4):
            form.grid_columnconfigure(column, weight=1)

        self._query_entry = self._labeled_entry(form, 0, 0, "SEARCH", "Any text")
        self._buyer_entry = self._labeled_entry(form, 0, 1, "BUYER", "Buyer name")
        self._order_number_entry = self._labeled_entry(form, 0, 2, "ORDER NUMBER", "ORD-")
        self._status_menu = self._labeled_menu(
            form, 0, 3, "STATUS", [_ALL_STATUSES] + [status.value for status in OrderStatus]
        )

        self._date_from_entry = self._labeled_entry(form, 2, 0, "FROM", DATE_INPUT_FORMAT_HINT)
        self._date_to_entry = self._labeled_entry(form, 2, 1, "TO", DATE_INPUT_FORMAT_HINT)
        self._sort_field_menu = self._labeled_menu(form, 2, 2, "SORT BY", list(_SORT_FIELDS))
        self._sort_order_menu = self._labeled_menu(form, 2, 3, "ORDER", list(_SORT_ORDERS))

        buttons = ctk.CTkFrame(form, fg_color="transparent")
        buttons.grid(row=4, column=0, columnspan=4, sticky="e", padx=PADDING_SM, pady=PADDING_SM)

        self._reset_button = ctk.CTkButton(
            buttons,
            text="Reset",
            font=FONT_BUTTON,
            fg_color="transparent",
            border_width=1,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            hover_color=CONTENT_BG,
            width=90,
            corner_radius=CORNER_RADIUS,
            command=self._reset_form,
        )
        self._reset_button.pack(side="right")
        self._search_button = ctk.CTkButton(
            buttons,
            text="Search",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            width=110,
            corner_radius=CORNER_RADIUS,
            command=lambda: self._run_search(page=1),
        )
        self._search_button.pack(side="right", padx=(0, PADDING_SM))

        self._error_label = ctk.CTkLabel(
            form, text="", font=FONT_SMALL, text_color=ERROR_TEXT, justify="left", anchor="w"
        )
        # Gridded only when there is an error to show

    def _build_results(self, parent: ctk.CTkFrame) -> None:
        card = ctk.CTkFrame(parent, fg_color=CONTENT_CARD_BG, corner_radius=CORNER_RADIUS)
        card.pack(fill="both", expand=True)

        header = ctk.CTkFrame(card, fg_color="transparent")
        header.pack(fill="x", padx=PADDING_MD, pady=(PADDING_MD, 0))
        for column, (title, width) in enumerate(_TABLE_COLUMNS):
            ctk.CTkLabel(
                header, text=title, font=FONT_LABEL, text_color=TEXT_SECONDARY, width=width, anchor="w"
            ).grid(row=0, column=column, sticky="w")

        self._table = ctk.CTkScrollableFrame(card, fg_color="transparent")
        self._table.pack(fill="both", expand=True, padx=PADDING_SM, pady=PADDING_SM)

        pager = ctk.CTkFrame(card, fg_color="transparent")
        pager.pack(fill="x", padx=PADDING_MD, pady=(0, PADDING_MD))

        self._prev_button = ctk.CTkButton(
            pager,
            text="← Previous",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            width=110,
            state="disabled",
            command=lambda: self._run_search(page=self._page - 1),
        )
        self._prev_button.pack(side="left")

        self._next_button = ctk.CTkButton(
            pager,
            text="Next →",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            width=110,
            state="disabled",
            command=lambda: self._run_search(page=self._page + 1),
        )
        self._next_button.pack(side="right")

        self._page_label = ctk.CTkLabel(pager, text="", font=FONT_BODY, text_color=TEXT_SECONDARY)
        self._page_label.pack(side="top")

    # ------------------------------------------------------------------
    # Data loading
    # ------------------------------------------------------------------

    def _load_initial_data(self) -> None:
        """Load orders and recent activity off the main thread.

        Searching stays disabled until the load has been applied.
        """
        self._set_loading(True)

        def worker() -> None:
            loaded = self._order_search.load_orders()
            recent = self._activity.recent(limit=self._recent_limit)

            def apply() -> None:
                self._set_loading(False)
                self._render_activity(recent)
                if loaded.success:
                    self._run_search(page=1)
                else:
                    self._show_error(loaded.error or "Failed to load dashboard data")

            self.after(0, apply)

        threading.Thread(target=worker, name="dashboard-load", daemon=True).start()

    def _collect_form(self, page: int) -> OrderSearchForm:
        """Build an ``OrderSearchForm`` from the widgets.

        Raises
        ------
        pydantic.ValidationError
            When a field (typically a date) does not parse.
        """
        status = self._status_menu.get()
        return OrderSearchForm.model_validate(
            {
                "query": self._query_entry.get(),
                "buyer_name": self._buyer_entry.get(),
                "order_number": self._order_number_entry.get(),
                "status": None if status == _ALL_STATUSES else status,
                "date_from": self._date_from_entry.get(),
                "date_to": self._date_to_entry.get(),
                "sort_by": _SORT_FIELDS[self._sort_field_menu.get()],
                "sort_order": _SORT_ORDERS[self._sort_order_menu.get()],
                "page": page,
            }
        )

    def _run_search(self, page: int) -> None:
        """Validate the form and render the requested page."""
        if page < 1 or self._loading:
            return
        try:
            form = self._collect_form(page)
        except ValidationError as exc:
            self._show_error("\n".join(e.message for e in field_errors(exc)))
            return

        self._clear_error()
        response = self._order_search.search(form)
        if not response.success:
            self._show_error(response.error or "Search failed")
            return
        self._render_results(response)

    def _set_loading(self, loading: bool) -> None:
        self._loading = loading
        state = "disabled" if loading else "normal"
        for button in (self._search_button, self._reset_button):
            if button is not None:
                button.configure(state=state)
        if loading:
            self._prev_button.configure(state="disabled")
            self._next_button.configure(state="disabled")
            self._page_label.configure(text="Loading orders...")

    def _reset_form(self) -> None:
        for entry in (
            self._query_entry,
            self._buyer_entry,
            self._order_number_entry,
            self._date_from_entry,
            self._date_to_entry,
        ):
            entry.delete(0, "end")
        self._status_menu.set(_ALL_STATUSES)
        self._sort_field_menu.set(next(iter(_SORT_FIELDS)))
        self._sort_order_menu.set(next(iter(_SORT_ORDERS)))
        self._run_search(page=1)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_activity(self, records: list[LoginRecord]) -> None:
        for child in self._activity_frame.winfo_children():
            child.destroy()

        if not records:
            ctk.CTkLabel(
                self._activity_frame,
                text="No recent activity.",
                font=FONT_SMALL,
                text_color=TEXT_SECONDARY,
            ).pack(anchor="w")
            return

        for record in records:
            row = ctk.CTkFrame(self._activity_frame, fg_color="transparent")
            row.pack(fill="x", pady=(0, PADDING_SM))
            ctk.CTkLabel(
                row,
                text=str(record.activity_type),
                font=FONT_LABEL,
                text_color=ACTIVITY_COLORS.get(str(record.activity_type), TEXT_PRIMARY),
                anchor="w",
            ).pack(fill="x")
            ctk.CTkLabel(
                row,
                text=format_timestamp(record.timestamp),
                font=FONT_SMALL,
                text_color=TEXT_PRIMARY,
                anchor="w",
            ).pack(fill="x")
            if record.ip_address:
                ctk.CTkLabel(
                    row,
                    text=record.ip_address,
                    font=FONT_SMALL,
                    text_color=TEXT_SECONDARY,
                    anchor="w",
                ).pack(fill="x")

    def _render_results(self, response: PaginatedResponse[Order]) -> None:
        for child in self._table.winfo_children():
            child.destroy()

        if not response.data:
            ctk.CTkLabel(
                self._table,
                text="No orders match your search.",
                font=FONT_BODY,
                text_color=TEXT_SECONDARY,
            ).grid(row=0, column=0, columnspan=len(_TABLE_COLUMNS), pady=PADDING_LG)

        for index, order in enumerate(response.data):
            background = ROW_ALT_BG if index % 2 else CONTENT_CARD_BG
            cells = (
                (order.order_number, TEXT_PRIMARY),
                (order.buyer_name, TEXT_PRIMARY),
                (order.status.value, ORDER_STATUS_COLORS.get(order.status.value, TEXT_PRIMARY)),
                (format_timestamp(order.order_date), TEXT_SECONDARY),
            )
            for column, ((text, color), (_, width)) in enumerate(zip(cells, _TABLE_COLUMNS)):
                ctk.CTkLabel(
                    self._table,
                    text=text,
                    font=FONT_BODY,
                    text_color=color,
                    fg_color=background,
                    width=width,
                    anchor="w",
                ).grid(row=index, column=column, sticky="ew", pady=1)

        meta = response.meta
        if meta is None:
            return
        self._page = meta.current_page
        self._has_next = meta.has_next_page
        self._has_previous = meta.has_previous_page
        self._page_label.configure(
            text=(
                f"Page {meta.current_page} of {max(meta.total_pages, 1)}"
                f"  ·  {meta.total_items} order(s)"
            )
        )
        self._prev_button.configure(state="normal" if self._has_previous else "disabled")
        self._next_button.configure(state="normal" if self._has_next else "disabled")

    def _show_error(self, message: str) -> None:
        if self._error_label is not None:
            self._error_label.configure(text=message)
            self._error_label.grid(row=5, column=0, columnspan=4, sticky="w", padx=PADDING_SM, pady=(0, PADDING_SM))

    def _clear_error(self) -> None:
        if self._error_label is not None:
            self._error_label.configure(text="")
            self._error_label.grid_forget()
