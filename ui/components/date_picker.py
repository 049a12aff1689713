import customtkinter as ctk
from tkcalendar import Calendar
import tkinter as tk
from datetime import date
from utils.date_helpers import parse_display_date, format_date, format_display_date


class DatePickerWidget(ctk.CTkFrame):
    """Entry showing DD/MM/YYYY plus a calendar popup.

    .get() returns YYYY-MM-DD for storage, or '' when the entry is empty
    or unreadable.
    """

    def __init__(self, master, initial_date: str | None = None, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self._popup: ctk.CTkToplevel | None = None

        self._var = tk.StringVar(
            value=format_display_date(initial_date) if initial_date else ""
        )
        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=110)
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._on_focus_out)

        ctk.CTkButton(
            self, text="📅", width=32, command=self._toggle_popup
        ).grid(row=0, column=1, padx=(4, 0))

    def get(self) -> str:
        d = parse_display_date(self._var.get())
        return format_date(d) if d else ""

    def set(self, date_str: str):
        self._var.set(format_display_date(date_str) if date_str else "")
        self._mark_valid(True)

    def is_empty(self) -> bool:
        return not self._var.get().strip()

    def is_valid(self) -> bool:
        return parse_display_date(self._var.get()) is not None

    def _on_focus_out(self, _event=None):
        if self.is_empty():
            self._mark_valid(True)
            return
        d = parse_display_date(self._var.get())
        if d:
            self._var.set(format_display_date(format_date(d)))
        self._mark_valid(d is not None)

    def _mark_valid(self, valid: bool):
        self._entry.configure(
            border_color=("gray65", "gray35") if valid else "#F44336"
        )

    def _toggle_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._close_popup()
            return

        current = parse_display_date(self._var.get()) or date.today()
        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        self._popup = popup

        is_dark = ctk.get_appearance_mode() == "Dark"
        bg, fg = ("#2b2b2b", "#ffffff") if is_dark else ("#ffffff", "#000000")
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            locale="pt_BR",
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground="#1f6aa5",
            othermonthforeground="gray60",
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda _e: self._on_selected(cal.get_date()))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

    def _on_selected(self, iso: str):
        self.set(iso)
        self._close_popup()

    def _close_popup(self):
        if self._popup is not None:
            self._popup.destroy()
            self._popup = None
