import customtkinter as ctk
from models.category import get_category
from models.transaction import Transaction
from services.report_service import ReportService
from services.transaction_service import TransactionService
from ui.components.transaction_form import TransactionForm
from ui.components.confirm_dialog import ConfirmDialog
from utils.constants import TYPE_COLORS
from utils.currency import format_currency, format_signed
from utils.date_helpers import (
    current_month_str, friendly_month, prev_month, next_month,
    format_display_date,
)


_MAX_RENDERED_ROWS = 100

_TYPE_FILTER_LABELS = {
    "Todas": "all",
    "Receitas": "income",
    "Despesas": "expense",
    "Dívidas": "debt",
}


class TransactionsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        report_service: ReportService,
        notify_refresh,   # callable
        is_hidden,        # callable → bool (privacy mode)
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._report_svc = report_service
        self._notify_refresh = notify_refresh
        self._is_hidden = is_hidden

        self._month = current_month_str()
        self._month_var = ctk.StringVar(value=friendly_month(self._month))
        self._type_var = ctk.StringVar(value="Todas")
        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._load())

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_filter_bar()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))
        bar.grid_columnconfigure(4, weight=1)

        ctk.CTkButton(bar, text="◀", width=28, command=self._prev_month).grid(
            row=0, column=0, padx=(8, 0), pady=6
        )
        self._month_label = ctk.CTkLabel(
            bar, textvariable=self._month_var, width=130, anchor="center"
        )
        self._month_label.grid(row=0, column=1, padx=4)
        ctk.CTkButton(bar, text="▶", width=28, command=self._next_month).grid(
            row=0, column=2, padx=(0, 8)
        )

        ctk.CTkSegmentedButton(
            bar,
            values=list(_TYPE_FILTER_LABELS),
            variable=self._type_var,
            command=lambda _: self._load(),
        ).grid(row=0, column=3, padx=8)

        ctk.CTkEntry(
            bar, textvariable=self._search_var,
            placeholder_text="Buscar…", width=180,
        ).grid(row=0, column=5, padx=8)

        ctk.CTkButton(
            bar, text="+ Nova Transação", width=130,
            command=self._open_add_form,
        ).grid(row=0, column=6, padx=(0, 8))

    def _prev_month(self):
        self._month = prev_month(self._month)
        self._load()

    def _next_month(self):
        self._month = next_month(self._month)
        self._load()

    # ── List ────────────────────────────────────────────────────────────────
    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        type_filter = _TYPE_FILTER_LABELS.get(self._type_var.get(), "all")
        self._month_var.set(
            "Todos os meses" if type_filter == "debt" else friendly_month(self._month)
        )
        rows = self._report_svc.get_filtered(
            self._month, type_filter, self._search_var.get().strip()
        )

        if not rows:
            ctk.CTkLabel(
                self._scroll, text="Nenhuma transação registrada.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        overdue_ids = {t.id for t in self._report_svc.get_overdue()}
        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx, tx.id in overdue_ids)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Mostrando {_MAX_RENDERED_ROWS} de {len(rows)} transações. Use a busca para filtrar.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, tx: Transaction, is_overdue: bool):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=6)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)
        row.grid_columnconfigure(2, weight=1)

        paid_var = ctk.BooleanVar(value=tx.is_paid)
        ctk.CTkCheckBox(
            row, text="", variable=paid_var, width=30,
            command=lambda t=tx: self._toggle_status(t),
        ).grid(row=0, column=0, rowspan=2, padx=(8, 0), pady=6)

        cat = get_category(tx.category)
        ctk.CTkLabel(
            row, text="●", text_color=cat.color_hex, width=16,
        ).grid(row=0, column=1, rowspan=2, padx=4)

        title = tx.description
        if tx.installment_label:
            title += f"  ({tx.installment_label})"
        ctk.CTkLabel(
            row, text=title, anchor="w",
            font=ctk.CTkFont(weight="bold", overstrike=tx.is_paid),
        ).grid(row=0, column=2, sticky="ew", pady=(6, 0))

        subtitle = f"{cat.label} • {format_display_date(tx.date)}"
        if is_overdue:
            subtitle += " • ATRASADA"
        ctk.CTkLabel(
            row, text=subtitle, anchor="w",
            font=ctk.CTkFont(size=11),
            text_color="#F44336" if is_overdue else "gray60",
        ).grid(row=1, column=2, sticky="ew", pady=(0, 6))

        signed = -tx.amount if tx.type == "expense" else tx.amount
        ctk.CTkLabel(
            row, text=format_signed(signed, hidden=self._is_hidden()),
            width=120, anchor="e",
            text_color=TYPE_COLORS.get(tx.type, "gray"),
            font=ctk.CTkFont(weight="bold"),
        ).grid(row=0, column=3, rowspan=2, padx=8)

        ctk.CTkButton(
            row, text="Excluir", width=60, height=24,
            fg_color="transparent", border_width=1,
            text_color=("gray30", "gray70"), hover_color="#e11d48",
            command=lambda t=tx: self._delete_tx(t),
        ).grid(row=0, column=4, rowspan=2, padx=(0, 8))

    # ── Actions ─────────────────────────────────────────────────────────────
    def _toggle_status(self, tx: Transaction):
        self._tx_svc.toggle_status(tx.id)
        self._notify_refresh()

    def _open_add_form(self):
        form = TransactionForm(self.winfo_toplevel(), self._tx_svc)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh()

    def _delete_tx(self, tx: Transaction):
        message = f"Excluir \"{tx.description}\" de {format_currency(tx.amount, hidden=self._is_hidden())}?"
        if tx.installment_label:
            message += f"\n\nSomente a parcela {tx.installment_label} será removida."
        dlg = ConfirmDialog(self.winfo_toplevel(), "Excluir Transação", message, confirm_text="Excluir")
        if dlg.result:
            self._tx_svc.delete(tx.id)
            self._notify_refresh()
