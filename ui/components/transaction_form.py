import customtkinter as ctk
from services.transaction_service import TransactionService
from models.category import CATEGORIES, CategoryKey, category_by_label
from models.transaction import TransactionDraft
from ui.components.confirm_dialog import center_over
from ui.components.date_picker import DatePickerWidget
from utils.currency import parse_amount
from utils.date_helpers import today_str

_TYPE_LABELS = {"income": "Receita", "expense": "Despesa"}


class TransactionForm(ctk.CTkToplevel):
    """New transaction dialog: single, recurring (12 months) or in installments."""

    def __init__(self, master, tx_service: TransactionService, initial_type: str = "expense", **kwargs):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self.saved = False

        self.title("Nova Transação")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0
        self._label("Tipo:", r)
        self._type_var = ctk.StringVar(value=_TYPE_LABELS[initial_type])
        ctk.CTkSegmentedButton(
            self, values=list(_TYPE_LABELS.values()), variable=self._type_var,
        ).grid(row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew")
        r += 1

        self._label("Valor:", r)
        self._amount_var = ctk.StringVar()
        amount_entry = ctk.CTkEntry(self, textvariable=self._amount_var, placeholder_text="0,00")
        amount_entry.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Descrição:", r)
        self._desc_var = ctk.StringVar()
        ctk.CTkEntry(
            self, textvariable=self._desc_var, width=220,
            placeholder_text="Ex: Almoço, Freelance...",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Categoria:", r)
        labels = [c.label for c in CATEGORIES.values()]
        self._cat_var = ctk.StringVar(value=CATEGORIES[CategoryKey.FOOD].label)
        ctk.CTkComboBox(
            self, values=labels, variable=self._cat_var, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Data:", r)
        self._date_picker = DatePickerWidget(self, initial_date=today_str())
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        self._recurring_var = ctk.BooleanVar(value=False)
        ctk.CTkCheckBox(
            self, text="Repetir todo mês (12 meses)",
            variable=self._recurring_var, command=self._on_recurring_toggled,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        installment_row = ctk.CTkFrame(self, fg_color="transparent")
        installment_row.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        self._installment_var = ctk.BooleanVar(value=False)
        ctk.CTkCheckBox(
            installment_row, text="Parcelado em",
            variable=self._installment_var, command=self._on_installment_toggled,
        ).pack(side="left")
        self._count_var = ctk.StringVar(value="2")
        self._count_entry = ctk.CTkEntry(
            installment_row, textvariable=self._count_var, width=50, state="disabled",
        )
        self._count_entry.pack(side="left", padx=4)
        ctk.CTkLabel(installment_row, text="vezes").pack(side="left")
        r += 1

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, sticky="ew")
        r += 1

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            buttons, text="Cancelar", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            buttons, text="Adicionar Transação", width=160,
            command=self._on_save,
        ).pack(side="right")

        self.bind("<Return>", lambda _e: self._on_save())
        self.bind("<Escape>", lambda _e: self.destroy())
        self.transient(master)
        self.grab_set()
        center_over(self, master)
        amount_entry.focus_set()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    # Recurring and installments are mutually exclusive
    def _on_recurring_toggled(self):
        if self._recurring_var.get():
            self._installment_var.set(False)
            self._count_entry.configure(state="disabled")

    def _on_installment_toggled(self):
        if self._installment_var.get():
            self._recurring_var.set(False)
            self._count_entry.configure(state="normal")
        else:
            self._count_entry.configure(state="disabled")

    def _on_save(self):
        desc = self._desc_var.get().strip()
        amount_text = self._amount_var.get().strip()
        # Incomplete forms are ignored until the user fills them in
        if not desc or not amount_text or self._date_picker.is_empty():
            return

        try:
            amount = parse_amount(amount_text)
        except ValueError:
            self._error_var.set("Valor inválido.")
            return
        if not self._date_picker.is_valid():
            self._error_var.set("Data inválida.")
            return

        count = 1
        if self._installment_var.get():
            try:
                count = int(self._count_var.get())
            except ValueError:
                self._error_var.set("Número de parcelas inválido.")
                return

        type_ = next(k for k, v in _TYPE_LABELS.items() if v == self._type_var.get())
        category = category_by_label(self._cat_var.get()) or CATEGORIES[CategoryKey.OTHER]
        draft = TransactionDraft(
            description=desc,
            amount=amount,
            type=type_,
            category=category.key.value,
            date=self._date_picker.get(),
            is_recurring=self._recurring_var.get(),
            is_installment=self._installment_var.get(),
            installment_count=count,
        )
        try:
            self._tx_svc.add(draft)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()
