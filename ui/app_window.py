import customtkinter as ctk
from services.transaction_service import TransactionService
from services.report_service import ReportService
from services.reminder_service import Reminder, ReminderService
from services.settings_service import SettingsService
from services.data_service import DataService
from ui.components.alert_banner import AlertBanner
from ui.components.transaction_form import TransactionForm
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.transactions_tab import TransactionsTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT

_MAX_BANNERS = 3


class AppWindow(ctk.CTk):
    def __init__(
        self,
        tx_service: TransactionService,
        report_service: ReportService,
        reminder_service: ReminderService,
        settings_service: SettingsService,
        data_service: DataService,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._tx_svc = tx_service
        self._report_svc = report_service
        self._reminder_svc = reminder_service
        self._settings_svc = settings_service
        self._data_svc = data_service

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_banner_area()
        self._build_tabs()

        self.after(200, self._show_reminders)

    # ── Header ──────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=52)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(
            bar, text=f"💰 {APP_NAME}",
            font=ctk.CTkFont(size=20, weight="bold"),
        ).pack(side="left", padx=(16, 8), pady=8)
        ctk.CTkLabel(
            bar, text="Gerencie seus gastos de forma simples.", text_color="gray60",
        ).pack(side="left", padx=4)

        ctk.CTkButton(
            bar, text="+ Nova Transação", width=140,
            command=self._open_new_transaction,
        ).pack(side="right", padx=(4, 16))

        self._privacy_btn = ctk.CTkButton(
            bar, text="", width=130,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._toggle_privacy,
        )
        self._privacy_btn.pack(side="right", padx=4)
        self._update_privacy_button()

    def _update_privacy_button(self):
        hidden = self._settings_svc.is_privacy_mode()
        self._privacy_btn.configure(text="Mostrar valores" if hidden else "Ocultar valores")

    def _toggle_privacy(self):
        self._settings_svc.toggle_privacy_mode()
        self.notify_tabs_refresh()

    def _open_new_transaction(self):
        form = TransactionForm(self, self._tx_svc)
        self.wait_window(form)
        if form.saved:
            self.notify_tabs_refresh()

    # ── Tabs ────────────────────────────────────────────────────────────────
    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8, pady=(4, 0))

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Painel", "Transações", "Configurações"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Painel"),
            report_service=self._report_svc,
            settings_service=self._settings_svc,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._transactions_tab = TransactionsTab(
            self._tabview.tab("Transações"),
            tx_service=self._tx_svc,
            report_service=self._report_svc,
            notify_refresh=self.notify_tabs_refresh,
            is_hidden=self._settings_svc.is_privacy_mode,
        )
        self._transactions_tab.grid(row=0, column=0, sticky="nsew")

        self._settings_tab = SettingsTab(
            self._tabview.tab("Configurações"),
            settings_service=self._settings_svc,
            data_service=self._data_svc,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._settings_tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self):
        """Every change re-renders every derived view."""
        self._update_privacy_button()
        self._dashboard_tab.refresh()
        self._transactions_tab.refresh()
        self._settings_tab.refresh()
        self._show_reminders()

    # ── Banners ──────────────────────────────────────────────────────────────
    def _show_reminders(self):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        reminders = self._reminder_svc.get_reminders()
        overdue = [r for r in reminders if r.type == "overdue"]
        others = [r for r in reminders if r.type != "overdue"]

        banners: list[Reminder] = list(others)
        if len(overdue) == 1:
            banners.append(overdue[0])
        elif overdue:
            banners.append(Reminder(
                type="overdue",
                severity="error",
                title=f"{len(overdue)} contas atrasadas",
                detail="Marque como pagas ou confira as datas.",
            ))

        for reminder in banners[:_MAX_BANNERS]:
            action = None
            if reminder.type == "overdue":
                action = lambda: self._tabview.set("Painel")
            AlertBanner(
                self._banner_frame,
                message=f"{reminder.title}: {reminder.detail}",
                severity=reminder.severity,
                action_text="Ver" if action else None,
                action_cmd=action,
            ).pack(fill="x", pady=2)
