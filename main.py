import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.transaction_store import TransactionStore

from services.transaction_service import TransactionService
from services.report_service import ReportService
from services.reminder_service import ReminderService
from services.settings_service import SettingsService
from services.data_service import DataService

from ui.app_window import AppWindow
from utils.app_config import get_storage_folder
from utils.logger import get_logger

logger = get_logger("financas")


def main():
    # ── Bootstrap: read storage folder from pre-store config ─────────────────
    storage_folder = get_storage_folder()

    # ── Store ────────────────────────────────────────────────────────────────
    db = DatabaseManager.open(storage_folder=storage_folder)
    store = TransactionStore(db)

    # ── Services ─────────────────────────────────────────────────────────────
    tx_svc = TransactionService(store)
    settings_svc = SettingsService(db)
    report_svc = ReportService(tx_svc)
    reminder_svc = ReminderService(report_svc, settings_svc)
    data_svc = DataService(tx_svc)

    overdue_count = len(report_svc.get_overdue())
    if overdue_count:
        logger.info("%d overdue transaction(s) at startup", overdue_count)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(settings_svc.get_appearance_mode())
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        tx_service=tx_svc,
        report_service=report_svc,
        reminder_service=reminder_svc,
        settings_service=settings_svc,
        data_service=data_svc,
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
