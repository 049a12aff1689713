from dataclasses import dataclass
from datetime import date
from services.report_service import ReportService
from services.settings_service import SettingsService
from utils.currency import format_currency
from utils.date_helpers import today, format_month, format_display_date
from utils.constants import GOAL_ALERT_THRESHOLD


@dataclass
class Reminder:
    type: str       # 'overdue' | 'over_goal' | 'near_goal'
    severity: str   # 'info' | 'warning' | 'error'
    title: str
    detail: str
    key: str = ""   # e.g. "overdue:<id>" or "goal:2024-03"


class ReminderService:
    def __init__(
        self,
        report_service: ReportService,
        settings_service: SettingsService,
    ):
        self._report = report_service
        self._settings = settings_service

    def get_reminders(
        self,
        ref_date: date | None = None,
        threshold: float = GOAL_ALERT_THRESHOLD,
    ) -> list[Reminder]:
        ref = ref_date or today()
        hidden = self._settings.is_privacy_mode()
        reminders: list[Reminder] = []
        reminders += self._check_overdue(ref, hidden)
        reminders += self._check_goal(ref, threshold, hidden)
        order = {"error": 0, "warning": 1, "info": 2}
        return sorted(reminders, key=lambda r: order[r.severity])

    def _check_overdue(self, ref: date, hidden: bool) -> list[Reminder]:
        reminders = []
        for tx in self._report.get_overdue(ref):
            label = tx.description
            if tx.installment_label:
                label += f" ({tx.installment_label})"
            reminders.append(Reminder(
                type="overdue",
                severity="error",
                title=f"{label} está atrasada",
                detail=(
                    f"Venceu em {format_display_date(tx.date)} · "
                    f"{format_currency(tx.amount, hidden=hidden)}"
                ),
                key=f"overdue:{tx.id}",
            ))
        return reminders

    def _check_goal(self, ref: date, threshold: float, hidden: bool) -> list[Reminder]:
        goal = self._settings.get_goal()
        if not goal:
            return []
        month = format_month(ref)
        progress = self._report.get_goal_progress(goal, month)
        pct = progress.percentage
        detail = (
            f"Gasto {format_currency(progress.spent, hidden=hidden)} de "
            f"{format_currency(progress.goal, hidden=hidden)} "
            f"({pct*100:.0f}%)"
        )
        if pct >= 1.0:
            return [Reminder(
                type="over_goal",
                severity="error",
                title="Meta de gastos ultrapassada",
                detail=detail,
                key=f"goal:{month}",
            )]
        if pct >= threshold:
            return [Reminder(
                type="near_goal",
                severity="warning",
                title="Perto da meta de gastos",
                detail=detail,
                key=f"goal:{month}",
            )]
        return []
