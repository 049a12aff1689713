from dataclasses import dataclass
from datetime import date
from models.category import get_category
from models.transaction import Transaction
from services.transaction_service import TransactionService
from utils.constants import TYPE_FILTERS
from utils.date_helpers import current_month_str, month_of, today, parse_date


@dataclass
class GoalProgress:
    goal: float
    spent: float

    @property
    def percentage(self) -> float:
        if self.goal <= 0:
            return 0.0
        return self.spent / self.goal

    @property
    def remaining(self) -> float:
        return max(0.0, self.goal - self.spent)


# ── Pure views over a list of transactions ──────────────────────────────────


def filter_by_month(transactions: list[Transaction], month: str) -> list[Transaction]:
    """Records whose date falls in the YYYY-MM month."""
    return [t for t in transactions if month_of(t.date) == month]


def sort_for_display(transactions: list[Transaction]) -> list[Transaction]:
    """Pending before paid; newest first within the same status."""
    by_date = sorted(transactions, key=lambda t: parse_date(t.date) or date.min, reverse=True)
    return sorted(by_date, key=lambda t: t.is_paid)


def overdue(transactions: list[Transaction], ref_date: date | None = None) -> list[Transaction]:
    """Pending expenses dated strictly before ref_date (default: today)."""
    ref = ref_date or today()
    result = []
    for t in transactions:
        if t.type != "expense" or t.is_paid:
            continue
        d = parse_date(t.date)
        if d is not None and d < ref:
            result.append(t)
    return result


def installment_debt(transactions: list[Transaction]) -> list[Transaction]:
    """Pending expenses that belong to a multi-installment group."""
    return [
        t for t in transactions
        if t.type == "expense" and not t.is_paid and t.installments > 1
    ]


def category_breakdown(transactions: list[Transaction]) -> list[dict]:
    """Return [{category, label, color_hex, total}, ...] largest first."""
    totals: dict[str, float] = {}
    for t in transactions:
        if t.type != "expense":
            continue
        key = get_category(t.category).key.value
        totals[key] = totals.get(key, 0.0) + t.amount

    rows = []
    for key, total in totals.items():
        cat = get_category(key)
        rows.append({
            "category": key,
            "label": cat.label,
            "color_hex": cat.color_hex,
            "total": total,
        })
    rows.sort(key=lambda r: r["total"], reverse=True)
    return rows


def totals(transactions: list[Transaction]) -> dict:
    """Income, expense and balance; pending amounts count as realized."""
    income = sum(t.amount for t in transactions if t.type == "income")
    expense = sum(t.amount for t in transactions if t.type == "expense")
    return {"income": income, "expense": expense, "balance": income - expense}


def apply_filters(
    transactions: list[Transaction],
    month: str | None = None,
    type_filter: str | None = None,
    search: str | None = None,
) -> list[Transaction]:
    """Compose the month, type and search filters.

    type_filter 'debt' selects installment debt across every month, so the
    month filter is skipped for it.
    """
    if type_filter and type_filter not in TYPE_FILTERS:
        raise ValueError(f"Unknown type filter: {type_filter}")
    if type_filter == "debt":
        result = installment_debt(transactions)
    else:
        result = filter_by_month(transactions, month) if month else list(transactions)
        if type_filter and type_filter != "all":
            result = [t for t in result if t.type == type_filter]
    if search:
        needle = search.strip().lower()
        result = [t for t in result if needle in t.description.lower()]
    return result


class ReportService:
    def __init__(self, tx_service: TransactionService):
        self._tx_svc = tx_service

    def get_monthly(self, month: str | None = None) -> list[Transaction]:
        m = month or current_month_str()
        return sort_for_display(filter_by_month(self._tx_svc.get_all(), m))

    def get_filtered(
        self,
        month: str | None = None,
        type_filter: str | None = None,
        search: str | None = None,
    ) -> list[Transaction]:
        """The register view: filters applied, display order."""
        m = month or current_month_str()
        rows = apply_filters(self._tx_svc.get_all(), m, type_filter, search)
        return sort_for_display(rows)

    def get_overdue(self, ref_date: date | None = None) -> list[Transaction]:
        return sort_for_display(overdue(self._tx_svc.get_all(), ref_date))

    def get_installment_debt_total(self) -> float:
        return sum(t.amount for t in installment_debt(self._tx_svc.get_all()))

    def get_category_breakdown(self, month: str | None = None) -> list[dict]:
        """Expense totals per category for the month, for the pie chart."""
        m = month or current_month_str()
        return category_breakdown(filter_by_month(self._tx_svc.get_all(), m))

    def get_summary(self, month: str | None = None) -> dict:
        m = month or current_month_str()
        return totals(filter_by_month(self._tx_svc.get_all(), m))

    def get_goal_progress(self, goal: float | None, month: str | None = None) -> GoalProgress:
        spent = self.get_summary(month)["expense"]
        return GoalProgress(goal=goal or 0.0, spent=spent)
