from datetime import date, datetime
import calendar
from utils.constants import DATE_FORMAT, MONTH_FORMAT, DISPLAY_DATE_FORMAT

_MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]

# Stored dates are YYYY-MM-DD; the others show up in hand-edited backups.
_STORED_FORMATS = (DATE_FORMAT, "%Y/%m/%d", "%Y.%m.%d")


def today() -> date:
    return date.today()


def today_str() -> str:
    return format_date(today())


def current_month_str() -> str:
    return format_month(today())


def parse_date(date_str: str) -> date | None:
    """Read a stored date string. Returns None when it is not a date."""
    if not date_str:
        return None
    for fmt in _STORED_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            pass
    # Timestamps such as '2024-03-01T00:00:00.000Z'
    try:
        return datetime.fromisoformat(date_str.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def format_month(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def parse_month(month_str: str) -> date | None:
    """First day of a YYYY-MM month, or None."""
    try:
        return datetime.strptime(month_str or "", MONTH_FORMAT).date()
    except ValueError:
        return None


def month_of(date_str: str) -> str | None:
    """The YYYY-MM key a stored date belongs to."""
    d = parse_date(date_str)
    return format_month(d) if d else None


def shift_month(month_str: str, n: int) -> str:
    first = parse_month(month_str)
    if first is None:
        raise ValueError(f"Invalid month: {month_str}")
    return format_month(add_months(first, n))


def prev_month(month_str: str) -> str:
    return shift_month(month_str, -1)


def next_month(month_str: str) -> str:
    return shift_month(month_str, 1)


def add_months(d: date, n: int) -> date:
    """Same day n months later; days past the month's end become its last day."""
    year, month0 = divmod(d.year * 12 + d.month - 1 + n, 12)
    last_day = calendar.monthrange(year, month0 + 1)[1]
    return date(year, month0 + 1, min(d.day, last_day))


def friendly_month(month_str: str) -> str:
    """Convert YYYY-MM to e.g. 'Março 2024'."""
    d = parse_month(month_str)
    if d is None:
        return month_str
    return f"{_MONTH_NAMES[d.month - 1]} {d.year}"


def format_display_date(date_str: str) -> str:
    """YYYY-MM-DD -> DD/MM/YYYY; unreadable input is returned unchanged."""
    d = parse_date(date_str)
    return d.strftime(DISPLAY_DATE_FORMAT) if d else date_str


def parse_display_date(display_str: str) -> date | None:
    """Parse a DD/MM/YYYY date typed by the user, or an ISO one."""
    text = (display_str or "").strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, DISPLAY_DATE_FORMAT).date()
    except ValueError:
        return parse_date(text)
