import math

from utils.constants import CURRENCY_SYMBOL, PRIVACY_MASK


def format_currency(amount: float, symbol: str = CURRENCY_SYMBOL, hidden: bool = False) -> str:
    """Format a float the pt-BR way, e.g. 'R$ 1.234,56'.

    With hidden=True the digits are replaced by a mask (privacy mode).
    """
    if hidden:
        return f"{symbol} {PRIVACY_MASK}"
    sign = "-" if amount < 0 else ""
    # Swap separators: 1,234.56 -> 1.234,56
    digits = f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{symbol} {digits}"


def format_signed(amount: float, symbol: str = CURRENCY_SYMBOL, hidden: bool = False) -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign} {format_currency(abs(amount), symbol, hidden)}"


def parse_amount(text: str) -> float:
    """Parse a user-typed amount, accepting '1234.56', '1234,56' or '1.234,56'.

    Raises ValueError on anything else.
    """
    raw = text.strip().replace(CURRENCY_SYMBOL, "").replace(" ", "")
    if not raw:
        raise ValueError("Empty amount.")
    if "," in raw:
        raw = raw.replace(".", "").replace(",", ".")
    amount = float(raw)
    if not math.isfinite(amount):
        raise ValueError("Amount must be a finite number.")
    return amount
