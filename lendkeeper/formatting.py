"""Display formatting for amounts and dates."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from lendkeeper.accrual import parse_instant

_CENTS = Decimal("0.01")


def format_currency(amount: Any) -> str:
    """Format an amount as US dollars, e.g. ``$1,120.00``.

    Anything that is not a finite number renders as ``$0.00``.
    """
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return "$0.00"
    if not value.is_finite():
        return "$0.00"

    cents = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents):,.2f}"


def format_date(value: datetime | date | str | None) -> str:
    """Format a date as ``Jan 5, 2024``; ``-`` when empty."""
    if value is None or value == "":
        return "-"
    parsed = parse_instant(value)
    if parsed is None:
        return str(value)
    return f"{parsed:%b} {parsed.day}, {parsed.year}"
