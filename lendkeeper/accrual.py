"""Simple-interest accrual for ledger loans.

``calculate_accrual`` maps a loan and an as-of instant to a payoff snapshot.
It is pure: nothing is read from or written to the ledger.

Rules:
- elapsed time is the absolute difference between start and as-of, so an
  as-of date before the start still accrues
- partial days round up to a full day
- monthly rates are annualized by multiplying by 12
- a year is always 365 days
- no rounding is applied; that is left to display code
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from lendkeeper.logging import get_logger
from lendkeeper.models import Loan, RateFrequency

logger = get_logger(__name__)

MS_PER_DAY = 86_400_000
DAYS_PER_YEAR = Decimal(365)
MONTHS_PER_YEAR = 12

_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class AccrualSnapshot:
    """Payoff figures for a loan as of a given instant."""

    days_elapsed: int
    interest_accrued: Decimal
    total_amount_due: Decimal
    principal: Decimal

    @property
    def is_degenerate(self) -> bool:
        return False


@dataclass(frozen=True)
class ComputedAccrual(AccrualSnapshot):
    """Snapshot computed from two valid instants."""


@dataclass(frozen=True)
class DegenerateAccrual(AccrualSnapshot):
    """Zero-accrual snapshot returned when a date could not be parsed."""

    reason: str = ""

    @property
    def is_degenerate(self) -> bool:
        return True


def parse_instant(value: datetime | date | str | None) -> datetime | None:
    """Parse a point in time, returning ``None`` when it is not one.

    Date-only values and naive datetimes are taken as UTC. ISO strings may
    end in ``Z``.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=timezone.utc)


def annualized_rate(interest_rate: Decimal, rate_frequency: RateFrequency | str) -> Decimal:
    """Express a percentage rate on a yearly basis."""
    if rate_frequency == RateFrequency.MONTHLY:
        return interest_rate * MONTHS_PER_YEAR
    return interest_rate


def elapsed_days(start: datetime, end: datetime) -> int:
    """Whole days between two instants, counting any partial day as one."""
    elapsed_ms = abs(end - start) // _ONE_MS
    return -(-elapsed_ms // MS_PER_DAY)


def calculate_accrual(
    loan: Loan,
    as_of: datetime | date | str | None = None,
) -> AccrualSnapshot:
    """Compute simple interest accrued on a loan.

    Parameters
    ----------
    loan : Loan
        Loan to evaluate. Its status is not consulted.
    as_of : datetime | date | str | None
        Instant to evaluate at. Defaults to the current UTC time.

    Returns
    -------
    AccrualSnapshot
        ``ComputedAccrual`` normally, ``DegenerateAccrual`` when either the
        start date or ``as_of`` is not a valid point in time.
    """
    principal = loan.principal_amount
    start = parse_instant(loan.start_date)
    end = datetime.now(timezone.utc) if as_of is None else parse_instant(as_of)

    if start is None or end is None:
        bad = "start_date" if start is None else "as_of"
        logger.debug("Unparseable %s for loan %s, returning zero accrual", bad, loan.loan_id)
        return DegenerateAccrual(
            days_elapsed=0,
            interest_accrued=Decimal(0),
            total_amount_due=principal,
            principal=principal,
            reason=f"invalid {bad}",
        )

    days = elapsed_days(start, end)
    annual_rate = annualized_rate(loan.interest_rate, loan.rate_frequency)
    years = Decimal(days) / DAYS_PER_YEAR
    interest = principal * (annual_rate / 100) * years

    return ComputedAccrual(
        days_elapsed=days,
        interest_accrued=interest,
        total_amount_due=principal + interest,
        principal=principal,
    )
