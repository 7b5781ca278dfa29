"""Dashboard aggregates derived from the active loans."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable

from lendkeeper.accrual import calculate_accrual
from lendkeeper.models import Loan


@dataclass(frozen=True)
class DistributionSlice:
    """One borrower's share of the outstanding total."""

    borrower_name: str
    amount_due: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Totals over active loans at a single instant."""

    total_principal: Decimal
    total_interest: Decimal
    total_outstanding: Decimal
    active_borrowers: int
    distribution: list[DistributionSlice] = field(default_factory=list)


def active_only(loans: Iterable[Loan]) -> list[Loan]:
    return [loan for loan in loans if loan.is_active]


def summarize(
    loans: Iterable[Loan],
    as_of: datetime | date | str | None = None,
    top_n: int = 5,
) -> DashboardSummary:
    """Aggregate principal, accrued interest and the top-N distribution.

    Settled loans are ignored. Every active loan is evaluated at the same
    instant so the totals are consistent with each other.
    """
    active = active_only(loans)
    if as_of is None:
        as_of = datetime.now(timezone.utc)

    snapshots = [(loan, calculate_accrual(loan, as_of)) for loan in active]

    total_principal = sum((loan.principal_amount for loan in active), Decimal(0))
    total_interest = sum((snap.interest_accrued for _, snap in snapshots), Decimal(0))

    ranked = sorted(snapshots, key=lambda pair: pair[1].total_amount_due, reverse=True)
    distribution = [
        DistributionSlice(borrower_name=loan.borrower_name, amount_due=snap.total_amount_due)
        for loan, snap in ranked[:top_n]
    ]

    return DashboardSummary(
        total_principal=total_principal,
        total_interest=total_interest,
        total_outstanding=total_principal + total_interest,
        active_borrowers=len(active),
        distribution=distribution,
    )


def filter_loans(loans: Iterable[Loan], term: str) -> list[Loan]:
    """Active loans whose borrower name or notes contain ``term`` (any case)."""
    needle = term.lower()
    return [
        loan
        for loan in active_only(loans)
        if needle in loan.borrower_name.lower()
        or (loan.notes is not None and needle in loan.notes.lower())
    ]
