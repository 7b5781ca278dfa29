"""Loan models for the personal ledger."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from lendkeeper.models.enums import LoanStatus, RateFrequency


@dataclass(frozen=True)
class Loan:
    """Money lent to a borrower, accruing simple interest from ``start_date``."""

    loan_id: str
    borrower_name: str
    principal_amount: Decimal
    interest_rate: Decimal  # Percentage (e.g., 5 for 5%)
    rate_frequency: RateFrequency
    start_date: datetime | str | None  # Raw stored value when it did not parse
    status: LoanStatus = LoanStatus.ACTIVE
    due_date: datetime | str | None = None  # Informational only
    notes: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == LoanStatus.ACTIVE


@dataclass
class NewLoan:
    """Terms for a loan that has not been recorded yet."""

    borrower_name: str
    principal_amount: Decimal
    interest_rate: Decimal
    rate_frequency: RateFrequency
    start_date: datetime
    due_date: datetime | None = None
    notes: str | None = None
