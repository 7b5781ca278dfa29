"""Domain models for the loan ledger."""

from lendkeeper.models.enums import LoanStatus, RateFrequency
from lendkeeper.models.loan import Loan, NewLoan

__all__ = ["Loan", "LoanStatus", "NewLoan", "RateFrequency"]
