"""Enumeration types for ledger entities."""

from enum import Enum


class RateFrequency(str, Enum):
    YEARLY = "yearly"
    MONTHLY = "monthly"


class LoanStatus(str, Enum):
    ACTIVE = "active"
    SETTLED = "settled"
