"""Pytest configuration and fixtures."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

import pytest

from lendkeeper.models import Loan, LoanStatus, RateFrequency
from lendkeeper.store import Ledger


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def day_zero() -> datetime:
    """Start date shared by scenario loans."""
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_loan(day_zero: datetime) -> Callable[..., Loan]:
    """Factory for loans with sensible defaults."""

    def _make(**overrides) -> Loan:
        values = {
            "loan_id": "loan-test-001",
            "borrower_name": "Alice Example",
            "principal_amount": Decimal("1000"),
            "interest_rate": Decimal("12"),
            "rate_frequency": RateFrequency.YEARLY,
            "start_date": day_zero,
            "status": LoanStatus.ACTIVE,
        }
        values.update(overrides)
        return Loan(**values)

    return _make


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Deterministic id factory: loan-1, loan-2, ..."""
    counter = iter(range(1, 10_000))
    return lambda: f"loan-{next(counter)}"


@pytest.fixture
def ledger(sequential_ids: Callable[[], str]) -> Ledger:
    """Empty ledger with deterministic ids."""
    return Ledger(id_factory=sequential_ids)


@pytest.fixture
def restore_logging():
    """Put root and package loggers back after setup_logging runs."""
    root = logging.getLogger()
    package = logging.getLogger("lendkeeper")
    saved = (root.level, root.handlers[:], package.level)
    yield
    root.setLevel(saved[0])
    root.handlers[:] = saved[1]
    package.setLevel(saved[2])
