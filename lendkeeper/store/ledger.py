"""Loan ledger: the state container behind every mutation."""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterator

from lendkeeper.accrual import AccrualSnapshot, calculate_accrual, parse_instant
from lendkeeper.exceptions import InvalidLoanError, LoanNotFoundError
from lendkeeper.logging import get_logger
from lendkeeper.models import Loan, LoanStatus, NewLoan, RateFrequency

logger = get_logger(__name__)

ChangeCallback = Callable[[list[Loan]], None]
ConfirmCallback = Callable[[Loan], bool]

_MAX_ID_ATTEMPTS = 16


def _new_loan_id() -> str:
    return uuid.uuid4().hex


class Ledger:
    """Ordered collection of loans with create/settle/delete lifecycle.

    Every mutation swaps in a new list and then hands the full collection
    to ``on_change`` (normally ``LedgerArchive.save``). No-op calls do not
    trigger ``on_change``.

    Parameters
    ----------
    loans : list[Loan] | None
        Initial collection, e.g. from ``LedgerArchive.load``.
    on_change : ChangeCallback | None
        Persistence side effect run after each effective mutation.
    id_factory : Callable[[], str] | None
        Source of new loan ids (default: uuid4 hex).
    """

    def __init__(
        self,
        loans: list[Loan] | None = None,
        on_change: ChangeCallback | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._loans: list[Loan] = list(loans or [])
        self._on_change = on_change
        self._id_factory = id_factory or _new_loan_id

    def __len__(self) -> int:
        return len(self._loans)

    def __iter__(self) -> Iterator[Loan]:
        return iter(list(self._loans))

    @property
    def loans(self) -> list[Loan]:
        """Snapshot of the whole collection in insertion order."""
        return list(self._loans)

    def get(self, loan_id: str) -> Loan:
        """Return the loan with ``loan_id``."""
        for loan in self._loans:
            if loan.loan_id == loan_id:
                return loan
        raise LoanNotFoundError(f"Loan {loan_id} not found")

    def active_loans(self) -> list[Loan]:
        return [loan for loan in self._loans if loan.status == LoanStatus.ACTIVE]

    def settled_loans(self) -> list[Loan]:
        return [loan for loan in self._loans if loan.status == LoanStatus.SETTLED]

    # Mutations
    def create(
        self,
        borrower_name: str,
        principal_amount: Decimal | int | float | str,
        interest_rate: Decimal | int | float | str,
        rate_frequency: RateFrequency | str,
        start_date: datetime | date | str,
        due_date: datetime | date | str | None = None,
        notes: str | None = None,
    ) -> Loan:
        """Record a new active loan and append it to the ledger.

        Raises
        ------
        InvalidLoanError
            If the start date is missing, the amounts are negative or not
            numbers, or the frequency is unknown.
        """
        if start_date is None or (isinstance(start_date, str) and not start_date.strip()):
            raise InvalidLoanError("start_date is required")

        try:
            frequency = RateFrequency(rate_frequency)
        except ValueError as exc:
            raise InvalidLoanError(f"Unknown rate frequency: {rate_frequency!r}") from exc

        loan = Loan(
            loan_id=self._unique_id(),
            borrower_name=borrower_name,
            principal_amount=_non_negative(principal_amount, "principal_amount"),
            interest_rate=_non_negative(interest_rate, "interest_rate"),
            rate_frequency=frequency,
            start_date=parse_instant(start_date) or start_date,
            status=LoanStatus.ACTIVE,
            due_date=(parse_instant(due_date) or due_date) if due_date else None,
            notes=notes or None,
        )
        self._replace([*self._loans, loan])
        logger.info(
            "Created loan %s for %s",
            loan.loan_id,
            loan.borrower_name,
            extra=_loan_fields(loan.loan_id, "created"),
        )
        return loan

    def create_from(self, terms: NewLoan) -> Loan:
        """Record a loan from prepared terms."""
        return self.create(
            borrower_name=terms.borrower_name,
            principal_amount=terms.principal_amount,
            interest_rate=terms.interest_rate,
            rate_frequency=terms.rate_frequency,
            start_date=terms.start_date,
            due_date=terms.due_date,
            notes=terms.notes,
        )

    def settle(self, loan_id: str) -> Loan | None:
        """Mark a loan settled.

        Returns the settled loan, or ``None`` when the id is unknown or the
        loan was already settled.
        """
        settled: Loan | None = None
        updated: list[Loan] = []
        for loan in self._loans:
            if loan.loan_id == loan_id and loan.status == LoanStatus.ACTIVE:
                settled = replace(loan, status=LoanStatus.SETTLED)
                updated.append(settled)
            else:
                updated.append(loan)

        if settled is None:
            return None

        self._replace(updated)
        logger.info("Settled loan %s", loan_id, extra=_loan_fields(loan_id, "settled"))
        return settled

    def delete(self, loan_id: str, confirm: ConfirmCallback) -> bool:
        """Remove a loan once ``confirm`` approves it.

        Returns ``True`` if the loan was removed. Deletion cannot be undone.
        """
        target = next((loan for loan in self._loans if loan.loan_id == loan_id), None)
        if target is None:
            return False
        if not confirm(target):
            logger.info(
                "Deletion of loan %s cancelled",
                loan_id,
                extra=_loan_fields(loan_id, "delete_cancelled"),
            )
            return False

        self._replace([loan for loan in self._loans if loan.loan_id != loan_id])
        logger.info("Deleted loan %s", loan_id, extra=_loan_fields(loan_id, "deleted"))
        return True

    def payoff_quote(
        self,
        loan_id: str,
        as_of: datetime | date | str | None = None,
    ) -> AccrualSnapshot:
        """Preview the amount due if the loan were settled at ``as_of``.

        The quote is not stored; ``settle`` records only the status change.
        """
        return calculate_accrual(self.get(loan_id), as_of)

    def _replace(self, loans: list[Loan]) -> None:
        self._loans = loans
        if self._on_change is not None:
            self._on_change(list(loans))

    def _unique_id(self) -> str:
        taken = {loan.loan_id for loan in self._loans}
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in taken:
                return candidate
        raise InvalidLoanError("Could not allocate a unique loan id")


def _non_negative(value: Decimal | int | float | str, name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidLoanError(f"{name} must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidLoanError(f"{name} must be a number, got {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise InvalidLoanError(f"{name} must be a non-negative number, got {value!r}")
    return amount


def _loan_fields(loan_id: str, event: str) -> dict:
    # Picked up by JsonFormatter as top-level keys
    return {"extra": {"loan_id": loan_id, "event": event}}
