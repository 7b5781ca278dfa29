"""JSON codec for persisted loan records.

Records use the camelCase field names of the browser ledger, so arrays
exported from ``localStorage`` load unchanged.
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from lendkeeper.accrual import parse_instant
from lendkeeper.exceptions import InvalidLoanError
from lendkeeper.models import Loan, LoanStatus, RateFrequency


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return format_instant(value)
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def format_instant(value: datetime) -> str:
    """Render a datetime the way ``Date.toISOString`` does for UTC values."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    if value.utcoffset():
        return value.isoformat(timespec="milliseconds")
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def loan_to_record(loan: Loan) -> dict[str, Any]:
    """Convert a loan to its persisted JSON object."""
    record: dict[str, Any] = {
        "id": loan.loan_id,
        "borrowerName": loan.borrower_name,
        "principalAmount": loan.principal_amount,
        "interestRate": loan.interest_rate,
        "rateFrequency": loan.rate_frequency,
        "startDate": loan.start_date,
        "status": loan.status,
    }
    if loan.due_date is not None:
        record["dueDate"] = loan.due_date
    if loan.notes is not None:
        record["notes"] = loan.notes
    return serialize_value(record)


def loan_from_record(record: Any) -> Loan:
    """Build a loan from a persisted JSON object.

    A ``startDate`` that is missing or not a valid instant, and an unparseable
    ``dueDate`` string, are kept verbatim so that accrual degrades instead of
    the record being lost.

    Raises
    ------
    InvalidLoanError
        If the record is not an object or a required field is missing or
        invalid.
    """
    if not isinstance(record, dict):
        raise InvalidLoanError(f"Expected a JSON object, got {type(record).__name__}")

    loan_id = record.get("id")
    if not isinstance(loan_id, str) or not loan_id:
        raise InvalidLoanError(f"Missing loan id in record {record!r}")

    borrower_name = record.get("borrowerName")
    if not isinstance(borrower_name, str):
        raise InvalidLoanError(f"Loan {loan_id} has no borrower name")

    start_date = record.get("startDate")

    try:
        rate_frequency = RateFrequency(record.get("rateFrequency", RateFrequency.YEARLY))
        status = LoanStatus(record.get("status", LoanStatus.ACTIVE))
    except ValueError as exc:
        raise InvalidLoanError(f"Loan {loan_id}: {exc}") from exc

    due_date = record.get("dueDate") or None
    notes = record.get("notes")

    return Loan(
        loan_id=loan_id,
        borrower_name=borrower_name,
        principal_amount=_parse_amount(record.get("principalAmount"), "principalAmount", loan_id),
        interest_rate=_parse_amount(record.get("interestRate"), "interestRate", loan_id),
        rate_frequency=rate_frequency,
        start_date=parse_instant(start_date) or start_date,
        status=status,
        due_date=(parse_instant(due_date) or due_date) if isinstance(due_date, str) else None,
        notes=notes if isinstance(notes, str) else None,
    )


def _parse_amount(value: Any, name: str, loan_id: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidLoanError(f"Loan {loan_id}: {name} is not a number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidLoanError(f"Loan {loan_id}: {name} is not a number") from exc
    if not amount.is_finite() or amount < 0:
        raise InvalidLoanError(f"Loan {loan_id}: {name} must be a non-negative number")
    return amount
