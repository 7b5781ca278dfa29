"""Load and save the loan collection under one storage key."""

import json

from lendkeeper.config import DEFAULT_STORAGE_KEY
from lendkeeper.exceptions import InvalidLoanError, StorageError
from lendkeeper.logging import get_logger
from lendkeeper.models import Loan
from lendkeeper.storage.backends import KeyValueStorage
from lendkeeper.storage.serialization import loan_from_record, loan_to_record

logger = get_logger(__name__)


class LedgerArchive:
    """Persist the whole loan collection as one JSON array.

    Neither ``load`` nor ``save`` raises for storage or data problems: the
    in-memory ledger stays authoritative and failures are only logged.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> list[Loan]:
        """Read the persisted collection, or an empty one if it is unusable."""
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as exc:
            logger.warning("Failed to load loans from storage: %s", exc, extra=self._fields())
            return []

        if raw is None:
            return []

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning(
                "Discarding malformed ledger under %r: %s", self.key, exc, extra=self._fields()
            )
            return []

        if not isinstance(parsed, list):
            logger.warning(
                "Discarding ledger under %r: expected an array", self.key, extra=self._fields()
            )
            return []

        loans: list[Loan] = []
        seen: set[str] = set()
        for record in parsed:
            try:
                loan = loan_from_record(record)
            except InvalidLoanError as exc:
                logger.warning("Skipping invalid loan record: %s", exc, extra=self._fields())
                continue
            if loan.loan_id in seen:
                logger.warning(
                    "Skipping duplicate loan id %s",
                    loan.loan_id,
                    extra=self._fields(loan_id=loan.loan_id),
                )
                continue
            seen.add(loan.loan_id)
            loans.append(loan)

        logger.info(
            "Loaded %d loans from %r",
            len(loans),
            self.key,
            extra=self._fields(loan_count=len(loans)),
        )
        return loans

    def save(self, loans: list[Loan]) -> None:
        """Write the full collection, logging rather than raising on failure."""
        payload = json.dumps([loan_to_record(loan) for loan in loans], ensure_ascii=False)
        try:
            self.storage.set_item(self.key, payload)
        except StorageError as exc:
            logger.warning(
                "Failed to save loans to storage: %s",
                exc,
                extra=self._fields(loan_count=len(loans)),
            )

    def _fields(self, **fields) -> dict:
        return {"extra": {"storage_key": self.key, **fields}}
