"""Sample loan generator for demo ledgers."""

from datetime import datetime, time, timedelta, timezone
from decimal import Decimal

from lendkeeper.generators.base import BaseGenerator
from lendkeeper.models import Loan, NewLoan, RateFrequency
from lendkeeper.store import Ledger


class LoanGenerator(BaseGenerator):
    """Generate plausible informal loans between friends and family."""

    # (low, high) percentage by frequency
    RATE_RANGES = {
        RateFrequency.YEARLY: (0, 24),
        RateFrequency.MONTHLY: (0, 3),
    }

    PRINCIPAL_RANGE = (50, 5000)

    NOTE_TEMPLATES = [
        "Rent help for {month}",
        "Car repair",
        "Medical bill",
        "Tuition deposit",
        "Moving costs",
        "Phone replacement",
    ]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        monthly_share: float = 0.3,
        due_date_share: float = 0.5,
        notes_share: float = 0.6,
    ) -> None:
        super().__init__(seed, locale)
        self.monthly_share = monthly_share
        self.due_date_share = due_date_share
        self.notes_share = notes_share

    def generate(
        self,
        start_after: datetime | None = None,
        start_before: datetime | None = None,
    ) -> NewLoan:
        """Generate terms for one loan.

        Parameters
        ----------
        start_after : datetime | None
            Earliest start date (default: two years before ``start_before``).
        start_before : datetime | None
            Latest start date (default: now).

        Returns
        -------
        NewLoan
            Terms ready for ``Ledger.create_from``.
        """
        start_before = start_before or datetime.now(timezone.utc)
        start_after = start_after or start_before - timedelta(days=730)

        frequency = (
            RateFrequency.MONTHLY
            if self.random.random() < self.monthly_share
            else RateFrequency.YEARLY
        )
        low, high = self.RATE_RANGES[frequency]
        rate = Decimal(str(round(self.random.uniform(low, high), 2)))
        principal = Decimal(self.random.randint(*self.PRINCIPAL_RANGE) * 10)

        start_day = self.fake.date_between_dates(start_after.date(), start_before.date())
        start_date = datetime.combine(start_day, time(), tzinfo=timezone.utc)

        due_date = None
        if self.random.random() < self.due_date_share:
            due_date = start_date + timedelta(days=30 * self.random.randint(1, 18))

        notes = None
        if self.random.random() < self.notes_share:
            notes = self.random.choice(self.NOTE_TEMPLATES).format(month=self.fake.month_name())

        return NewLoan(
            borrower_name=self.fake.name(),
            principal_amount=principal,
            interest_rate=rate,
            rate_frequency=frequency,
            start_date=start_date,
            due_date=due_date,
            notes=notes,
        )

    def populate(
        self,
        ledger: Ledger,
        count: int,
        settled_share: float = 0.0,
    ) -> list[Loan]:
        """Create ``count`` generated loans in ``ledger``.

        Parameters
        ----------
        ledger : Ledger
            Ledger to record the loans in.
        count : int
            Number of loans to create.
        settled_share : float
            Fraction of the created loans to settle afterwards (0.0 to 1.0).

        Returns
        -------
        list[Loan]
            The loans as they stand in the ledger afterwards.
        """
        created = [ledger.create_from(self.generate()) for _ in range(count)]

        for loan in self.random.sample(created, int(count * settled_share)):
            ledger.settle(loan.loan_id)

        return [ledger.get(loan.loan_id) for loan in created]
