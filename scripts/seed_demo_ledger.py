#!/usr/bin/env python3
"""Seed a demo ledger file and print its dashboard.

Generates loans with Faker, records them through the normal ledger
lifecycle (so every mutation is persisted), then prints the totals,
the top borrowers and the settled history.
"""

import argparse
from dataclasses import replace
from pathlib import Path

from lendkeeper.app import open_ledger
from lendkeeper.config import LedgerConfig
from lendkeeper.dashboard import filter_loans, summarize
from lendkeeper.formatting import format_currency, format_date
from lendkeeper.generators import LoanGenerator
from lendkeeper.logging import setup_logging
from lendkeeper.store import Ledger


def print_dashboard(ledger: Ledger, top_n: int, search: str = "") -> None:
    """Print dashboard totals and the (optionally filtered) active loans."""
    summary = summarize(ledger.loans, top_n=top_n)

    print("=" * 60)
    print(f"  Total Active Principal : {format_currency(summary.total_principal)}")
    print(f"  Projected Interest     : {format_currency(summary.total_interest)}")
    print(f"  Total Outstanding      : {format_currency(summary.total_outstanding)}")
    print(f"  Active Borrowers       : {summary.active_borrowers}")
    print("=" * 60)

    print(f"\nTop {top_n} by amount due:")
    for slice_ in summary.distribution:
        print(f"  {slice_.borrower_name:<30} {format_currency(slice_.amount_due):>14}")

    print("\nActive loans" + (f" matching {search!r}" if search else "") + ":")
    for loan in filter_loans(ledger.loans, search):
        quote = ledger.payoff_quote(loan.loan_id)
        unit = "APR" if loan.rate_frequency == "yearly" else "/mo"
        print(
            f"  {loan.borrower_name:<30} since {format_date(loan.start_date):<13}"
            f" {loan.interest_rate}% {unit:<4} {quote.days_elapsed:>4} days"
            f"  due {format_currency(quote.total_amount_due):>12}"
        )

    settled = ledger.settled_loans()
    if settled:
        print("\nSettled history:")
        for loan in settled:
            print(f"  {loan.borrower_name:<30} {format_currency(loan.principal_amount):>14}  Paid")


def main() -> None:
    """Seed and display a demo ledger."""
    parser = argparse.ArgumentParser(description="Seed a demo lendkeeper ledger")
    parser.add_argument("--count", type=int, default=12, help="Number of loans (default: 12)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--settled-share",
        type=float,
        default=0.25,
        help="Fraction of loans to settle (default: 0.25)",
    )
    parser.add_argument("--storage-path", type=Path, default=None, help="Ledger JSON file")
    parser.add_argument("--search", type=str, default="", help="Filter active loans")
    args = parser.parse_args()

    config = LedgerConfig.from_env()
    if args.storage_path is not None:
        config = replace(config, storage=replace(config.storage, path=args.storage_path))
    setup_logging(config.log_level, config.log_format)

    ledger = open_ledger(config)
    LoanGenerator(seed=args.seed).populate(ledger, args.count, settled_share=args.settled_share)

    print(f"Ledger written to: {config.storage.path}")
    print_dashboard(ledger, config.dashboard.top_n, args.search)


if __name__ == "__main__":
    main()
