"""Sample data generators."""

from lendkeeper.generators.loan import LoanGenerator

__all__ = ["LoanGenerator"]
