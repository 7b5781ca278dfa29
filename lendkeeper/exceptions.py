"""Custom exception hierarchy for lendkeeper."""


class LendKeeperError(Exception):
    """Base exception for all lendkeeper errors."""


class LoanNotFoundError(LendKeeperError):
    """Raised when a referenced loan does not exist in the ledger."""


class InvalidLoanError(LendKeeperError):
    """Raised when loan terms violate the ledger invariants."""


class StorageError(LendKeeperError):
    """Raised when a storage backend cannot read or write."""


class ConfigurationError(LendKeeperError):
    """Raised when configuration is invalid or missing."""
