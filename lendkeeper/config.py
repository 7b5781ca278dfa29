"""Configuration management for lendkeeper."""

from dataclasses import dataclass, field
from pathlib import Path

from lendkeeper.exceptions import ConfigurationError

DEFAULT_STORAGE_KEY = "lendkeeper_loans"


@dataclass
class StorageConfig:
    """Where the ledger is persisted."""

    path: Path = field(default_factory=lambda: Path("lendkeeper.json"))
    key: str = DEFAULT_STORAGE_KEY


@dataclass
class DashboardConfig:
    """Dashboard aggregation settings."""

    top_n: int = 5

    def __post_init__(self) -> None:
        if self.top_n < 1:
            raise ConfigurationError(f"top_n must be positive, got {self.top_n}")


@dataclass
class LedgerConfig:
    """Main configuration for lendkeeper."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            path=Path(os.getenv("LENDKEEPER_STORAGE_PATH", "lendkeeper.json")),
            key=os.getenv("LENDKEEPER_STORAGE_KEY", DEFAULT_STORAGE_KEY),
        )

        top_n_str = os.getenv("LENDKEEPER_TOP_N", "5")
        try:
            top_n = int(top_n_str)
        except ValueError as exc:
            raise ConfigurationError(f"LENDKEEPER_TOP_N is not an integer: {top_n_str!r}") from exc

        return cls(
            storage=storage,
            dashboard=DashboardConfig(top_n=top_n),
            log_level=os.getenv("LENDKEEPER_LOG_LEVEL", "INFO"),
            log_format=os.getenv("LENDKEEPER_LOG_FORMAT", "standard"),
        )
