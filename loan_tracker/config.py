"""Configuration management for loan-tracker."""

from dataclasses import dataclass, field
from pathlib import Path

from loan_tracker.exceptions import ConfigurationError


@dataclass
class StorageConfig:
    """Local ledger storage configuration."""

    path: Path = field(default_factory=lambda: Path("loans.json"))
    key: str = "loans"
    pretty_json: bool = False


@dataclass
class DisplayConfig:
    """Console output configuration."""

    currency_symbol: str = "₱"
    date_format: str = "%b %d, %Y"

    def money(self, value) -> str:
        """Format an amount with the currency symbol and thousands separators."""
        return f"{self.currency_symbol}{value:,.2f}"


@dataclass
class LoanTrackerConfig:
    """Main configuration for loan-tracker."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = "WARNING"
    log_format: str = "standard"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "LoanTrackerConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            path=Path(os.getenv("LOAN_TRACKER_STORE", "loans.json")),
            key=os.getenv("LOAN_TRACKER_KEY", "loans"),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        display = DisplayConfig(
            currency_symbol=os.getenv("CURRENCY_SYMBOL", "₱"),
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as e:
            raise ConfigurationError(f"SEED must be an integer, got {seed_str!r}") from e

        return cls(
            storage=storage,
            display=display,
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
            log_format=log_format,
            seed=seed,
        )
