"""Configuration management for libraryserver.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_LOAN_DAYS = 14

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Loans
    loan_days: int

    # Refuse customer/medium deletes while a loan still references them
    guard_loan_references: bool

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "LIBRARYSERVER_DB_PATH",
            str(Path.home() / ".libraryserver" / "library.db"),
        )
        db_path = Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            loan_days=int(
                os.environ.get("LIBRARYSERVER_LOAN_DAYS", str(DEFAULT_LOAN_DAYS))
            ),
            guard_loan_references=(
                os.environ.get("LIBRARYSERVER_GUARD_LOAN_REFERENCES", "false").lower()
                in _TRUTHY
            ),
            log_level=os.environ.get("LIBRARYSERVER_LOG_LEVEL", "WARNING").upper(),
        )

    @property
    def is_memory(self) -> bool:
        """Check if the database lives in memory only."""
        return str(self.db_path) == ":memory:"

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.loan_days < 1:
            errors.append(f"Loan duration must be at least one day, got {self.loan_days}")

        # Check database directory is writable
        if not self.is_memory and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
