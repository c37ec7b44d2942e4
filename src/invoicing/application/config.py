"""
Application Configuration - Central configuration management.

This module provides configuration management for the application,
including environment variables and runtime settings.
"""

import os
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")
ID_STRATEGIES = ("uuid", "sequential")
LOG_FORMAT_TYPES = ("text", "json")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass
class InvoicingConfig:
    """Invoicing domain settings."""

    default_currency: str = "USD"  # Currency of an invoice before its first line item
    id_strategy: str = "uuid"  # "uuid" or "sequential"

    @classmethod
    def from_env(cls) -> "InvoicingConfig":
        """Create configuration from environment variables."""
        return cls(
            default_currency=os.getenv("INVOICE_DEFAULT_CURRENCY", "USD"),
            id_strategy=os.getenv("INVOICE_ID_STRATEGY", "uuid").lower(),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    format_type: str = "text"  # "text" or "json"
    file: str | None = None

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create configuration from environment variables."""
        file_path = os.getenv("LOG_FILE")
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            format_type=os.getenv("LOG_FORMAT_TYPE", "text").lower(),
            file=file_path if file_path else None,
        )


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    environment: Environment = Environment.DEVELOPMENT
    invoicing: InvoicingConfig = field(default_factory=InvoicingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "invoicing": {
                "default_currency": self.invoicing.default_currency,
                "id_strategy": self.invoicing.id_strategy,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "format_type": self.logging.format_type,
                "file": self.logging.file,
            },
        }

    def validate(self) -> bool:
        """
        Validate the configuration.

        Returns:
            True if valid, raises exception otherwise
        """
        if not CURRENCY_CODE_PATTERN.match(self.invoicing.default_currency):
            raise ValueError(
                f"Default currency must be 3 uppercase letters: {self.invoicing.default_currency}"
            )

        if self.invoicing.id_strategy not in ID_STRATEGIES:
            raise ValueError(
                f"Unknown id strategy '{self.invoicing.id_strategy}', "
                f"expected one of {', '.join(ID_STRATEGIES)}"
            )

        # Sequential ids restart with the process
        sequential = self.invoicing.id_strategy == "sequential"
        if self.environment == Environment.PRODUCTION and sequential:
            raise ValueError("Sequential ids are not allowed in production")

        if self.logging.format_type not in LOG_FORMAT_TYPES:
            raise ValueError(f"Unknown log format type: {self.logging.format_type}")

        if self.logging.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {self.logging.level}")

        return True


# Global configuration singleton
_config: ApplicationConfig | None = None


def get_config() -> ApplicationConfig:
    """
    Get the application configuration singleton.

    Returns:
        ApplicationConfig: The application configuration
    """
    global _config
    if _config is None:
        # Imported here: config_loader imports this module
        from invoicing.application.config_loader import ConfigLoader

        _config = ConfigLoader.from_env()
    return _config


def set_config(config: ApplicationConfig) -> None:
    """
    Set the application configuration.

    Args:
        config: The new configuration
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the configuration singleton."""
    global _config
    _config = None
