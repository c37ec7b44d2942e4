"""
Configuration loading for the invoicing application.

ApplicationConfig only holds and validates settings; this module reads them
from the process environment (optionally seeded from a .env file) and from
YAML files, and writes them back out as YAML.
"""

import os
from typing import Any

import yaml
from dotenv import load_dotenv

from invoicing.application.config import (
    ApplicationConfig,
    Environment,
    InvoicingConfig,
    LoggingConfig,
)


def _section(data: dict[str, Any], name: str) -> dict[str, Any] | None:
    """A YAML section as a dict; None when absent, {} when present but empty."""
    if name not in data:
        return None
    section = data[name] or {}
    if not isinstance(section, dict):
        raise ValueError(f"Configuration section '{name}' must be a mapping")
    return section


def _environment(name: str) -> Environment:
    try:
        return Environment(name)
    except ValueError:
        raise ValueError(f"Invalid environment: {name}") from None


class ConfigLoader:
    """Reads and writes ApplicationConfig."""

    @classmethod
    def from_env(cls, env_file: str | None = None) -> ApplicationConfig:
        """
        Build the configuration from environment variables.

        Args:
            env_file: Optional .env file read first; variables already present
                in the environment win over the file

        Raises:
            ValueError: If ENVIRONMENT names no known environment
        """
        if env_file:
            load_dotenv(env_file, override=False)

        env_name = os.getenv("ENVIRONMENT", Environment.DEVELOPMENT.value)

        return ApplicationConfig(
            environment=_environment(env_name),
            invoicing=InvoicingConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_yaml(cls, path: str) -> ApplicationConfig:
        """
        Build the configuration from a YAML file.

        Missing sections and keys keep their defaults; an empty file yields
        the default configuration.

        Raises:
            ValueError: If the document or a section is not a mapping, or the
                environment is unknown
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        config = ApplicationConfig()
        if data is None:
            return config
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file '{path}' must be a mapping")

        if "environment" in data:
            config.environment = _environment(str(data["environment"]))

        invoicing = _section(data, "invoicing")
        if invoicing is not None:
            defaults = config.invoicing
            config.invoicing = InvoicingConfig(
                default_currency=invoicing.get("default_currency", defaults.default_currency),
                id_strategy=invoicing.get("id_strategy", defaults.id_strategy),
            )

        logging_section = _section(data, "logging")
        if logging_section is not None:
            defaults_log = config.logging
            config.logging = LoggingConfig(
                level=logging_section.get("level", defaults_log.level),
                format=logging_section.get("format", defaults_log.format),
                format_type=logging_section.get("format_type", defaults_log.format_type),
                file=logging_section.get("file", defaults_log.file),
            )

        return config

    @classmethod
    def to_yaml(cls, config: ApplicationConfig) -> str:
        """Render the configuration as YAML."""
        return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)

    @classmethod
    def save_to_yaml(cls, config: ApplicationConfig, path: str) -> None:
        """Write the configuration to a YAML file readable by ``from_yaml``."""
        with open(path, "w") as f:
            f.write(cls.to_yaml(config))
