"""Configuration management for socialtext_resting."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

from dotenv import load_dotenv

from socialtext_resting.common.errors import ConfigurationError
from socialtext_resting.common.logging import setup_logging

DEFAULT_TIMEOUT = 30


@dataclass
class SessionConfig:
    """Session state for one RestingClient.

    ``server``, ``username`` and ``password`` are used for every request.
    ``workspace`` is required by workspace-scoped routes, ``accept`` overrides
    the default Accept header of reads, and ``filter``, ``query``, ``order``
    and ``count`` are applied to list reads only.
    """

    server: str | None = None
    username: str | None = None
    password: str | None = None
    workspace: str | None = None
    accept: str | None = None
    filter: str | None = None
    query: str | None = None
    order: str | None = None
    count: int | str | None = None

    @classmethod
    def field_names(cls) -> list[str]:
        """Names of all session fields."""
        return [f.name for f in fields(cls)]

    @classmethod
    def from_env(cls) -> SessionConfig:
        """Load configuration from environment variables.

        Expected variables:
            SOCIALTEXT_SERVER: Server base URL (e.g., https://wiki.example.com)
            SOCIALTEXT_USERNAME: Username for Basic authentication
            SOCIALTEXT_PASSWORD: Password for Basic authentication
            SOCIALTEXT_WORKSPACE: Default workspace (optional)
            SOCIALTEXT_ACCEPT: Accept header override for reads (optional)

        Returns:
            SessionConfig instance
        """
        return cls(
            server=os.getenv("SOCIALTEXT_SERVER") or None,
            username=os.getenv("SOCIALTEXT_USERNAME") or None,
            password=os.getenv("SOCIALTEXT_PASSWORD") or None,
            workspace=os.getenv("SOCIALTEXT_WORKSPACE") or None,
            accept=os.getenv("SOCIALTEXT_ACCEPT") or None,
        )

    def validate(self) -> dict[str, str]:
        """Validate configuration.

        Returns:
            Dict of field names to error messages (empty if valid)
        """
        errors = {}
        if not self.server:
            errors["server"] = "SOCIALTEXT_SERVER not set"
        if self.username is None:
            errors["username"] = "SOCIALTEXT_USERNAME not set"
        if self.password is None:
            errors["password"] = "SOCIALTEXT_PASSWORD not set"
        return errors


class AppConfig:
    """Main application configuration loader."""

    def __init__(self, env_file: Path | None = None, load_env: bool = True):
        """Initialize configuration from environment.

        Args:
            env_file: Optional path to .env file. If not provided,
                     looks for .env in current directory or ~/.socialtext_resting.env
            load_env: Whether to load from .env files (default True). Set False in tests.

        Raises:
            ConfigurationError: If SOCIALTEXT_TIMEOUT is not a number
        """
        if load_env:
            if env_file and env_file.exists():
                load_dotenv(env_file)
            else:
                for default in [
                    Path(".env"),
                    Path.home() / ".socialtext_resting.env",
                ]:
                    if default.exists():
                        load_dotenv(default)
                        break

        self.session = SessionConfig.from_env()
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        timeout = os.getenv("SOCIALTEXT_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            self.timeout = float(timeout)
        except ValueError as err:
            raise ConfigurationError(f"SOCIALTEXT_TIMEOUT must be a number, got {timeout!r}") from err

    def validate(self) -> dict[str, str]:
        """Validate the session configuration.

        Returns:
            Dict of field names to error messages (empty if valid)
        """
        return self.session.validate()

    def require_valid(self) -> None:
        """Require the session configuration to be complete.

        Raises:
            ConfigurationError: If any required field is missing

        Example:
            >>> config = AppConfig()
            >>> config.require_valid()  # Raises if invalid
        """
        errors = self.validate()
        if errors:
            all_errors = [f"session.{field}: {error_msg}" for field, error_msg in errors.items()]
            raise ConfigurationError("Configuration validation failed:\n  - " + "\n  - ".join(all_errors))

    def configure_logging(self, log_file: Path | None = None, console: bool = True) -> logging.Logger:
        """Apply LOG_LEVEL to the package logger.

        Args:
            log_file: Optional file path to write logs
            console: Whether to also log to stderr

        Returns:
            The configured ``socialtext_resting`` logger

        Raises:
            ConfigurationError: If LOG_LEVEL is not a known level name
        """
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"LOG_LEVEL must be a logging level name, got {self.log_level!r}")
        return setup_logging("socialtext_resting", level=level, log_file=log_file, console=console)
