"""Tests for common.config module."""

import logging
import os
from unittest.mock import patch

import pytest

from socialtext_resting.common.config import DEFAULT_TIMEOUT, AppConfig, SessionConfig
from socialtext_resting.common.errors import ConfigurationError

FULL_ENV = {
    "SOCIALTEXT_SERVER": "https://wiki.example.com",
    "SOCIALTEXT_USERNAME": "user@example.com",
    "SOCIALTEXT_PASSWORD": "secret",
    "SOCIALTEXT_WORKSPACE": "docs",
}


class TestSessionConfig:
    """Test SessionConfig dataclass."""

    def test_defaults(self):
        """Test every field defaults to None."""
        config = SessionConfig()
        assert all(getattr(config, name) is None for name in SessionConfig.field_names())

    def test_field_names(self):
        """Test the session field list."""
        assert SessionConfig.field_names() == [
            "server",
            "username",
            "password",
            "workspace",
            "accept",
            "filter",
            "query",
            "order",
            "count",
        ]

    def test_from_env_success(self):
        """Test successful loading from environment."""
        with patch.dict(os.environ, FULL_ENV, clear=True):
            config = SessionConfig.from_env()

        assert config.server == "https://wiki.example.com"
        assert config.username == "user@example.com"
        assert config.password == "secret"
        assert config.workspace == "docs"
        assert config.accept is None

    def test_from_env_empty_values(self):
        """Test empty variables are treated as unset."""
        with patch.dict(os.environ, {"SOCIALTEXT_SERVER": "", "SOCIALTEXT_ACCEPT": "text/html"}, clear=True):
            config = SessionConfig.from_env()

        assert config.server is None
        assert config.accept == "text/html"

    def test_validate_success(self):
        """Test successful validation."""
        config = SessionConfig(server="https://wiki.example.com", username="u", password="p")
        assert config.validate() == {}

    def test_validate_allows_empty_credentials(self):
        """Test empty-string credentials are valid."""
        config = SessionConfig(server="https://wiki.example.com", username="", password="")
        assert config.validate() == {}

    def test_validate_missing(self):
        """Test validation reports every missing field."""
        errors = SessionConfig().validate()

        assert set(errors) == {"server", "username", "password"}
        assert "SOCIALTEXT_SERVER" in errors["server"]


class TestAppConfig:
    """Test AppConfig loader."""

    def test_loads_session(self):
        """Test the session is loaded from environment."""
        with patch.dict(os.environ, FULL_ENV, clear=True):
            config = AppConfig(load_env=False)

        assert config.session.server == "https://wiki.example.com"
        assert config.session.workspace == "docs"
        assert config.log_level == "INFO"
        assert config.timeout == DEFAULT_TIMEOUT

    def test_custom_log_level_and_timeout(self):
        """Test LOG_LEVEL and SOCIALTEXT_TIMEOUT are read."""
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG", "SOCIALTEXT_TIMEOUT": "2.5"}, clear=True):
            config = AppConfig(load_env=False)

        assert config.log_level == "DEBUG"
        assert config.timeout == 2.5

    def test_invalid_timeout(self):
        """Test a non-numeric timeout raises ConfigurationError."""
        with patch.dict(os.environ, {"SOCIALTEXT_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                AppConfig(load_env=False)

        assert "SOCIALTEXT_TIMEOUT" in str(exc_info.value)

    def test_env_file(self, tmp_path):
        """Test values are loaded from an explicit .env file."""
        env_file = tmp_path / "test.env"
        env_file.write_text(
            "SOCIALTEXT_SERVER=https://env.example.com\nSOCIALTEXT_USERNAME=envuser\nSOCIALTEXT_PASSWORD=envpass\n"
        )

        with patch.dict(os.environ, {}, clear=True):
            config = AppConfig(env_file=env_file)

        assert config.session.server == "https://env.example.com"
        assert config.session.username == "envuser"

    def test_require_valid_success(self):
        """Test require_valid passes with complete configuration."""
        with patch.dict(os.environ, FULL_ENV, clear=True):
            config = AppConfig(load_env=False)

        config.require_valid()

    def test_require_valid_failure(self):
        """Test require_valid raises listing each problem."""
        with patch.dict(os.environ, {"SOCIALTEXT_SERVER": "https://wiki.example.com"}, clear=True):
            config = AppConfig(load_env=False)

        with pytest.raises(ConfigurationError) as exc_info:
            config.require_valid()

        message = str(exc_info.value)
        assert "session.username" in message
        assert "session.password" in message
        assert "session.server" not in message


class TestConfigureLogging:
    """Test AppConfig.configure_logging."""

    def test_package_logger_follows_log_level(self):
        """Test LOG_LEVEL sets the package logger level."""
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True):
            config = AppConfig(load_env=False)

        logger = config.configure_logging(console=False)

        assert logger is logging.getLogger("socialtext_resting")
        assert logger.level == logging.DEBUG
        assert logging.getLogger("socialtext_resting.client").getEffectiveLevel() == logging.DEBUG

    def test_level_changes_on_reconfigure(self):
        """Test a second call applies the new level."""
        with patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}, clear=True):
            config = AppConfig(load_env=False)

        logger = config.configure_logging(console=False)

        assert logger.level == logging.WARNING

    def test_log_file(self, tmp_path):
        """Test request logs can be written to a file."""
        log_file = tmp_path / "logs" / "resting.log"
        with patch.dict(os.environ, {"LOG_LEVEL": "INFO"}, clear=True):
            config = AppConfig(load_env=False)

        package_logger = logging.getLogger("socialtext_resting")
        saved_handlers = package_logger.handlers[:]
        package_logger.handlers.clear()
        try:
            logger = config.configure_logging(log_file=log_file, console=False)
            logging.getLogger("socialtext_resting.client").info("GET /data/workspaces")

            assert log_file.parent.is_dir()
            assert [type(h) for h in logger.handlers] == [logging.FileHandler]
        finally:
            for handler in package_logger.handlers:
                handler.close()
            package_logger.handlers[:] = saved_handlers

        assert "GET /data/workspaces" in log_file.read_text()

    def test_invalid_level(self):
        """Test an unknown LOG_LEVEL raises ConfigurationError."""
        with patch.dict(os.environ, {"LOG_LEVEL": "chatty"}, clear=True):
            config = AppConfig(load_env=False)

        with pytest.raises(ConfigurationError) as exc_info:
            config.configure_logging(console=False)

        assert "LOG_LEVEL" in str(exc_info.value)
