"""Shared configuration, error and logging utilities."""

from socialtext_resting.common.config import AppConfig, SessionConfig
from socialtext_resting.common.errors import (
    APIError,
    ConfigurationError,
    MissingRouteParameter,
    RequestFailed,
    RestingError,
    RouteError,
    UnknownResourceKind,
)
from socialtext_resting.common.logging import setup_logging

__all__ = [
    "AppConfig",
    "SessionConfig",
    "RestingError",
    "ConfigurationError",
    "RouteError",
    "UnknownResourceKind",
    "MissingRouteParameter",
    "APIError",
    "RequestFailed",
    "setup_logging",
]
