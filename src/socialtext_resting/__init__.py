"""Client library for the Socialtext REST API.

Provides route resolution for Socialtext resources and a client for
reading and writing pages, tags, attachments, workspaces and users.
"""

__version__ = "0.2.0"

from socialtext_resting.client import RestingClient
from socialtext_resting.common import (
    APIError,
    AppConfig,
    ConfigurationError,
    MissingRouteParameter,
    RequestFailed,
    RestingError,
    RouteError,
    SessionConfig,
    UnknownResourceKind,
    setup_logging,
)
from socialtext_resting.routes import ROUTES, ResourceKind, RouteResolver, resolve
from socialtext_resting.transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "__version__",
    "APIError",
    "AppConfig",
    "ConfigurationError",
    "MissingRouteParameter",
    "RequestFailed",
    "RequestsTransport",
    "ResourceKind",
    "RestingClient",
    "RestingError",
    "RouteError",
    "RouteResolver",
    "ROUTES",
    "SessionConfig",
    "Transport",
    "TransportResponse",
    "UnknownResourceKind",
    "resolve",
    "setup_logging",
]
