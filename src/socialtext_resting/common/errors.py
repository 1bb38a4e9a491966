"""Custom exceptions for socialtext_resting."""

from __future__ import annotations


class RestingError(Exception):
    """Base exception for all socialtext_resting errors."""

    pass


class ConfigurationError(RestingError):
    """Raised when configuration is invalid or missing."""

    pass


class RouteError(RestingError):
    """Raised when a resource path cannot be resolved."""

    pass


class UnknownResourceKind(RouteError):
    """Raised when a resource kind has no entry in the route table."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown resource kind: {kind}")


class MissingRouteParameter(RouteError):
    """Raised when placeholders are left unsubstituted after resolution."""

    def __init__(self, kind: str, missing: list[str], path: str):
        self.kind = kind
        self.missing = missing
        self.path = path
        names = ", ".join(f":{name}" for name in missing)
        super().__init__(f"Missing parameters for {kind}: {names}")


class APIError(RestingError):
    """Raised when an API call fails."""

    pass


class RequestFailed(APIError):
    """Raised when the server answers with an unexpected status code.

    Attributes:
        status: HTTP status code returned by the server
        body: Response body text
    """

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"{status}: {body}")
