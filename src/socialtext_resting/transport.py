"""HTTP transport used by the resource client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import requests


def _keep_headers(request: requests.PreparedRequest) -> requests.PreparedRequest:
    """Auth hook that leaves the prepared Authorization header untouched.

    Passing any auth stops requests from looking up ~/.netrc credentials
    and overwriting the header built by the client.
    """
    return request


@dataclass(frozen=True)
class TransportResponse:
    """Status, body and Location header of one HTTP response."""

    status: int
    content: bytes = b""
    location: str | None = None

    @property
    def text(self) -> str:
        """Response body decoded as UTF-8."""
        return self.content.decode("utf-8", errors="replace")


class Transport(Protocol):
    """Capability the client uses to execute a single HTTP request."""

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | str | None = None,
    ) -> TransportResponse: ...


class RequestsTransport:
    """Transport backed by a reusable requests session.

    Redirects are never followed so a creation response's Location header
    is seen exactly as the server sent it. Connection and timeout errors
    from requests propagate to the caller unchanged.
    """

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        verify_ssl: bool | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates (set to False for self-signed certs).
                Defaults to True for a new session; a supplied session keeps its own
                setting unless this is given explicitly.
            session: Optional preconfigured session to reuse
        """
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.verify = True if verify_ssl is None else verify_ssl
        elif verify_ssl is not None:
            session.verify = verify_ssl
        self._session = session
        self.verify_ssl = session.verify

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | str | None = None,
    ) -> TransportResponse:
        if isinstance(body, str):
            body = body.encode("utf-8")

        response = self._session.request(
            method=method,
            url=url,
            headers=headers,
            data=body,
            auth=_keep_headers,
            timeout=self.timeout,
            allow_redirects=False,
        )

        return TransportResponse(
            status=response.status_code,
            content=response.content,
            location=response.headers.get("Location"),
        )

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()
