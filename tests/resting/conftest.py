"""Shared fixtures for Socialtext client tests."""

import pytest

from socialtext_resting.client import RestingClient
from socialtext_resting.transport import TransportResponse


class FakeTransport:
    """Transport that records requests and replays queued responses."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def queue(self, status=200, content=b"", location=None):
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.responses.append(TransportResponse(status=status, content=content, location=location))

    def send(self, method, url, headers, body=None):
        self.requests.append({"method": method, "url": url, "headers": dict(headers), "body": body})
        if not self.responses:
            return TransportResponse(status=200)
        return self.responses.pop(0)

    @property
    def last(self):
        return self.requests[-1]


@pytest.fixture
def transport():
    """Recording fake transport."""
    return FakeTransport()


@pytest.fixture
def client(transport):
    """Client pointed at a test server with a workspace selected."""
    return RestingClient(
        server="https://wiki.test.local",
        username="user@example.com",
        password="secret",
        workspace="docs",
        transport=transport,
    )
