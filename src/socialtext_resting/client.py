"""Socialtext REST API client.

One RestingClient holds one logical session (server, credentials, current
workspace and list modifiers). Every operation is a single blocking round
trip; the client is not safe to mutate from concurrent callers without
external serialization.
"""

from __future__ import annotations

import base64
import logging
import re
from collections.abc import Mapping
from dataclasses import replace
from typing import Any
from urllib.parse import unquote

from socialtext_resting.common.config import SessionConfig
from socialtext_resting.common.errors import RequestFailed
from socialtext_resting.routes import ResourceKind, RouteResolver
from socialtext_resting.transport import RequestsTransport, Transport, TransportResponse

logger = logging.getLogger(__name__)

WIKI_MARKUP = "text/x.wiki-markup"
PLAIN_TEXT = "text/plain"

ATTACHMENT_LOCATION_RE = re.compile(r".*/attachments/([^/]+)")

# (session field, query key) in the order they are appended to list URIs
LIST_MODIFIERS = (
    ("filter", "filter"),
    ("query", "q"),
    ("order", "order"),
    ("count", "count"),
)


class RestingClient:
    """Client for the Socialtext REST API.

    Example:
        >>> client = RestingClient("https://wiki.example.com", "user", "secret")
        >>> client.configure(workspace="docs")
        >>> client.get_page("Start Here")
    """

    def __init__(
        self,
        server: str | None = None,
        username: str | None = None,
        password: str | None = None,
        workspace: str | None = None,
        accept: str | None = None,
        transport: Transport | None = None,
        routes: Mapping[ResourceKind | str, str] | None = None,
    ):
        """Initialize the client.

        Args:
            server: Server base URL (e.g., https://wiki.example.com)
            username: Username for Basic authentication
            password: Password for Basic authentication
            workspace: Workspace used by workspace-scoped operations
            accept: Accept header override for reads
            transport: HTTP transport; a RequestsTransport is created if omitted
            routes: Custom route table; the standard table is used if omitted
        """
        self.config = SessionConfig(
            server=server,
            username=username,
            password=password,
            workspace=workspace,
            accept=accept,
        )
        self.transport: Transport = transport if transport is not None else RequestsTransport()
        self.resolver = RouteResolver(routes)

    @classmethod
    def from_config(
        cls,
        config: SessionConfig,
        transport: Transport | None = None,
        routes: Mapping[ResourceKind | str, str] | None = None,
    ) -> RestingClient:
        """Create a client from an existing session configuration.

        The configuration is copied, so later changes to ``config`` do not
        leak into the client.
        """
        client = cls(transport=transport, routes=routes)
        client.config = replace(config)
        return client

    def configure(self, **changes: Any) -> RestingClient:
        """Update session fields (server, workspace, filter, count, ...).

        Values are not validated here; a bad value surfaces when an
        operation uses it.

        Raises:
            TypeError: If a field name is not a session field
        """
        valid = SessionConfig.field_names()
        unknown = sorted(set(changes) - set(valid))
        if unknown:
            raise TypeError(f"Unknown session fields: {', '.join(unknown)}. Valid fields: {valid}")

        for name, value in changes.items():
            setattr(self.config, name, value)
        return self

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------

    def _auth_header(self) -> str:
        username = self.config.username or ""
        password = self.config.password or ""
        token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        return f"Basic {token}"

    def _build_url(self, path: str) -> str:
        server = (self.config.server or "").rstrip("/")
        return f"{server}{path}"

    def _make_uri(self, kind: ResourceKind, **params: Any) -> str:
        """Resolve a route for the current workspace plus call parameters."""
        return self.resolver.resolve(kind, {"ws": self.config.workspace, **params})

    def _extend_uri(self, uri: str) -> str:
        """Append the configured list modifiers as a query string."""
        extend = []
        for field, key in LIST_MODIFIERS:
            value = getattr(self.config, field)
            if not value:
                continue
            extend.append(f"{key}={value}")

        if extend:
            uri = f"{uri}?{';'.join(extend)}"
        return uri

    def _request(
        self,
        method: str,
        uri: str,
        accept: str | None = None,
        content_type: str | None = None,
        content: bytes | str | None = None,
    ) -> TransportResponse:
        """Send one request and return the raw response.

        Args:
            method: HTTP method (GET, PUT, POST, DELETE)
            uri: Path (and query) relative to the server
            accept: Accept header value
            content_type: Content-Type header value, sent only with a body
            content: Request body

        Returns:
            Transport response
        """
        url = self._build_url(uri)
        headers = {"Authorization": self._auth_header()}
        if accept:
            headers["Accept"] = accept

        body = None
        if content:
            body = content
            if content_type:
                headers["Content-Type"] = content_type

        logger.debug(f"{method} {url}")
        response = self.transport.send(method, url, headers, body)
        logger.debug(f"{method} {url} -> {response.status}")
        return response

    def _fail(self, method: str, uri: str, response: TransportResponse) -> RequestFailed:
        logger.warning(f"{method} {uri} failed with status {response.status}")
        return RequestFailed(response.status, response.text)

    def _get_thing(self, uri: str, accept: str | None) -> TransportResponse:
        response = self._request("GET", uri, accept=accept)
        if response.status in (200, 404):
            return response
        raise self._fail("GET", uri, response)

    def _get_things(self, kind: ResourceKind, **params: Any) -> list[str]:
        """Fetch a newline-delimited list resource.

        Returns:
            Non-blank lines in body order; an empty list on 404

        Raises:
            RequestFailed: On any status other than 200 or 404
        """
        uri = self._extend_uri(self._make_uri(kind, **params))
        response = self._request("GET", uri, accept=self.config.accept or PLAIN_TEXT)

        if response.status == 200:
            return [line for line in response.text.split("\n") if line.strip()]
        if response.status == 404:
            return []
        raise self._fail("GET", uri, response)

    def _write(
        self,
        method: str,
        uri: str,
        content_type: str | None = None,
        content: bytes | str | None = None,
    ) -> TransportResponse:
        response = self._request(method, uri, content_type=content_type, content=content)
        if response.status in (201, 204):
            return response
        raise self._fail(method, uri, response)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def get_page(self, pname: str) -> str:
        """Retrieve the content of a page in the current workspace.

        A missing page is not an error: the 404 body is returned as-is.

        Raises:
            RequestFailed: On any status other than 200 or 404
        """
        uri = self._make_uri(ResourceKind.PAGE, pname=pname)
        return self._get_thing(uri, self.config.accept or WIKI_MARKUP).text

    def put_page(self, pname: str, content: str) -> str:
        """Save content as a page in the current workspace.

        Returns:
            Response body text

        Raises:
            RequestFailed: On any status other than 201 or 204
        """
        uri = self._make_uri(ResourceKind.PAGE, pname=pname)
        return self._write("PUT", uri, content_type=WIKI_MARKUP, content=content).text

    def get_pages(self) -> list[str]:
        """List all pages in the current workspace."""
        return self._get_things(ResourceKind.PAGES)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def get_pagetags(self, pname: str) -> list[str]:
        """List the tags on a page."""
        return self._get_things(ResourceKind.PAGETAGS, pname=pname)

    def put_pagetag(self, pname: str, tag: str) -> str:
        """Add a tag to a page.

        Raises:
            RequestFailed: On any status other than 201 or 204
        """
        uri = self._make_uri(ResourceKind.PAGETAG, pname=pname, tag=tag)
        return self._write("PUT", uri).text

    def delete_pagetag(self, pname: str, tag: str) -> str:
        """Remove a tag from a page.

        Raises:
            RequestFailed: On any status other than 201 or 204
        """
        uri = self._make_uri(ResourceKind.PAGETAG, pname=pname, tag=tag)
        return self._write("DELETE", uri).text

    def get_workspacetags(self) -> list[str]:
        """List all tags used in the current workspace."""
        return self._get_things(ResourceKind.WORKSPACETAGS)

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    def get_attachment(self, attachment_id: str) -> bytes:
        """Retrieve an attachment from the current workspace.

        Attachments are returned as raw bytes. A 404 returns the error body
        rather than raising.

        Raises:
            RequestFailed: On any status other than 200 or 404
        """
        uri = self._make_uri(ResourceKind.WORKSPACEATTACHMENT, attachment_id=attachment_id)
        return self._get_thing(uri, self.config.accept).content

    def post_attachment(
        self,
        pname: str,
        attachment_id: str,
        content: bytes,
        mime_type: str,
    ) -> str | None:
        """Attach a file to a page.

        The attachment id is appended to the upload URI as ``?name=<id>``
        without escaping. Callers must percent-encode names containing
        ``&``, ``;``, ``#`` or spaces themselves.

        Args:
            pname: Page name
            attachment_id: File name to store the attachment under
            content: Attachment data
            mime_type: Content-Type of the data

        Returns:
            Decoded attachment id taken from the Location header, or None
            if the server sent no attachment location

        Raises:
            RequestFailed: On any status other than 201 or 204
        """
        uri = self._make_uri(ResourceKind.PAGEATTACHMENTS, pname=pname)
        uri = f"{uri}?name={attachment_id}"

        response = self._write("POST", uri, content_type=mime_type, content=content)

        match = ATTACHMENT_LOCATION_RE.match(response.location or "")
        if not match:
            return None
        return unquote(match.group(1))

    def get_pageattachments(self, pname: str) -> list[str]:
        """List the attachments of a page."""
        return self._get_things(ResourceKind.PAGEATTACHMENTS, pname=pname)

    def get_workspaceattachments(self) -> list[str]:
        """List all attachments in the current workspace."""
        return self._get_things(ResourceKind.WORKSPACEATTACHMENTS)

    # ------------------------------------------------------------------
    # Workspaces and users
    # ------------------------------------------------------------------

    def get_workspaces(self) -> list[str]:
        """List all workspaces on the server."""
        return self._get_things(ResourceKind.WORKSPACES)

    def get_workspaceusers(self) -> list[str]:
        """List the members of the current workspace."""
        return self._get_things(ResourceKind.WORKSPACEUSERS)

    def get_users(self) -> list[str]:
        """List all users on the server."""
        return self._get_things(ResourceKind.USERS)
