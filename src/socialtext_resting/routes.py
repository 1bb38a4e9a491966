"""Route table and path resolution for the Socialtext REST API."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any
from urllib.parse import quote

from socialtext_resting.common.errors import MissingRouteParameter, UnknownResourceKind

BASE_URI = "/data/workspaces"

PLACEHOLDER_RE = re.compile(r"/:(\w+)")


class ResourceKind(str, Enum):
    """Resource kinds known to the route table."""

    PAGE = "page"
    PAGES = "pages"
    PAGETAG = "pagetag"
    PAGETAGS = "pagetags"
    PAGEATTACHMENT = "pageattachment"
    PAGEATTACHMENTS = "pageattachments"
    WORKSPACE = "workspace"
    WORKSPACES = "workspaces"
    WORKSPACETAG = "workspacetag"
    WORKSPACETAGS = "workspacetags"
    WORKSPACEATTACHMENT = "workspaceattachment"
    WORKSPACEATTACHMENTS = "workspaceattachments"
    WORKSPACEUSER = "workspaceuser"
    WORKSPACEUSERS = "workspaceusers"
    USER = "user"
    USERS = "users"


ROUTES: Mapping[ResourceKind, str] = MappingProxyType(
    {
        ResourceKind.PAGE: f"{BASE_URI}/:ws/pages/:pname",
        ResourceKind.PAGES: f"{BASE_URI}/:ws/pages",
        ResourceKind.PAGETAG: f"{BASE_URI}/:ws/pages/:pname/tags/:tag",
        ResourceKind.PAGETAGS: f"{BASE_URI}/:ws/pages/:pname/tags",
        ResourceKind.PAGEATTACHMENT: f"{BASE_URI}/:ws/pages/:pname/attachments/:attachment_id",
        ResourceKind.PAGEATTACHMENTS: f"{BASE_URI}/:ws/pages/:pname/attachments",
        ResourceKind.WORKSPACE: f"{BASE_URI}/:ws",
        ResourceKind.WORKSPACES: BASE_URI,
        ResourceKind.WORKSPACETAG: f"{BASE_URI}/:ws/tags/:tag",
        ResourceKind.WORKSPACETAGS: f"{BASE_URI}/:ws/tags",
        ResourceKind.WORKSPACEATTACHMENT: f"{BASE_URI}/:ws/attachments/:attachment_id",
        ResourceKind.WORKSPACEATTACHMENTS: f"{BASE_URI}/:ws/attachments",
        ResourceKind.WORKSPACEUSER: f"{BASE_URI}/:ws/users/:user_id",
        ResourceKind.WORKSPACEUSERS: f"{BASE_URI}/:ws/users",
        ResourceKind.USER: "/data/users/:user_id",
        ResourceKind.USERS: "/data/users",
    }
)


def escape_segment(value: Any) -> str:
    """Percent-encode a value for use as a single URI path segment.

    The value is encoded as UTF-8 and no character is treated as safe, so a
    ``/`` inside the value becomes ``%2F`` instead of a new segment.
    """
    return quote(str(value), safe="")


class RouteResolver:
    """Resolve resource kinds to URI paths using a route table.

    Args:
        routes: Mapping of resource kind to URI template. Defaults to ROUTES.
    """

    def __init__(self, routes: Mapping[ResourceKind | str, str] | None = None):
        source = ROUTES if routes is None else routes
        # Keys are normalised to their string value so enum members and
        # plain strings look up the same template.
        self.routes: Mapping[str, str] = MappingProxyType(
            {_kind_name(kind): template for kind, template in source.items()}
        )

    def template(self, kind: ResourceKind | str) -> str:
        """Return the URI template for a resource kind.

        Raises:
            UnknownResourceKind: If the kind is not in the route table
        """
        name = _kind_name(kind)
        try:
            return self.routes[name]
        except KeyError:
            raise UnknownResourceKind(name) from None

    def placeholders(self, kind: ResourceKind | str) -> list[str]:
        """Return the placeholder names of a template, in path order."""
        return PLACEHOLDER_RE.findall(self.template(kind))

    def resolve(
        self,
        kind: ResourceKind | str,
        params: Mapping[str, Any] | None = None,
        allow_missing: bool = False,
    ) -> str:
        """Build the URI path for a resource kind.

        Every ``/:name`` placeholder whose name is in ``params`` is replaced
        with ``/`` plus the escaped value. Placeholders are matched as whole
        tokens, so ``:ws`` never matches inside ``:workspace``. Parameters
        set to None count as not supplied.

        Args:
            kind: Resource kind (enum member or its string value)
            params: Placeholder values
            allow_missing: Return the path with literal placeholders left in
                instead of raising when a parameter is missing

        Returns:
            Resolved URI path

        Raises:
            UnknownResourceKind: If the kind is not in the route table
            MissingRouteParameter: If a placeholder was not supplied and
                allow_missing is False
        """
        template = self.template(kind)
        values = {key: value for key, value in (params or {}).items() if value is not None}
        missing: list[str] = []

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in values:
                return "/" + escape_segment(values[name])
            missing.append(name)
            return match.group(0)

        path = PLACEHOLDER_RE.sub(substitute, template)

        if missing and not allow_missing:
            raise MissingRouteParameter(_kind_name(kind), missing, path)
        return path


def _kind_name(kind: ResourceKind | str) -> str:
    if isinstance(kind, ResourceKind):
        return kind.value
    return str(kind)


default_resolver = RouteResolver()


def resolve(
    kind: ResourceKind | str,
    params: Mapping[str, Any] | None = None,
    allow_missing: bool = False,
) -> str:
    """Resolve a path against the default route table.

    See RouteResolver.resolve for details.
    """
    return default_resolver.resolve(kind, params, allow_missing=allow_missing)


def placeholders(kind: ResourceKind | str) -> list[str]:
    """Return the placeholder names of a default route template."""
    return default_resolver.placeholders(kind)
