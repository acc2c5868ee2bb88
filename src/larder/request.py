"""
Inbound request view for Larder.
Exposes the headers and cookies of an ASGI HTTP scope.
"""

from collections.abc import Mapping
from functools import cached_property

from larder.http import parse_cookies
from larder.types import Receive, Scope


class Request:
    """
    Read-only HTTP request wrapper over an ASGI scope.

    Only the parts the cookie jar reads are exposed; the body is
    never consumed.
    """

    def __init__(self, scope: Scope, receive: Receive | None = None) -> None:
        self._scope = scope
        self._receive = receive

    @property
    def method(self) -> str:
        """HTTP method (GET, POST, etc.)."""
        return self._scope.get("method", "GET")

    @property
    def path(self) -> str:
        """Request path."""
        return self._scope.get("path", "/")

    @property
    def scheme(self) -> str:
        """URL scheme (http or https)."""
        return self._scope.get("scheme", "http")

    @cached_property
    def headers(self) -> Mapping[str, str]:
        """Request headers as a dictionary."""
        headers: dict[str, str] = {}
        raw_headers = self._scope.get("headers", [])

        for name, value in raw_headers:
            header_name = name.decode("latin-1").lower()
            header_value = value.decode("latin-1")
            if header_name == "cookie" and header_name in headers:
                # HTTP/2 may split the Cookie header into several fields
                headers[header_name] = f"{headers[header_name]}; {header_value}"
            else:
                headers[header_name] = header_value

        return headers

    @cached_property
    def cookies(self) -> Mapping[str, str]:
        """Request cookies."""
        cookie_header = self.headers.get("cookie", "")
        return parse_cookies(cookie_header)

    def get_header(self, name: str, default: str | None = None) -> str | None:
        """Get a specific header value."""
        return self.headers.get(name.lower(), default)

    def get_cookie(self, name: str, default: str | None = None) -> str | None:
        """Get a specific cookie value."""
        return self.cookies.get(name, default)
