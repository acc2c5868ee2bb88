"""
Shared fixtures and helpers for building ASGI scope / receive / send in tests.
"""

from collections.abc import Awaitable, Callable, Iterator, Mapping
from typing import Any

import pytest

from larder.jar import CookieJar


@pytest.fixture(autouse=True)
def reset_jar_instance() -> Iterator[None]:
    """Every test starts without a process-wide jar."""
    CookieJar.reset_instance()
    yield
    CookieJar.reset_instance()


@pytest.fixture
def jar() -> CookieJar:
    return CookieJar()


class FakeRequest:
    """Any object with a ``cookies`` mapping can be read by a Cookie."""

    def __init__(self, cookies: Mapping[str, str] | None = None) -> None:
        self.cookies = dict(cookies or {})


def make_scope(
    method: str = "GET",
    path: str = "/",
    headers: dict[str, str] | None = None,
    query_string: str = "",
    scope_type: str = "http",
    extras: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a minimal ASGI scope dict."""
    raw_headers: list[tuple[bytes, bytes]] = []
    for name, value in (headers or {}).items():
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    scope: dict[str, Any] = {
        "type": scope_type,
        "method": method,
        "path": path,
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
        "client": ("127.0.0.1", 12345),
        "scheme": "http",
    }
    if extras:
        scope.update(extras)
    return scope


def make_receive(body: bytes = b"") -> Callable[[], Awaitable[dict[str, Any]]]:
    """Create a simple ASGI receive callable that yields one body chunk."""
    called = False

    async def receive() -> dict[str, Any]:
        nonlocal called
        if not called:
            called = True
            return {"type": "http.request", "body": body, "more_body": False}
        return {"type": "http.disconnect"}

    return receive


class ResponseCapture:
    """Captures ASGI send() messages for assertions."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []
        self.status: int = 0
        self.headers: dict[str, str] = {}
        self.raw_headers: list[tuple[str, str]] = []
        self.body: bytes = b""

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)
        if message["type"] == "http.response.start":
            self.status = message.get("status", 0)
            for name, value in message.get("headers", []):
                header = (name.decode("latin-1").lower(), value.decode("latin-1"))
                self.raw_headers.append(header)
                self.headers[header[0]] = header[1]
        elif message["type"] == "http.response.body":
            self.body += message.get("body", b"")

    def get_all(self, name: str) -> list[str]:
        """All values of a repeated header, in order."""
        return [value for header, value in self.raw_headers if header == name.lower()]
