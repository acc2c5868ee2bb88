"""
Ambient request context.

``QueuedCookiesMiddleware`` binds the current request in a ContextVar so
that ``Cookie.http_value()`` can be called from a handler without passing
the request down explicitly.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from larder.exceptions import LarderException
from larder.types import HasCookies

_request_var: ContextVar[HasCookies | None] = ContextVar("larder_request", default=None)


class NoActiveRequest(LarderException, LookupError):
    """Raised when the ambient request is read outside of a request."""

    def __init__(self) -> None:
        super().__init__(
            "No active request. Pass the request explicitly or add "
            "QueuedCookiesMiddleware to the application."
        )


def get_request() -> HasCookies:
    """Return the request bound to the current context."""
    request = _request_var.get()
    if request is None:
        raise NoActiveRequest()
    return request


@contextmanager
def bind_request(request: HasCookies) -> Iterator[HasCookies]:
    """Bind ``request`` as the ambient request for the enclosed block."""
    token = _request_var.set(request)
    try:
        yield request
    finally:
        _request_var.reset(token)
