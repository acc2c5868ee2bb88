"""
Queued cookies middleware.
"""

import logging
from typing import Any

from larder.context import bind_request
from larder.jar import CookieJar
from larder.request import Request
from larder.types import ASGIApp, Receive, Scope, Send


class QueuedCookiesMiddleware:
    """
    Emits the jar's queued cookies on the outgoing response.

    Only HTTP scopes are handled; lifespan and websocket scopes go
    straight to the wrapped application.

    When the response starts, the jar is drained once and one
    ``Set-Cookie`` header is appended per queued cookie. Messages sent
    after the start message go out unchanged, since their headers are
    already on the wire.

    The current request is bound as the ambient request for the duration
    of the call, so handlers can use ``cookie.http_value()`` directly.
    """

    def __init__(
        self,
        app: ASGIApp,
        jar: CookieJar | None = None,
    ) -> None:
        self.app = app
        self._jar = jar
        self._logger = logging.getLogger("larder.middleware")

    @property
    def jar(self) -> CookieJar:
        """The jar to drain. Defaults to the process-wide jar."""
        return self._jar if self._jar is not None else CookieJar.get_instance()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        await self.process(scope, receive, send)

    async def process(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        headers_sent = False

        async def send_with_cookies(message: dict[str, Any]) -> None:
            nonlocal headers_sent
            if message["type"] == "http.response.start" and not headers_sent:
                cookies = self.jar.fetch_queued()
                if cookies:
                    headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                    for cookie in cookies:
                        headers.append(
                            (b"set-cookie", cookie.to_header_value().encode("latin-1"))
                        )
                    message["headers"] = headers
                    self._logger.debug(
                        "%s %s emitted %d queued cookie(s)",
                        request.method,
                        request.path,
                        len(cookies),
                    )
                headers_sent = True
            await send(message)

        with bind_request(request):
            # pyrefly: ignore [bad-argument-type]
            await self.app(scope, receive, send_with_cookies)
