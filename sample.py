"""
Larder - cookie jar sample

A bare ASGI application that remembers a theme and a shopping cart in
cookies. The cart is JSON-encoded, encrypted and prefixed.
Run with: uv run uvicorn sample:app --reload
"""

import json
import logging
from typing import Any

from larder import CookieJar, CookieJarConfig, QueuedCookiesMiddleware, Request
from larder.types import Receive, Scope, Send

# =============================================================================
# Application Setup
# =============================================================================

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
logger = logging.getLogger("larder.sample")

jar = CookieJar(CookieJarConfig(
    path="/",
    httponly=True,
    samesite="lax",
    lifetime="+1 week",
))

theme = jar.make("theme", value="light")
cart = jar.make("shop.cart", value=[], encrypted=True, prefix="v1_")


# =============================================================================
# Routes
# =============================================================================


async def send_json(send: Send, payload: Any, status: int = 200) -> None:
    body = json.dumps(payload).encode("utf-8")
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode("latin-1")),
        ],
    })
    await send({"type": "http.response.body", "body": body})


async def show(request: Request, send: Send) -> None:
    """Echo the cookie values carried by the request."""
    await send_json(send, {
        "theme": theme.http_value(),
        "cart": cart.http_value() or [],
    })


async def toggle_theme(request: Request, send: Send) -> None:
    current = theme.http_value() or "light"
    new_theme = "dark" if current == "light" else "light"
    jar.add(theme.with_real_value(new_theme).queue())
    await send_json(send, {"theme": new_theme})


async def add_to_cart(request: Request, send: Send) -> None:
    items: list[Any] = cart.http_value() or []
    items.append(len(items) + 1)
    jar.add(cart.with_real_value(items).queue())
    await send_json(send, {"cart": items})


async def forget(request: Request, send: Send) -> None:
    jar.add(theme.clear().queue())
    jar.add(cart.clear().queue())
    await send_json(send, {"forgotten": True})


ROUTES = {
    ("GET", "/"): show,
    ("POST", "/theme"): toggle_theme,
    ("POST", "/cart"): add_to_cart,
    ("DELETE", "/cookies"): forget,
}


async def application(scope: Scope, receive: Receive, send: Send) -> None:
    if scope["type"] != "http":
        return
    request = Request(scope, receive)
    handler = ROUTES.get((request.method, request.path))
    if handler is None:
        await send_json(send, {"error": "Not Found"}, status=404)
        return
    await handler(request, send)


app = QueuedCookiesMiddleware(application, jar=jar)


def main() -> None:
    """Run the sample with uvicorn."""
    import uvicorn

    logger.info("""
    Larder cookie jar sample
    ========================

    Available endpoints:
    - GET    /          - Show theme and cart read from cookies
    - POST   /theme     - Toggle the theme cookie
    - POST   /cart      - Add an item to the encrypted cart cookie
    - DELETE /cookies   - Clear both cookies
    """)

    uvicorn.run("sample:app", host="127.0.0.1", port=8000, reload=True, log_level="info")


if __name__ == "__main__":
    main()
