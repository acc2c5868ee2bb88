"""
Larder - server-side HTTP cookies for ASGI applications

Aliased cookies with prefixed, JSON-serialized and encrypted values,
a registry with jar-wide defaults and flexible lifetimes, and a queue
that middleware drains onto outgoing responses.
"""

from larder.codec import ValueCodec
from larder.config import CookieJarConfig
from larder.context import bind_request, get_request
from larder.cookie import Cookie
from larder.encryption import Encrypter, derive_key
from larder.exceptions import (
    ConfigurationError,
    CookieError,
    DecodingError,
    EncodingError,
    InvalidArgumentError,
    LarderException,
    NotInitializedError,
)
from larder.http import SetCookie, parse_cookies
from larder.jar import CookieJar
from larder.middleware import QueuedCookiesMiddleware
from larder.request import Request

__version__ = "0.1.0"
__all__ = [
    "Cookie",
    "CookieJar",
    "CookieJarConfig",
    "ValueCodec",
    "Encrypter",
    "derive_key",
    "SetCookie",
    "parse_cookies",
    "Request",
    "QueuedCookiesMiddleware",
    "bind_request",
    "get_request",
    "LarderException",
    "CookieError",
    "ConfigurationError",
    "InvalidArgumentError",
    "EncodingError",
    "DecodingError",
    "NotInitializedError",
]
