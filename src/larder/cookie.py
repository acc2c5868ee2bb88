"""
Aliased cookies.

A Cookie wraps an immutable SetCookie and adds what the jar needs: a
stable alias, the value codec (prefix and encryption) and a mutable
queue flag. Attribute changes are copy-on-write; ``queue()`` and
``unqueue()`` mutate in place.
"""

import copy
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from larder.codec import ValueCodec
from larder.context import get_request
from larder.exceptions import ConfigurationError
from larder.http import SetCookie
from larder.types import HasCookies
from larder.validation import to_bool

if TYPE_CHECKING:
    from larder.jar import CookieJar

# Offset used by clear() and never_expires(): five years in seconds
FIVE_YEARS: int = 60 * 60 * 24 * 365 * 5

# Alternative spellings accepted in cookie parameters
_PARAM_ALIASES: dict[str, str] = {
    "httpOnly": "httponly",
    "http_only": "httponly",
    "sameSite": "samesite",
    "same_site": "samesite",
}


def normalize_params(params: Mapping[str, Any] | None, **kwargs: Any) -> dict[str, Any]:
    """Merge cookie parameters into one dict with canonical key names."""
    merged: dict[str, Any] = {}
    for source in (params or {}, kwargs):
        for key, value in source.items():
            merged[_PARAM_ALIASES.get(key, key)] = value
    return merged


class Cookie:
    """
    A named cookie registered in a CookieJar.

    Usage:
        cart = jar.make("cart", value={"items": [1, 2]}, encrypted=True)
        cart.queue()

        # Later, on another request:
        items = cart.http_value(request)
    """

    __slots__ = ("_alias", "_codec", "_cookie", "_jar", "_queued")

    def __init__(
        self,
        alias: str,
        params: Mapping[str, Any] | None = None,
        jar: "CookieJar | None" = None,
        **kwargs: Any,
    ) -> None:
        if jar is None:
            from larder.jar import CookieJar
            jar = CookieJar.get_instance()

        params = normalize_params(params, **kwargs)

        self._alias = alias
        self._jar = jar
        self._queued = False

        name = params.get("name") or alias
        salt = params.get("salt")
        if salt is None:
            salt = jar.get_salt()
        if isinstance(salt, str):
            name = f"{name}{salt}"
        name = name.replace(".", "_")

        prefix = params["prefix"] if "prefix" in params else jar.get_prefix()
        if prefix and not isinstance(prefix, str):
            raise ConfigurationError("Cookie could not prefix cookie value.")

        self._codec = ValueCodec(
            alias,
            encrypted=to_bool(params.get("encrypted", False)),
            prefix=prefix or None,
        )
        value = self._codec.encode(params.get("value"))

        expires = jar.get_availability(params.get("lifetime"))

        path, domain, secure, httponly, raw, samesite = jar.get_defaults(
            params.get("path"),
            params.get("domain"),
            params.get("secure"),
            params.get("httponly"),
            params.get("raw"),
            params.get("samesite"),
        )

        self._cookie = SetCookie(
            name=name,
            value=value,
            expires=expires,
            path=path or "/",
            domain=domain,
            secure=bool(secure),
            httponly=httponly,
            raw=raw,
            samesite=samesite,
        )

    def __repr__(self) -> str:
        return (
            f"Cookie(alias={self._alias!r}, name={self.name!r}, "
            f"encrypted={self.is_encrypted()!r}, queued={self._queued!r})"
        )

    def __str__(self) -> str:
        return self.to_header_value()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def alias(self) -> str:
        return self._alias

    @property
    def jar(self) -> "CookieJar":
        return self._jar

    @property
    def name(self) -> str:
        """Wire name, including the salt suffix."""
        return self._cookie.name

    @property
    def value(self) -> str | None:
        """Encoded value as stored on the wire."""
        return self._cookie.value

    @property
    def real_value(self) -> Any:
        """This cookie's own value, decoded."""
        if self._cookie.value is None:
            return None
        return self._codec.decode(self._cookie.value)

    @property
    def prefix(self) -> str | None:
        return self._codec.prefix

    @property
    def expires(self) -> int:
        return self._cookie.expires

    @property
    def path(self) -> str | None:
        return self._cookie.path

    @property
    def domain(self) -> str | None:
        return self._cookie.domain

    @property
    def secure(self) -> bool:
        return self._cookie.secure

    @property
    def httponly(self) -> bool:
        return self._cookie.httponly

    @property
    def raw(self) -> bool:
        return self._cookie.raw

    @property
    def samesite(self) -> str | None:
        return self._cookie.samesite

    @property
    def set_cookie(self) -> SetCookie:
        """The wrapped wire-level cookie."""
        return self._cookie

    def get_alias(self) -> str:
        return self._alias

    def is_encrypted(self) -> bool:
        return self._codec.encrypted

    def is_queued(self) -> bool:
        return self._queued

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        return self._cookie.to_header_value()

    # -------------------------------------------------------------------------
    # Request values
    # -------------------------------------------------------------------------

    def http_value(self, request: HasCookies | None = None) -> Any:
        """
        Read and decode this cookie from a request.

        Falls back to the ambient request bound by QueuedCookiesMiddleware.
        Returns None when the request does not carry the cookie.
        """
        if request is None:
            request = get_request()

        value = request.cookies.get(self.name)
        if not value:
            return None

        if not self.raw:
            value = unquote(value)

        return self._codec.decode(value)

    def check_request_value(
        self,
        request: HasCookies | None = None,
        value: Any = None,
    ) -> bool:
        """
        Compare the request's value of this cookie with ``value``.

        Without ``value``, compares against this cookie's own value.
        """
        http_value = self.http_value(request)

        if value is None:
            value = self.real_value

        return http_value is not None and value == http_value

    # -------------------------------------------------------------------------
    # Queue state (mutable)
    # -------------------------------------------------------------------------

    def queue(self) -> "Cookie":
        self._queued = True
        return self

    def unqueue(self) -> "Cookie":
        self._queued = False
        return self

    # -------------------------------------------------------------------------
    # Copy-on-write mutators
    # -------------------------------------------------------------------------

    def _replace(self, set_cookie: SetCookie) -> "Cookie":
        clone = copy.copy(self)
        clone._cookie = set_cookie
        return clone

    def clear(self) -> "Cookie":
        """Return a copy that tells the browser to delete the cookie."""
        return self._replace(
            self._cookie.with_value(None).with_expires(int(time.time()) - FIVE_YEARS)
        )

    def never_expires(self) -> "Cookie":
        """Return a copy that expires five years from now."""
        return self._replace(self._cookie.with_expires(int(time.time()) + FIVE_YEARS))

    def with_real_value(self, value: Any = None) -> "Cookie":
        """Return a copy holding the encoded form of ``value``."""
        return self._replace(self._cookie.with_value(self._codec.encode(value)))

    def with_value(self, value: str | None) -> "Cookie":
        """Return a copy holding an already-encoded wire value."""
        return self._replace(self._cookie.with_value(value))

    def with_expires(self, expires: int) -> "Cookie":
        return self._replace(self._cookie.with_expires(expires))

    def with_lifetime(self, lifetime: Any) -> "Cookie":
        """Return a copy whose expiry is resolved by the jar."""
        return self.with_expires(self._jar.get_availability(lifetime))

    def with_path(self, path: str | None) -> "Cookie":
        return self._replace(self._cookie.with_path(path))

    def with_domain(self, domain: str | None) -> "Cookie":
        return self._replace(self._cookie.with_domain(domain))

    def with_secure(self, secure: bool = True) -> "Cookie":
        return self._replace(self._cookie.with_secure(secure))

    def with_httponly(self, httponly: bool = True) -> "Cookie":
        return self._replace(self._cookie.with_httponly(httponly))

    def with_raw(self, raw: bool = True) -> "Cookie":
        return self._replace(self._cookie.with_raw(raw))

    def with_samesite(self, samesite: str | None) -> "Cookie":
        return self._replace(self._cookie.with_samesite(samesite))
