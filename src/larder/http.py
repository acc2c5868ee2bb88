"""
Wire-level cookie handling for Larder.
Parses ``Cookie`` request headers and serializes ``Set-Cookie`` values.
"""

import re
import time
from dataclasses import dataclass, replace
from email.utils import formatdate
from urllib.parse import quote

from larder.exceptions import ConfigurationError

SAMESITE_VALUES: frozenset[str] = frozenset({"lax", "strict", "none"})

# Characters forbidden in cookie names (RFC 6265 token) and raw values
_RESERVED_CHARS_RE = re.compile(r"[=,; \t\r\n\x0b\x0c]")
_RESERVED_VALUE_RE = re.compile(r"[,; \t\r\n\x0b\x0c]")

# Lifetime used for the "deleted" placeholder of an empty cookie
_DELETED_OFFSET: int = 31_536_001


@dataclass(frozen=True, slots=True)
class SetCookie:
    """
    A ``Set-Cookie`` directive (Immutable Value Object).

    ``expires`` is an absolute UNIX timestamp; ``0`` marks a session
    cookie. All ``with_*`` methods return a modified copy.
    """

    name: str
    value: str | None = None
    expires: int = 0
    path: str | None = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    raw: bool = False
    samesite: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("The cookie name cannot be empty.")
        if _RESERVED_CHARS_RE.search(self.name):
            raise ConfigurationError(
                f'The cookie name "{self.name}" contains invalid characters.'
            )
        if self.raw and self.value and _RESERVED_VALUE_RE.search(self.value):
            raise ConfigurationError(
                f'The raw value of cookie "{self.name}" contains invalid characters.'
            )
        # Written verbatim into the header, which ASGI carries as latin-1 bytes
        verbatim = {"path": self.path, "domain": self.domain}
        if self.raw:
            verbatim.update(name=self.name, value=self.value)
        for field, text in verbatim.items():
            if text and not _is_latin1(text):
                raise ConfigurationError(
                    f'The {field} of cookie "{self.name}" cannot be sent in a header.'
                )
        if self.samesite is not None:
            samesite = self.samesite.lower()
            if samesite not in SAMESITE_VALUES:
                raise ConfigurationError(
                    f'The "samesite" parameter value "{self.samesite}" is not valid.'
                )
            object.__setattr__(self, "samesite", samesite)
        object.__setattr__(self, "expires", int(self.expires))

    @property
    def max_age(self) -> int:
        """Seconds until expiry, never negative."""
        if self.expires == 0:
            return 0
        return max(0, self.expires - int(time.time()))

    def is_cleared(self) -> bool:
        """Whether the cookie asks the browser to delete it."""
        return self.expires != 0 and self.expires < time.time()

    def with_value(self, value: str | None) -> "SetCookie":
        return replace(self, value=value)

    def with_expires(self, expires: int) -> "SetCookie":
        return replace(self, expires=expires)

    def with_path(self, path: str | None) -> "SetCookie":
        return replace(self, path=path)

    def with_domain(self, domain: str | None) -> "SetCookie":
        return replace(self, domain=domain)

    def with_secure(self, secure: bool = True) -> "SetCookie":
        return replace(self, secure=secure)

    def with_httponly(self, httponly: bool = True) -> "SetCookie":
        return replace(self, httponly=httponly)

    def with_raw(self, raw: bool = True) -> "SetCookie":
        return replace(self, raw=raw)

    def with_samesite(self, samesite: str | None) -> "SetCookie":
        return replace(self, samesite=samesite)

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        name = self.name if self.raw else quote(self.name, safe="")

        if not self.value:
            expired = int(time.time()) - _DELETED_OFFSET
            parts = [f"{name}=deleted", f"expires={_http_date(expired)}", "Max-Age=0"]
        else:
            value = self.value if self.raw else quote(self.value, safe="")
            parts = [f"{name}={value}"]
            if self.expires != 0:
                parts.append(f"expires={_http_date(self.expires)}")
                parts.append(f"Max-Age={self.max_age}")

        if self.path:
            parts.append(f"path={self.path}")
        if self.domain:
            parts.append(f"domain={self.domain}")
        if self.secure or self.samesite == "none":
            parts.append("secure")
        if self.httponly:
            parts.append("httponly")
        if self.samesite:
            parts.append(f"samesite={self.samesite}")

        return "; ".join(parts)

    def __str__(self) -> str:
        return self.to_header_value()


def parse_cookies(cookie_header: str) -> dict[str, str]:
    """Parse a Cookie header string into a dictionary."""
    cookies: dict[str, str] = {}

    if not cookie_header:
        return cookies

    for item in cookie_header.split(";"):
        item = item.strip()
        if "=" in item:
            key, _, value = item.partition("=")
            cookies[key.strip()] = value.strip()

    return cookies


def _is_latin1(text: str) -> bool:
    try:
        text.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


def _http_date(timestamp: int) -> str:
    return formatdate(timestamp, usegmt=True)
