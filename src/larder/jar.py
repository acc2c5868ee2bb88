"""
Cookie jar for Larder.

The jar is the registry of aliased cookies for an application. It holds
the jar-wide defaults, resolves lifetimes into expiry timestamps and
drains queued cookies for the response.
"""

import logging
import threading
import time
from collections.abc import Mapping
from dataclasses import asdict
from datetime import datetime
from typing import Any, ClassVar

from larder.config import CookieJarConfig
from larder.cookie import Cookie
from larder.exceptions import ConfigurationError, InvalidArgumentError, NotInitializedError
from larder.lifetime import parse_textual_datetime
from larder.types import Defaults, Lifetime
from larder.validation import is_numeric, to_bool

logger = logging.getLogger("larder.jar")


def is_lifetime(value: Any) -> bool:
    """Check whether a value is an accepted lifetime kind (int, str, datetime)."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, str, datetime))


class CookieJar:
    """
    Registry of aliased cookies with jar-wide defaults.

    The first jar created in a process is remembered and returned by
    ``CookieJar.get_instance()``. Prefer passing the jar explicitly;
    the handle exists for code that has no other way to reach it.

    Registry operations are guarded by a re-entrant lock, so a jar can
    be shared by the worker threads of one process.

    Usage:
        jar = CookieJar(CookieJarConfig(samesite="lax", lifetime="+1 day"))

        theme = jar.make("theme", value="dark")
        theme.queue()

        for cookie in jar.fetch_queued():
            headers.append(("set-cookie", str(cookie)))
    """

    _instance: ClassVar["CookieJar | None"] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        config: CookieJarConfig | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        if config is None:
            config = CookieJarConfig()
        elif not isinstance(config, CookieJarConfig):
            config = CookieJarConfig.from_mapping(config)
        if overrides:
            config = CookieJarConfig.from_mapping(
                {**asdict(config), **overrides}
            )

        self._cookies: dict[str, Cookie] = {}
        self._lock = threading.RLock()

        self.path: str | None = config.path
        self.domain: str | None = config.domain
        self.secure: bool | None = config.secure
        self.httponly: bool = config.httponly
        self.raw: bool = config.raw
        self.samesite: str | None = config.samesite
        self._lifetime: Lifetime = 0
        self._salt: str | None = config.salt
        self._prefix: str | None = config.prefix
        self.set_lifetime(config.lifetime)

        with CookieJar._instance_lock:
            if CookieJar._instance is None:
                CookieJar._instance = self

    def __repr__(self) -> str:
        return f"CookieJar(cookies={list(self._cookies)!r})"

    def __len__(self) -> int:
        return len(self._cookies)

    def __contains__(self, alias: object) -> bool:
        return alias in self._cookies

    # -------------------------------------------------------------------------
    # Process-wide handle
    # -------------------------------------------------------------------------

    @classmethod
    def get_instance(cls) -> "CookieJar":
        """Return the first jar created in this process."""
        instance = CookieJar._instance
        if instance is None:
            raise NotInitializedError(f"Unavailable [{cls.__name__}] instance")
        return instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the process-wide jar. Intended for tests."""
        with CookieJar._instance_lock:
            CookieJar._instance = None

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def make(
        self,
        alias: str,
        params: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Cookie:
        """Build a cookie bound to this jar and register it under ``alias``."""
        cookie = Cookie(alias, params, self, **kwargs)
        self.add(cookie)
        return cookie

    def add(self, cookie: Cookie) -> "CookieJar":
        """Register a cookie under its own alias, replacing any previous one."""
        with self._lock:
            replaced = cookie.alias in self._cookies
            self._cookies[cookie.alias] = cookie
        logger.debug(
            "cookie %s alias=%s name=%s",
            "replaced" if replaced else "registered",
            cookie.alias,
            cookie.name,
        )
        return self

    def get(self, alias: str) -> Cookie | None:
        return self._cookies.get(alias)

    def all(self) -> dict[str, Cookie]:
        with self._lock:
            return dict(self._cookies)

    def remove(self, alias: str) -> Cookie | None:
        """Drop a cookie from the registry and return it."""
        with self._lock:
            return self._cookies.pop(alias, None)

    def fetch_queued(self) -> list[Cookie]:
        """
        Return every queued cookie and unqueue it.

        This is a one-shot drain: a second call returns nothing until
        cookies are queued again.
        """
        queued: list[Cookie] = []
        with self._lock:
            for cookie in self._cookies.values():
                if cookie.is_queued():
                    queued.append(cookie)
                    cookie.unqueue()
        if queued:
            logger.debug("drained %d queued cookie(s)", len(queued))
        return queued

    # -------------------------------------------------------------------------
    # Lifetime
    # -------------------------------------------------------------------------

    def get_availability(self, lifetime: Lifetime | None = None) -> int:
        """
        Resolve a lifetime into an absolute UNIX timestamp.

        - ``None``: the jar's default lifetime.
        - ``0``: session cookie, returns ``0``.
        - ``int`` (or numeric string): seconds from now.
        - ``str``: textual datetime such as ``"+1 week"`` or ``"2030-01-01"``.
        - ``datetime``: its own timestamp.

        Raises:
            ConfigurationError: If the lifetime is of another type.
            InvalidArgumentError: If a lifetime cannot be parsed or is out of range.
        """
        if lifetime is None:
            lifetime = self._lifetime

        if not is_lifetime(lifetime):
            raise ConfigurationError(
                "Unable to determine cookie availability, must require an int type "
                "or type string or datetime instance for expiration value"
            )

        if isinstance(lifetime, datetime):
            return int(lifetime.timestamp())

        if isinstance(lifetime, str):
            if is_numeric(lifetime):
                try:
                    lifetime = int(float(lifetime))
                except OverflowError as exc:
                    raise InvalidArgumentError(
                        f"Unable to determine cookie availability, lifetime {lifetime!r} "
                        "is out of range"
                    ) from exc
            else:
                return parse_textual_datetime(lifetime)

        if lifetime == 0:
            return 0

        return int(time.time()) + lifetime

    def get_lifetime(self) -> Lifetime:
        return self._lifetime

    def set_lifetime(self, lifetime: Any) -> "CookieJar":
        """Set the default lifetime. A value of the wrong kind resets it to 0."""
        if not is_lifetime(lifetime):
            logger.warning(
                "invalid default cookie lifetime %r, falling back to session cookies",
                lifetime,
            )
            lifetime = 0
        self._lifetime = lifetime
        return self

    # -------------------------------------------------------------------------
    # Defaults
    # -------------------------------------------------------------------------

    def get_defaults(
        self,
        path: str | None = None,
        domain: str | None = None,
        secure: bool | None = None,
        httponly: bool | str | None = None,
        raw: bool | str | None = None,
        samesite: str | None = None,
    ) -> Defaults:
        """Resolve cookie attributes, falling back to the jar defaults per field."""
        return (
            path or self.path,
            domain or self.domain,
            secure or self.secure,
            to_bool(self.httponly if httponly is None else httponly),
            to_bool(self.raw if raw is None else raw),
            samesite or self.samesite,
        )

    def set_defaults(
        self,
        path: str | None = None,
        domain: str | None = None,
        secure: bool | None = None,
        httponly: bool | str | None = None,
        raw: bool | str | None = None,
        samesite: str | None = None,
    ) -> "CookieJar":
        """Replace all attribute defaults at once."""
        self.path = path
        self.domain = domain
        self.secure = secure
        self.httponly = to_bool(True if httponly is None else httponly)
        self.raw = to_bool(False if raw is None else raw)
        self.samesite = samesite
        return self

    def get_salt(self) -> str | None:
        return self._salt

    def set_salt(self, salt: str) -> "CookieJar":
        self._salt = salt
        return self

    def get_prefix(self) -> str | None:
        return self._prefix

    def set_prefix(self, prefix: str | None) -> "CookieJar":
        self._prefix = prefix
        return self
