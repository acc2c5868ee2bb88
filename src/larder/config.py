"""
Cookie jar configuration.

CookieJarConfig is a frozen dataclass: immutable after creation, one field
per jar-wide default. Build it directly, from a mapping, or from
environment variables::

    config = CookieJarConfig(samesite="lax", lifetime=3600)
    config = CookieJarConfig.from_mapping({"httpOnly": True, "expire": 3600})
    config = CookieJarConfig.from_env()   # LARDER_COOKIE_* variables
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from larder.types import Lifetime
from larder.validation import to_bool

# Alternative spellings accepted by ``from_mapping``
_ALIASES: dict[str, str] = {
    "httpOnly": "httponly",
    "http_only": "httponly",
    "sameSite": "samesite",
    "same_site": "samesite",
    "expire": "lifetime",
    "expires": "lifetime",
}

_BOOL_FIELDS: frozenset[str] = frozenset({"httponly", "raw"})


@dataclass(frozen=True, slots=True)
class CookieJarConfig:
    """Jar-wide cookie defaults. ``lifetime=0`` means session cookies."""

    path: str | None = None
    domain: str | None = None
    secure: bool | None = None
    httponly: bool = True
    raw: bool = False
    samesite: str | None = None
    lifetime: Lifetime = 0
    salt: str | None = None
    prefix: str | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "CookieJarConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}

        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                continue
            if name in _BOOL_FIELDS:
                if value is None:
                    continue
                value = to_bool(value)
            if name == "lifetime" and value is None:
                continue
            values[name] = value

        return cls(**values)

    @classmethod
    def from_env(
        cls,
        prefix: str = "LARDER_COOKIE_",
        environ: Mapping[str, str] | None = None,
    ) -> "CookieJarConfig":
        """Build a config from ``<prefix><FIELD>`` environment variables."""
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for f in fields(cls):
            raw = environ.get(f"{prefix}{f.name.upper()}")
            if raw is None or raw == "":
                continue
            if f.name in _BOOL_FIELDS or f.name == "secure":
                values[f.name] = to_bool(raw)
            elif f.name == "lifetime":
                values[f.name] = int(raw) if raw.strip().lstrip("+-").isdigit() else raw
            else:
                values[f.name] = raw

        return cls(**values)
