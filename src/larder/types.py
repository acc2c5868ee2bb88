"""
Type definitions for Larder.
Following Python 3.14 typing conventions.
"""

from collections.abc import Awaitable, Callable, Mapping, MutableMapping
from datetime import datetime
from typing import Any, Protocol, TypeAlias

# ASGI Types
Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]
ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]

# Cookie Types
JSONData: TypeAlias = dict[str, Any] | list[Any] | str | int | float | bool | None
Lifetime: TypeAlias = int | str | datetime
SameSite: TypeAlias = str | None
Defaults: TypeAlias = tuple[str | None, str | None, bool | None, bool, bool, SameSite]


class HasCookies(Protocol):
    """Protocol for inbound requests exposing their cookies."""

    @property
    def cookies(self) -> Mapping[str, str]: ...


class Cipher(Protocol):
    """Protocol for the symmetric encryption primitive."""

    def encrypt(self, plaintext: str) -> str: ...

    def decrypt(self, ciphertext: str) -> str: ...
