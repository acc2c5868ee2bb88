"""
Cookie value codec.

Maps a logical value (``None``, text, or JSON data) to the string stored
in a cookie, and back::

    encode: value -> json (non-str only) -> encrypt -> prefix
    decode: strip prefix -> decrypt -> json (non-numeric, JSON-like only)
"""

import json
from collections.abc import Callable

from larder.encryption import Encrypter
from larder.exceptions import DecodingError, EncodingError
from larder.types import Cipher, JSONData
from larder.validation import is_json, is_numeric


class ValueCodec:
    """
    Stateless encode/decode pipeline for a single cookie's value.

    The encryption key is derived from ``alias``, so two codecs sharing an
    alias read each other's values regardless of which jar built them.
    """

    __slots__ = ("alias", "encrypted", "prefix", "_cipher_factory")

    def __init__(
        self,
        alias: str,
        encrypted: bool = False,
        prefix: str | None = None,
        cipher_factory: Callable[[str], Cipher] = Encrypter.for_alias,
    ) -> None:
        self.alias = alias
        self.encrypted = encrypted
        self.prefix = prefix
        self._cipher_factory = cipher_factory

    def __repr__(self) -> str:
        return (
            f"ValueCodec(alias={self.alias!r}, encrypted={self.encrypted!r}, "
            f"prefix={self.prefix!r})"
        )

    def encode(self, value: JSONData) -> str | None:
        """Encode a logical value into its wire string."""
        if value is None:
            return None

        if not isinstance(value, str):
            try:
                value = json.dumps(
                    value, separators=(",", ":"), ensure_ascii=False, allow_nan=False,
                )
            except (TypeError, ValueError) as exc:
                raise EncodingError("Cookie could not encode the value in JSON") from exc

        if self.encrypted:
            value = self._cipher_factory(self.alias).encrypt(value)

        if self.prefix:
            value = f"{self.prefix}{value}"

        return value

    def decode(self, wire: str) -> JSONData:
        """Decode a wire string back into its logical value."""
        if self.prefix and wire.startswith(self.prefix):
            wire = wire[len(self.prefix):]

        if self.encrypted:
            wire = self._cipher_factory(self.alias).decrypt(wire)

        if not is_numeric(wire) and is_json(wire):
            try:
                return json.loads(wire)
            except ValueError as exc:
                raise DecodingError("Cookie could not decode the value from JSON") from exc

        return wire
