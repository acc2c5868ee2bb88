"""
Symmetric encryption for cookie values.
Wraps Fernet (AES-128-CBC + HMAC-SHA256) from the ``cryptography`` package.
"""

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken

from larder.exceptions import DecodingError

# Length of the hexadecimal alias digest used as key material
KEY_SEED_LENGTH: int = 16


def derive_key(alias: str) -> str:
    """Derive the per-alias key seed: the first 16 hex chars of SHA-256(alias)."""
    return hashlib.sha256(alias.encode("utf-8")).hexdigest()[:KEY_SEED_LENGTH]


class Encrypter:
    """
    Encrypts and decrypts text with a key seed.

    The seed is stretched with SHA-256 into the 32 bytes Fernet expects,
    so equal seeds always produce interoperable ciphertext. Tokens are
    URL-safe base64 and can be stored in a cookie as-is.
    """

    def __init__(self, key: str | bytes) -> None:
        if isinstance(key, str):
            key = key.encode("utf-8")
        digest = hashlib.sha256(key).digest()
        self._fernet = Fernet(base64.urlsafe_b64encode(digest))

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a string and return the token as text."""
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt a token produced by ``encrypt``.

        Raises:
            DecodingError: If the token is malformed, truncated or was
                produced with another key.
        """
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
            return plaintext.decode("utf-8")
        except (InvalidToken, UnicodeError) as exc:
            raise DecodingError("Cookie value could not be decrypted") from exc

    @classmethod
    def for_alias(cls, alias: str) -> "Encrypter":
        """Build the encrypter bound to a cookie alias."""
        return cls(derive_key(alias))
