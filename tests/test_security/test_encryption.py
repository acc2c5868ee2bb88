"""Tests for larder.encryption — key derivation and Fernet wrapper."""

import hashlib

import pytest

from larder.encryption import Encrypter, derive_key
from larder.exceptions import DecodingError


class TestDeriveKey:
    def test_first_sixteen_hex_chars(self) -> None:
        expected = hashlib.sha256(b"cart").hexdigest()[:16]
        assert derive_key("cart") == expected
        assert len(derive_key("anything")) == 16

    def test_distinct_aliases(self) -> None:
        assert derive_key("a") != derive_key("b")


class TestEncrypter:
    def test_encrypt_and_decrypt(self) -> None:
        enc = Encrypter("0123456789abcdef")
        token = enc.encrypt("hello")
        assert token != "hello"
        assert enc.decrypt(token) == "hello"

    def test_token_is_url_safe(self) -> None:
        token = Encrypter("k").encrypt("x" * 100)
        assert all(c.isalnum() or c in "-_=" for c in token)

    def test_equal_keys_interoperate(self) -> None:
        token = Encrypter("seed").encrypt("v")
        assert Encrypter(b"seed").decrypt(token) == "v"

    def test_foreign_key(self) -> None:
        token = Encrypter("one").encrypt("v")
        with pytest.raises(DecodingError):
            Encrypter("two").decrypt(token)

    def test_for_alias(self) -> None:
        token = Encrypter.for_alias("cart").encrypt("v")
        assert Encrypter(derive_key("cart")).decrypt(token) == "v"
