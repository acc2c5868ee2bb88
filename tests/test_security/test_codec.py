"""Tests for larder.codec — prefix, JSON and encryption pipeline."""

from typing import Any

import pytest

from larder.codec import ValueCodec
from larder.exceptions import DecodingError, EncodingError


VALUES: list[Any] = [
    "hello world",
    "123",
    "3.14",
    {"items": [1, 2, 3], "owner": "alice"},
    [1, "two", {"three": 3}],
    {"nested": {"unicode": "crème brûlée"}},
]


class TestRoundTrip:
    @pytest.mark.parametrize("value", VALUES)
    @pytest.mark.parametrize("encrypted", [True, False])
    @pytest.mark.parametrize("prefix", ["", "pfx_"])
    def test_decode_inverts_encode(self, value: Any, encrypted: bool, prefix: str) -> None:
        codec = ValueCodec("cart", encrypted=encrypted, prefix=prefix)
        assert codec.decode(codec.encode(value)) == value

    def test_numeric_string_stays_a_string(self) -> None:
        codec = ValueCodec("counter")
        assert codec.encode("123") == "123"
        decoded = codec.decode("123")
        assert decoded == "123"
        assert isinstance(decoded, str)

    def test_none_is_not_encoded(self) -> None:
        codec = ValueCodec("x", encrypted=True, prefix="p_")
        assert codec.encode(None) is None


class TestEncode:
    def test_structured_value_is_compact_json(self) -> None:
        codec = ValueCodec("x")
        assert codec.encode({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_prefix_is_prepended(self) -> None:
        codec = ValueCodec("x", prefix="v1_")
        assert codec.encode("plain") == "v1_plain"

    def test_prefix_wraps_ciphertext(self) -> None:
        codec = ValueCodec("x", encrypted=True, prefix="v1_")
        wire = codec.encode("secret")
        assert wire.startswith("v1_")
        assert "secret" not in wire

    def test_unserializable_value(self) -> None:
        codec = ValueCodec("x")
        with pytest.raises(EncodingError):
            codec.encode({"when": object()})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), {"ratio": float("-inf")}])
    def test_non_finite_float_is_rejected(self, value: Any) -> None:
        with pytest.raises(EncodingError):
            ValueCodec("x").encode(value)

    def test_circular_value(self) -> None:
        data: list[Any] = []
        data.append(data)
        with pytest.raises(EncodingError):
            ValueCodec("x").encode(data)

    def test_alias_isolation(self) -> None:
        first = ValueCodec("first", encrypted=True).encode("same")
        second = ValueCodec("second", encrypted=True).encode("same")
        assert first != second
        with pytest.raises(DecodingError):
            ValueCodec("second", encrypted=True).decode(first)

    def test_same_alias_interoperates(self) -> None:
        wire = ValueCodec("shared", encrypted=True).encode({"k": "v"})
        assert ValueCodec("shared", encrypted=True).decode(wire) == {"k": "v"}


class TestDecode:
    def test_short_wire_with_prefix_is_left_unchanged(self) -> None:
        codec = ValueCodec("x", prefix="long_prefix_")
        assert codec.decode("abc") == "abc"

    def test_missing_prefix_is_left_unchanged(self) -> None:
        codec = ValueCodec("x", prefix="v1_")
        assert codec.decode("v2_value") == "v2_value"

    def test_json_object_decodes_to_dict(self) -> None:
        assert ValueCodec("x").decode('{"a":1}') == {"a": 1}

    def test_invalid_json_is_returned_as_text(self) -> None:
        assert ValueCodec("x").decode("{not json") == "{not json"

    def test_garbage_ciphertext(self) -> None:
        codec = ValueCodec("x", encrypted=True)
        with pytest.raises(DecodingError):
            codec.decode("definitely-not-a-token")

    def test_truncated_ciphertext(self) -> None:
        codec = ValueCodec("x", encrypted=True)
        wire = codec.encode("payload")
        with pytest.raises(DecodingError):
            codec.decode(wire[:-10])

    def test_custom_cipher_factory(self) -> None:
        class Reverser:
            def __init__(self, key: str) -> None:
                self.key = key

            def encrypt(self, plaintext: str) -> str:
                return plaintext[::-1]

            def decrypt(self, ciphertext: str) -> str:
                return ciphertext[::-1]

        codec = ValueCodec("x", encrypted=True, cipher_factory=Reverser)
        assert codec.encode("abc") == "cba"
        assert codec.decode("cba") == "abc"
