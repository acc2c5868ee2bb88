"""Tests for larder.http — Set-Cookie serialization and Cookie header parsing."""

import time

import pytest

from larder.exceptions import ConfigurationError
from larder.http import SetCookie, parse_cookies


class TestSetCookie:
    def test_session_cookie(self) -> None:
        header = SetCookie("name", "val").to_header_value()
        assert header == "name=val; path=/; httponly"

    def test_value_is_percent_encoded(self) -> None:
        header = SetCookie("n", "a b;c=").to_header_value()
        assert header.startswith("n=a%20b%3Bc%3D;")

    def test_raw_value_is_kept(self) -> None:
        header = SetCookie("n", "a%20b", raw=True).to_header_value()
        assert header.startswith("n=a%20b;")

    def test_raw_value_with_reserved_chars(self) -> None:
        with pytest.raises(ConfigurationError):
            SetCookie("n", "a b", raw=True)

    def test_raw_value_outside_latin1(self) -> None:
        with pytest.raises(ConfigurationError):
            SetCookie("n", "10€", raw=True)

    def test_non_latin1_value_is_percent_encoded(self) -> None:
        header = SetCookie("n", "10€").to_header_value()
        assert header.startswith("n=10%E2%82%AC;")
        header.encode("latin-1")

    def test_expiry_attributes(self) -> None:
        expires = int(time.time()) + 3600
        header = SetCookie("n", "v", expires=expires).to_header_value()
        assert "expires=" in header
        assert "GMT" in header
        max_age = int(header.split("Max-Age=")[1].split(";")[0])
        assert 3599 <= max_age <= 3600

    def test_all_attributes(self) -> None:
        header = SetCookie(
            "n", "v", path="/app", domain="example.com", secure=True,
            httponly=False, samesite="Lax",
        ).to_header_value()
        assert header == "n=v; path=/app; domain=example.com; secure; samesite=lax"

    def test_empty_value_deletes(self) -> None:
        header = SetCookie("n", None).to_header_value()
        assert header.startswith("n=deleted; expires=")
        assert "Max-Age=0" in header

    def test_samesite_none_forces_secure(self) -> None:
        header = SetCookie("n", "v", samesite="none").to_header_value()
        assert "secure" in header.split("; ")

    def test_invalid_samesite(self) -> None:
        with pytest.raises(ConfigurationError):
            SetCookie("n", "v", samesite="always")

    @pytest.mark.parametrize("name", ["", "a=b", "a b", "a;b", "a,b"])
    def test_invalid_name(self, name: str) -> None:
        with pytest.raises(ConfigurationError):
            SetCookie(name, "v")

    def test_with_methods_copy(self) -> None:
        original = SetCookie("n", "v")
        changed = original.with_value("w").with_path("/x").with_secure()
        assert (changed.value, changed.path, changed.secure) == ("w", "/x", True)
        assert (original.value, original.path, original.secure) == ("v", "/", False)

    def test_is_cleared(self) -> None:
        assert SetCookie("n", None, expires=int(time.time()) - 10).is_cleared()
        assert not SetCookie("n", "v").is_cleared()

    def test_str(self) -> None:
        cookie = SetCookie("n", "v")
        assert str(cookie) == cookie.to_header_value()


class TestParseCookies:
    def test_basic(self) -> None:
        result = parse_cookies("a=1; b=2")
        assert result == {"a": "1", "b": "2"}

    def test_empty(self) -> None:
        assert parse_cookies("") == {}

    def test_value_with_equals(self) -> None:
        assert parse_cookies("token=abc==; x") == {"token": "abc=="}
