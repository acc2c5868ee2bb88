"""
Value validation and coercion helpers.

The literal sets accepted here are part of the public contract:
tests pin them, and cookie parameters coming from configuration
files or environment variables rely on them.
"""

import json
import re
from typing import Any

TRUTHY_STRINGS: frozenset[str] = frozenset({"1", "true", "on", "yes"})

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def is_json(text: str) -> bool:
    """Check whether ``text`` parses as strict JSON. Never raises."""
    if not isinstance(text, str) or not text:
        return False
    try:
        json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return False
    return True


def is_numeric(text: Any) -> bool:
    """Check whether a value is a number or a numeric string."""
    if isinstance(text, bool):
        return False
    if isinstance(text, (int, float)):
        return True
    if not isinstance(text, str):
        return False
    return _NUMERIC_RE.match(text) is not None


def to_bool(value: Any) -> bool:
    """
    Coerce a flag to a strict boolean.

    Accepts booleans, the integer ``1`` and the strings in
    ``TRUTHY_STRINGS`` (case-insensitive, surrounding whitespace ignored)
    as true. Everything else, including ``None``, is false.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return False
