"""
Textual lifetime parsing.

Turns expressions such as ``"+1 day"``, ``"2 weeks 3 hours"``,
``"tomorrow"`` or ``"2030-01-01 12:00 UTC"`` into UNIX timestamps.
Relative offsets are applied with ``dateutil.relativedelta`` so that
months and years follow the calendar; absolute dates go through
``dateutil.parser``.
"""

import re
from datetime import datetime, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from larder.exceptions import InvalidArgumentError

_UNITS: dict[str, str] = {
    "sec": "seconds", "secs": "seconds", "second": "seconds", "seconds": "seconds",
    "s": "seconds",
    "min": "minutes", "mins": "minutes", "minute": "minutes", "minutes": "minutes",
    "hour": "hours", "hours": "hours", "h": "hours",
    "day": "days", "days": "days", "d": "days",
    "week": "weeks", "weeks": "weeks", "w": "weeks",
    "fortnight": "fortnights", "fortnights": "fortnights",
    "month": "months", "months": "months",
    "year": "years", "years": "years", "y": "years",
}

_OFFSET_RE = re.compile(r"([+-]?)\s*(\d+)\s*([a-z]+)")
_RELATIVE_RE = re.compile(r"^(?:[+-]?\s*\d+\s*[a-z]+\s*)+(?:ago)?$")

_KEYWORDS: dict[str, int] = {"now": 0, "today": 0, "tomorrow": 1, "yesterday": -1}


def parse_textual_datetime(text: str, now: datetime | None = None) -> int:
    """
    Parse a textual datetime expression into a UNIX timestamp.

    Raises:
        InvalidArgumentError: If the expression cannot be understood.
    """
    now = now or datetime.now().astimezone()
    expression = text.strip().lower()

    if not expression:
        raise _unparsable(text)

    if expression in _KEYWORDS:
        moment = now
        if expression != "now":
            moment = now.replace(hour=0, minute=0, second=0, microsecond=0)
            moment += timedelta(days=_KEYWORDS[expression])
        return int(moment.timestamp())

    if _RELATIVE_RE.match(expression):
        try:
            offset = _relative_offset(expression)
            if offset is not None:
                return int((now + offset).timestamp())
        except (ValueError, OverflowError) as exc:
            raise _unparsable(text) from exc

    try:
        moment = date_parser.parse(text, default=now.replace(
            hour=0, minute=0, second=0, microsecond=0,
        ))
    except (ValueError, OverflowError) as exc:
        raise _unparsable(text) from exc

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=now.tzinfo)
    return int(moment.timestamp())


def _relative_offset(expression: str) -> relativedelta | None:
    """Sum the offsets of a relative expression; None if a unit is unknown."""
    sign = -1 if expression.endswith("ago") else 1
    offset = relativedelta()

    for direction, amount, unit in _OFFSET_RE.findall(expression):
        field = _UNITS.get(unit)
        if field is None:
            return None
        quantity = int(amount) * sign * (-1 if direction == "-" else 1)
        if field == "fortnights":
            field, quantity = "weeks", quantity * 2
        offset += relativedelta(**{field: quantity})

    return offset


def _unparsable(text: str) -> InvalidArgumentError:
    return InvalidArgumentError(
        f"Unable to determine cookie availability, textual datetime {text!r} "
        "could not be parsed into a Unix timestamp"
    )
