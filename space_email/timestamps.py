"""Parsing of the service's display timestamps.

The site renders dates as ``"Saturday, Jun 28th, 2014 at 4:05pm"`` but does
not pick the ordinal suffix by English rules, so every suffix is tried.
Day and month names are always English, whatever the process locale.
"""

from __future__ import annotations

import re
from datetime import datetime

from .errors import MalformedResponseError

# Order matters: first match wins.
ORDINAL_SUFFIXES: tuple[str, ...] = ("th", "st", "nd", "rd")

WEEKDAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MONTHS: dict[str, int] = {
    name: number
    for number, name in enumerate(
        ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
        start=1,
    )
}

_LAYOUT = re.compile(
    r"(?P<weekday>[A-Za-z]+), (?P<month>[A-Za-z]{3}) (?P<date>.+?) at "
    r"(?P<clock>\d{1,2}:\d{2})(?P<meridiem>am|pm)",
    re.IGNORECASE,
)

# Names are resolved through the tables above, so only numeric directives remain.
_FORMAT = "%m %d{suffix}, %Y %I:%M"


def parse_timestamp(text: str) -> datetime:
    """Parse a display timestamp into a naive :class:`datetime`.

    Raises :class:`MalformedResponseError` if no suffix variant matches or
    the weekday contradicts the date.
    """
    value = text.strip()
    match = _LAYOUT.fullmatch(value)
    if match is None:
        raise MalformedResponseError(f"Unrecognised timestamp: {value!r}")

    month = MONTHS.get(match["month"].title())
    if month is None:
        raise MalformedResponseError(f"Unrecognised timestamp: {value!r}")

    numeric = f"{month:02d} {match['date']} {match['clock']}"
    for suffix in ORDINAL_SUFFIXES:
        try:
            parsed = datetime.strptime(numeric, _FORMAT.format(suffix=suffix))
        except ValueError:
            continue
        break
    else:
        raise MalformedResponseError(f"Unrecognised timestamp: {value!r}")

    hour = parsed.hour % 12 + (12 if match["meridiem"].lower() == "pm" else 0)
    parsed = parsed.replace(hour=hour)

    weekday = match["weekday"].title()
    if weekday != WEEKDAYS[parsed.weekday()]:
        raise MalformedResponseError(
            f"Weekday {weekday!r} does not match date in timestamp: {value!r}"
        )
    return parsed
