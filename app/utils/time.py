"""Time utility helpers."""

from __future__ import annotations

from datetime import date, datetime, tzinfo

WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Non-ISO layouts seen in stored member data (JS date strings, en-US locale dates).
_FALLBACK_FORMATS = (
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y, %I:%M:%S %p",
    "%m/%d/%Y %H:%M",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
)


def local_now(tz: tzinfo) -> datetime:
    """Return the current time in ``tz``."""
    return datetime.now(tz=tz)


def parse_timestamp(value: str) -> datetime:
    """Parse a stored date or date-time string.

    ISO-8601 is tried first (a trailing ``Z`` is accepted), then the
    fallback layouts. The result is naive unless the input carried an offset.

    Raises:
        ValueError: when no known layout matches.
    """
    text = value.strip()
    if not text:
        raise ValueError("Empty date value")

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    for layout in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, layout)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date value: {value!r}")


def as_aware(value: datetime, tz: tzinfo) -> datetime:
    """Attach ``tz`` to naive datetimes and convert aware ones into ``tz``."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def weekday_abbreviation(day: date) -> str:
    """Return the English short weekday name (``Mon`` ... ``Sun``)."""
    return WEEKDAY_ABBREVIATIONS[day.weekday()]
