"""Workout attendance streak calculation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from app.utils.time import parse_timestamp

logger = logging.getLogger(__name__)

DateLike = date | datetime | str


@dataclass(frozen=True)
class StreakResult:
    """Longest consecutive-day run plus the number of unparseable inputs."""

    longest: int
    skipped: int = 0


def to_calendar_day(value: DateLike, tz: tzinfo | None = None) -> date:
    """Normalize a date-like value to the calendar day it falls on.

    Aware datetimes (and strings carrying an offset) are converted to ``tz``
    first when one is given; naive values keep their wall-clock date.

    Raises:
        ValueError: for strings no known layout can parse.
        TypeError: for values that are not date-like at all.
    """
    if isinstance(value, str):
        value = parse_timestamp(value)
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date-like value, got {type(value).__name__}")


def calculate_workout_streak(
    values: Iterable[DateLike],
    tz: tzinfo | None = None,
) -> StreakResult:
    """Return the longest run of consecutive calendar days in ``values``.

    Order and duplicates do not matter. Malformed date strings are skipped
    and counted instead of failing the whole calculation.
    """
    days: set[date] = set()
    skipped = 0
    for value in values:
        try:
            days.add(to_calendar_day(value, tz))
        except ValueError:
            skipped += 1
            logger.debug("Skipping unparseable attendance value %r", value)

    if not days:
        return StreakResult(longest=0, skipped=skipped)

    ordered = sorted(days)
    current = 1
    longest = 1
    for previous, day in zip(ordered, ordered[1:]):
        gap = (day - previous).days
        if gap == 1:
            current += 1
        elif gap > 1:
            longest = max(longest, current)
            current = 1
    longest = max(longest, current)

    return StreakResult(longest=longest, skipped=skipped)


def longest_streak(values: Iterable[DateLike], tz: tzinfo | None = None) -> int:
    """Return only the streak length from :func:`calculate_workout_streak`."""
    return calculate_workout_streak(values, tz).longest
