"""Time helper tests."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from app.utils.time import as_aware, parse_timestamp, weekday_abbreviation


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2026-02-07", datetime(2026, 2, 7)),
        ("2026-02-07T10:30:00", datetime(2026, 2, 7, 10, 30)),
        ("2026-02-07T10:30:00Z", datetime(2026, 2, 7, 10, 30, tzinfo=UTC)),
        ("Sat Feb 07 2026", datetime(2026, 2, 7)),
        ("2/7/2026", datetime(2026, 2, 7)),
        ("2026/02/07", datetime(2026, 2, 7)),
        ("February 7, 2026", datetime(2026, 2, 7)),
        ("  2026-02-07  ", datetime(2026, 2, 7)),
    ],
)
def test_parse_timestamp_known_layouts(raw: str, expected: datetime) -> None:
    """Stored date strings in every supported layout should parse."""
    assert parse_timestamp(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "tomorrow", "Mon, Wed 6PM", "2026-13-40"])
def test_parse_timestamp_rejects_garbage(raw: str) -> None:
    """Unrecognized values should raise ValueError."""
    with pytest.raises(ValueError):
        parse_timestamp(raw)


def test_as_aware_attaches_or_converts() -> None:
    """Naive values get the zone attached; aware ones are converted."""
    plus8 = timezone(timedelta(hours=8))
    naive = datetime(2026, 2, 7, 9, 0)
    assert as_aware(naive, plus8) == datetime(2026, 2, 7, 9, 0, tzinfo=plus8)
    aware = datetime(2026, 2, 7, 20, 0, tzinfo=UTC)
    assert as_aware(aware, plus8).date() == date(2026, 2, 8)


def test_weekday_abbreviation() -> None:
    """Short weekday names should be locale independent."""
    assert weekday_abbreviation(date(2026, 3, 10)) == "Tue"
    assert weekday_abbreviation(date(2026, 3, 15)) == "Sun"
