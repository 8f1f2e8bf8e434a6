"""Class schedule lookups for member and manager dashboards."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, date, datetime, tzinfo
from typing import Any

from app.services.common import SupabaseService
from app.utils.time import as_aware, parse_timestamp, weekday_abbreviation
from supabase import Client

BOOKED_STATUS = "Booked"


def parse_schedule(value: Any, tz: tzinfo) -> datetime | None:
    """Return the class start as an aware datetime, or None when free-form."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return as_aware(parse_timestamp(value), tz)
    except ValueError:
        return None


def is_enrolled(class_row: dict[str, Any], user_id: str) -> bool:
    """Return True when ``user_id`` appears in the class roster."""
    for member in class_row.get("enrolled_members") or []:
        member_id = member.get("id") if isinstance(member, dict) else member
        if str(member_id) == str(user_id):
            return True
    return False


def _class_summary(class_row: dict[str, Any], status: str) -> dict[str, Any]:
    return {
        "id": str(class_row["id"]),
        "gym_id": str(class_row["gym_id"]) if class_row.get("gym_id") else None,
        "name": class_row.get("name") or "",
        "schedule": class_row.get("schedule") or "",
        "instructor": class_row.get("instructor"),
        "status": status,
    }


def upcoming_enrolled_classes(
    classes: Iterable[dict[str, Any]],
    user_id: str,
    now: datetime,
    tz: tzinfo,
) -> list[dict[str, Any]]:
    """Return booked classes that start strictly after ``now``.

    Classes whose schedule cannot be parsed into a date-time never count.
    """
    upcoming = []
    for class_row in classes:
        starts_at = parse_schedule(class_row.get("schedule"), tz)
        if starts_at is None or starts_at <= now:
            continue
        if is_enrolled(class_row, user_id):
            upcoming.append((starts_at, _class_summary(class_row, BOOKED_STATUS)))
    upcoming.sort(key=lambda item: item[0])
    return [summary for _, summary in upcoming]


def _attendee_count(value: Any) -> int:
    if isinstance(value, (list, tuple)):
        return len(value)
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0

def classes_for_day(
    classes: Iterable[dict[str, Any]],
    today: date,
    tz: tzinfo,
) -> list[dict[str, Any]]:
    """Return classes scheduled on ``today``.

    A class matches on its parsed date, or, for recurring free-form schedules
    such as ``"Mon, Wed 6PM"``, on today's short weekday name.
    """
    weekday = weekday_abbreviation(today)
    matched = []
    for class_row in classes:
        schedule = class_row.get("schedule")
        starts_at = parse_schedule(schedule, tz)
        on_date = starts_at is not None and starts_at.date() == today
        on_weekday = isinstance(schedule, str) and weekday in schedule
        if on_date or on_weekday:
            attendees = _attendee_count(class_row.get("enrolled"))
            matched.append(_class_summary(class_row, f"{attendees} attendees"))
    return matched


class ClassService:
    """Read class rows for the dashboards."""

    def __init__(self, client: Client) -> None:
        self.db = SupabaseService(client)

    def classes_for_gyms(self, gym_ids: Iterable[str]) -> list[dict[str, Any]]:
        """Return every class belonging to ``gym_ids``."""
        return self.db.select_in("gym_classes", "gym_id", gym_ids)

    def member_upcoming(
        self,
        user_id: str,
        gym_ids: list[str],
        now: datetime,
    ) -> list[dict[str, Any]]:
        """Return the member's upcoming booked classes across enrolled gyms."""
        classes = self.classes_for_gyms(gym_ids)
        return upcoming_enrolled_classes(classes, user_id, now, now.tzinfo or UTC)

    def today_for_gyms(self, gym_ids: list[str], now: datetime) -> list[dict[str, Any]]:
        """Return classes scheduled on ``now``'s date across ``gym_ids``."""
        classes = self.classes_for_gyms(gym_ids)
        return classes_for_day(classes, now.date(), now.tzinfo or UTC)

    def manager_today(self, owner_id: str, now: datetime) -> list[dict[str, Any]]:
        """Return today's classes across every gym the manager owns."""
        gym_ids = [str(gym["id"]) for gym in self.db.owned_gyms(owner_id)]
        return self.today_for_gyms(gym_ids, now)
