"""Member attendance history and workout streaks."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, tzinfo
from typing import Any

from app.services.common import SupabaseService
from app.services.streak_service import StreakResult, calculate_workout_streak, to_calendar_day
from app.utils.errors import InvalidInputError
from supabase import Client

# Postgres function that appends to gym_members.attendance_history in place.
APPEND_ATTENDANCE_RPC = "append_attendance"

logger = logging.getLogger(__name__)


def attendance_values(member: dict[str, Any] | None) -> list[str | date | datetime]:
    """Return date-like entries of ``attendance_history``, dropping other types."""
    if not member:
        return []
    history = member.get("attendance_history") or []
    values = [entry for entry in history if isinstance(entry, (str, date))]
    dropped = len(history) - len(values)
    if dropped:
        logger.warning(
            "Dropped %s non-date attendance entries for member %s", dropped, member.get("id")
        )
    return values


class AttendanceService:
    """Read and append gym visits on ``gym_members`` rows."""

    def __init__(self, client: Client) -> None:
        self.db = SupabaseService(client)

    def get_member(self, user_id: str) -> dict[str, Any] | None:
        """Return the member profile row, or None for users without one."""
        return self.db.select_first("gym_members", {"id": user_id})

    def streak(self, user_id: str, tz: tzinfo) -> StreakResult:
        """Compute the member's longest workout streak."""
        return calculate_workout_streak(attendance_values(self.get_member(user_id)), tz)

    def append_visits(
        self,
        member_id: str,
        visits: list[str],
        create_missing: bool = False,
    ) -> list[Any] | None:
        """Append ``visits`` in one database statement and return the new history.

        Returns None when the member has no row and ``create_missing`` is off.
        """
        rows = self.db.execute(
            self.db.client.rpc(
                APPEND_ATTENDANCE_RPC,
                {
                    "p_member_id": member_id,
                    "p_visits": visits,
                    "p_create_missing": create_missing,
                },
            ),
            default=[],
        )
        if not rows:
            return None
        return list(rows[0].get("attendance_history") or [])

    def check_in(self, user_id: str, now: datetime) -> dict[str, Any]:
        """Record a visit at ``now`` and return the updated streak."""
        history = self.append_visits(user_id, [now.isoformat()], create_missing=True)
        if history is None:
            raise InvalidInputError("Check-in failed")

        result = calculate_workout_streak(
            attendance_values({"id": user_id, "attendance_history": history}), now.tzinfo
        )
        return {
            "checked_in_at": now.isoformat(),
            "workout_streak_days": result.longest,
            "visits": len(history),
        }

    def import_rows(
        self,
        rows: Iterable[tuple[str, str]],
        tz: tzinfo | None = None,
    ) -> tuple[int, list[tuple[str, str]]]:
        """Append ``(member_id, visited_at)`` rows to attendance histories.

        Returns the number of imported visits and the rows that were rejected
        because their timestamp could not be parsed or the member is unknown.
        """
        by_member: dict[str, list[str]] = {}
        rejected: list[tuple[str, str]] = []
        for member_id, visited_at in rows:
            try:
                to_calendar_day(visited_at, tz)
            except ValueError:
                rejected.append((member_id, visited_at))
                continue
            by_member.setdefault(member_id.strip(), []).append(visited_at.strip())

        imported = 0
        for member_id, visits in by_member.items():
            if self.append_visits(member_id, visits) is None:
                logger.warning("Skipping %s visits for unknown member %s", len(visits), member_id)
                rejected.extend((member_id, visit) for visit in visits)
                continue
            imported += len(visits)

        return imported, rejected
