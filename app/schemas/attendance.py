"""Attendance schemas."""

from pydantic import BaseModel


class CheckInResponse(BaseModel):
    """Result of recording one gym visit."""

    checked_in_at: str
    workout_streak_days: int
    visits: int
