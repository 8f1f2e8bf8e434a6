"""Dashboard schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class ClassSummary(BaseModel):
    """One row of a dashboard class list."""

    id: str
    gym_id: str | None = None
    name: str
    schedule: str
    instructor: str | None = None
    status: str


class MemberDashboard(BaseModel):
    """Member stat cards and upcoming bookings."""

    role: Literal["member"] = "member"
    upcoming_classes_count: int = 0
    upcoming_classes: list[ClassSummary] = Field(default_factory=list)
    workout_streak_days: int = 0
    membership_price: float = 0.0
    plan_name: str | None = None
    plan_duration: str = ""
    next_payment_date: str | None = None
    total_bills_paid: float = 0.0


class ManagerDashboard(BaseModel):
    """Manager overview of owned gyms."""

    role: Literal["manager"] = "manager"
    gyms_count: int = 0
    scheduled_classes: list[ClassSummary] = Field(default_factory=list)
    pending_manual_payments: int = 0


class DashboardResponse(BaseModel):
    """Role-tagged dashboard payload."""

    dashboard: MemberDashboard | ManagerDashboard = Field(discriminator="role")


class StreakResponse(BaseModel):
    """Workout streak with a count of unreadable attendance entries."""

    workout_streak_days: int
    skipped_entries: int = 0
