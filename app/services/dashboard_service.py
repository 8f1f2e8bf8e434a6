"""Role-aware dashboard aggregation."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from app.config import settings
from app.services.attendance_service import AttendanceService, attendance_values
from app.services.class_service import ClassService
from app.services.common import MANAGER_ROLE, MEMBER_ROLE, SupabaseService
from app.services.membership_service import MembershipService
from app.services.payment_service import PaymentService
from app.services.streak_service import calculate_workout_streak
from app.utils.errors import ForbiddenError
from app.utils.time import local_now
from supabase import Client


def empty_member_dashboard() -> dict[str, Any]:
    """Return the member dashboard for users without a member profile."""
    return {
        "role": MEMBER_ROLE,
        "upcoming_classes_count": 0,
        "upcoming_classes": [],
        "workout_streak_days": 0,
        "membership_price": 0.0,
        "plan_name": None,
        "plan_duration": "",
        "next_payment_date": None,
        "total_bills_paid": 0.0,
    }


class DashboardService:
    """Assemble the stat cards and class lists for each role."""

    def __init__(self, client: Client) -> None:
        self.db = SupabaseService(client)
        self.attendance = AttendanceService(client)
        self.classes = ClassService(client)
        self.memberships = MembershipService(client)
        self.payments = PaymentService(client)

    def dashboard(
        self,
        viewer_role: str,
        current_user_id: str,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Return the dashboard for ``viewer_role``."""
        moment = now or local_now(settings.tzinfo)
        if viewer_role == MEMBER_ROLE:
            return self.member_dashboard(current_user_id, moment)
        if viewer_role == MANAGER_ROLE:
            return self.manager_dashboard(current_user_id, moment)
        raise ForbiddenError(f"Unsupported role: {viewer_role}")

    def member_dashboard(self, user_id: str, now: datetime) -> dict[str, Any]:
        """Upcoming bookings, streak, subscription and this month's bills."""
        member = self.attendance.get_member(user_id)
        if member is None:
            return empty_member_dashboard()

        gym_ids = [str(gym_id) for gym_id in member.get("enrolled_gyms") or []]
        upcoming = self.classes.member_upcoming(user_id, gym_ids, now)
        streak = calculate_workout_streak(attendance_values(member), now.tzinfo)
        subscription = self.memberships.active_subscription(user_id, gym_ids) or {}
        total_paid = self.payments.total_paid_this_month(
            user_id, now.date(), now.tzinfo or settings.tzinfo
        )

        return {
            "role": MEMBER_ROLE,
            "upcoming_classes_count": len(upcoming),
            "upcoming_classes": upcoming,
            "workout_streak_days": streak.longest,
            "membership_price": subscription.get("price", 0.0),
            "plan_name": subscription.get("plan_name"),
            "plan_duration": subscription.get("duration", ""),
            "next_payment_date": subscription.get("next_payment_date"),
            "total_bills_paid": total_paid,
        }

    def manager_dashboard(self, owner_id: str, now: datetime) -> dict[str, Any]:
        """Today's classes and pending receipts across owned gyms."""
        gym_ids = [str(gym["id"]) for gym in self.db.owned_gyms(owner_id)]
        scheduled = self.classes.today_for_gyms(gym_ids, now)
        return {
            "role": MANAGER_ROLE,
            "gyms_count": len(gym_ids),
            "scheduled_classes": scheduled,
            "pending_manual_payments": self.payments.pending_count(gym_ids),
        }
