"""Gym membership plans and subscription status."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from app.services.common import SupabaseService
from app.utils.time import parse_timestamp
from supabase import Client

ACTIVE_STATUS = "active"
EXPIRED_STATUS = "expired"

logger = logging.getLogger(__name__)


def find_plan(gym: dict[str, Any], plan_name: str | None) -> dict[str, Any] | None:
    """Return the named plan from ``membership_plans`` (or legacy ``membership_options``)."""
    if not plan_name:
        return None
    plans = gym.get("membership_plans") or gym.get("membership_options") or []
    for plan in plans:
        if plan.get("name") == plan_name:
            return plan
    return None


def end_date_of(membership: dict[str, Any]) -> date | None:
    """Return the membership end date, or None when unset or malformed."""
    raw = membership.get("end_date")
    if not raw:
        return None
    try:
        return parse_timestamp(str(raw)).date()
    except ValueError:
        logger.warning("Ignoring malformed end_date on membership %s", membership.get("id"))
        return None


class MembershipService:
    """Active subscription lookup and expiry."""

    def __init__(self, client: Client) -> None:
        self.db = SupabaseService(client)

    def active_subscription(self, user_id: str, gym_ids: list[str]) -> dict[str, Any] | None:
        """Return the first active subscription in enrollment order."""
        for gym_id in gym_ids:
            membership = self.db.select_first(
                "gym_memberships",
                {"gym_id": gym_id, "member_id": user_id, "status": ACTIVE_STATUS},
            )
            if membership is None:
                continue

            plan_name = membership.get("membership_type")
            gym = self.db.select_first("gyms", {"id": gym_id})
            plan = find_plan(gym, plan_name) if gym else None
            next_payment = end_date_of(membership)
            return {
                "gym_id": str(gym_id),
                "plan_name": plan_name,
                "price": float(plan.get("price") or 0) if plan else 0.0,
                "duration": str(plan.get("duration") or "") if plan else "",
                "next_payment_date": next_payment.isoformat() if next_payment else None,
            }
        return None

    def expire_overdue(self, today: date) -> list[dict[str, Any]]:
        """Mark active memberships that ended before ``today`` as expired."""
        overdue = self.db.execute(
            self.db.client.table("gym_memberships")
            .select("*")
            .eq("status", ACTIVE_STATUS)
            .lt("end_date", today.isoformat()),
            default=[],
        )
        expired_rows: list[dict[str, Any]] = []
        for membership in overdue:
            updated = self.db.update(
                "gym_memberships",
                {"id": membership["id"]},
                {"status": EXPIRED_STATUS},
            )
            if updated:
                expired_rows.append(updated[0])
        return expired_rows
