"""Payment totals and manual receipt submissions."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, tzinfo
from typing import Any

from app.services.common import SupabaseService
from app.services.storage_service import ReceiptStorage
from app.utils.errors import ConflictError, ForbiddenError, InvalidInputError
from app.utils.time import as_aware, parse_timestamp
from supabase import Client

PAID_STATUS = "Paid"
PENDING_STATUS = "Pending"
APPROVED_STATUS = "Approved"
REJECTED_STATUS = "Rejected"
REVIEW_DECISIONS = {APPROVED_STATUS, REJECTED_STATUS}

OWNER_PAYMENT_FIELDS = (
    "full_name",
    "gcash_number",
    "gotyme_number",
    "gcash_qr_url",
    "gotyme_qr_url",
)

logger = logging.getLogger(__name__)


def _amount(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def sum_paid_in_month(
    payments: Iterable[dict[str, Any]],
    year: int,
    month: int,
    tz: tzinfo,
) -> float:
    """Sum ``amount`` over payments dated in ``year``/``month`` of the ``tz`` calendar.

    Offset-carrying dates are converted to ``tz``; naive ones are read as ``tz``
    wall-clock time. Rows without a parseable ``date`` are ignored and
    non-numeric amounts count as 0.
    """
    total = 0.0
    for payment in payments:
        raw_date = payment.get("date")
        if not raw_date:
            continue
        try:
            paid_on = as_aware(parse_timestamp(str(raw_date)), tz)
        except ValueError:
            logger.warning("Ignoring payment %s with malformed date", payment.get("id"))
            continue
        if paid_on.year == year and paid_on.month == month:
            total += _amount(payment.get("amount"))
    return total


class PaymentService:
    """Billing summaries and the manual receipt workflow."""

    def __init__(self, client: Client, storage: ReceiptStorage | None = None) -> None:
        self.db = SupabaseService(client)
        self.storage = storage or ReceiptStorage(client)

    def total_paid_this_month(self, user_id: str, today: date, tz: tzinfo) -> float:
        """Return the sum of the member's paid bills in ``today``'s month in ``tz``."""
        payments = self.db.select_many(
            "payments",
            filters={"user_id": user_id, "status": PAID_STATUS},
            columns="id,amount,date",
        )
        return sum_paid_in_month(payments, today.year, today.month, tz)

    def list_gyms(self) -> list[dict[str, Any]]:
        """Return every gym for the receipt gym picker."""
        rows = self.db.select_many("gyms", columns="id,name,owner_id", order_by="name")
        return [
            {
                "id": str(row["id"]),
                "name": row.get("name") or "",
                "owner_id": str(row["owner_id"]) if row.get("owner_id") else None,
            }
            for row in rows
        ]

    def owner_payment_info(self, gym_id: str) -> dict[str, Any] | None:
        """Return the gym owner's e-wallet details, or None when unavailable."""
        gym = self.db.get_gym(gym_id)
        owner_id = gym.get("owner_id")
        if not owner_id:
            return None
        owner = self.db.get_user(str(owner_id))
        if owner is None:
            return None
        return {field: owner.get(field) for field in OWNER_PAYMENT_FIELDS}

    def submit_receipt(
        self,
        user_id: str,
        user_email: str | None,
        gym_id: str,
        file_name: str,
        content: bytes,
        content_type: str | None,
        now: datetime,
    ) -> dict[str, Any]:
        """Upload a receipt and record it as pending admin verification."""
        if not gym_id:
            raise InvalidInputError("Missing required information. Please select a gym and try again.")
        self.db.get_gym(gym_id)

        stored = self.storage.upload(file_name, content, content_type, now)
        record = self.db.insert_one(
            "manual_payments",
            {
                "receipt_url": stored["url"],
                "file_name": file_name,
                "uploaded_at": now.isoformat(),
                "status": PENDING_STATUS,
                "user_id": user_id,
                "user_email": user_email,
                "gym_id": gym_id,
            },
        )
        logger.info("Manual payment %s submitted for gym %s", record.get("id"), gym_id)
        return record

    def list_manual_payments(self, user_id: str) -> list[dict[str, Any]]:
        """Return the caller's own receipt submissions, newest first."""
        return self.db.select_many(
            "manual_payments",
            filters={"user_id": user_id},
            order_by="uploaded_at",
            descending=True,
        )

    def list_gym_manual_payments(
        self,
        owner_id: str,
        gym_id: str,
        status: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return receipts submitted to a gym the caller owns."""
        self.db.ensure_gym_owner(owner_id, gym_id)
        filters: dict[str, Any] = {"gym_id": gym_id}
        if status:
            filters["status"] = status
        return self.db.select_many(
            "manual_payments",
            filters=filters,
            order_by="uploaded_at",
            descending=True,
        )

    def pending_count(self, gym_ids: Iterable[str]) -> int:
        """Count pending receipts across ``gym_ids``."""
        rows = self.db.select_in(
            "manual_payments",
            "gym_id",
            gym_ids,
            columns="id",
            filters={"status": PENDING_STATUS},
        )
        return len(rows)

    def review_manual_payment(
        self,
        owner_id: str,
        payment_id: str,
        decision: str,
        now: datetime,
    ) -> dict[str, Any]:
        """Approve or reject a pending receipt for a gym the caller owns."""
        if decision not in REVIEW_DECISIONS:
            raise InvalidInputError("Decision must be Approved or Rejected")

        payment = self.db.select_one(
            "manual_payments", {"id": payment_id}, not_found_label="Manual payment"
        )
        gym = self.db.get_gym(str(payment["gym_id"]))
        if str(gym.get("owner_id")) != str(owner_id):
            raise ForbiddenError("You do not manage this gym")
        if payment.get("status") != PENDING_STATUS:
            raise ConflictError("Receipt has already been reviewed", code="ALREADY_REVIEWED")

        rows = self.db.update(
            "manual_payments",
            {"id": payment_id, "status": PENDING_STATUS},
            {"status": decision, "reviewed_by": owner_id, "reviewed_at": now.isoformat()},
        )
        if not rows:
            raise ConflictError("Receipt has already been reviewed", code="ALREADY_REVIEWED")
        logger.info("Manual payment %s marked %s by %s", payment_id, decision, owner_id)
        return rows[0]
