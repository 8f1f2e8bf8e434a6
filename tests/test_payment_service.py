"""Payment totals and manual receipt workflow tests."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest
from storage3.exceptions import StorageException

from app.services.payment_service import PaymentService, sum_paid_in_month
from app.utils.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    StorageUploadError,
)

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
NOW = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)


@pytest.fixture
def seeded(fake_client):
    fake_client.tables.update(
        {
            "gyms": [
                {"id": "gym-1", "name": "North", "owner_id": "boss"},
                {"id": "gym-2", "name": "Annex", "owner_id": None},
            ],
            "users": [
                {
                    "id": "boss",
                    "role": "manager",
                    "full_name": "Ana Reyes",
                    "gcash_number": "0917",
                    "gotyme_number": None,
                    "gcash_qr_url": "https://cdn.test/qr.png",
                    "gotyme_qr_url": None,
                }
            ],
        }
    )
    return fake_client


def test_sum_paid_in_month_only_counts_that_month() -> None:
    """Other months, missing dates and bad amounts should not add up."""
    payments = [
        {"id": 1, "amount": 1500, "date": "2026-03-01"},
        {"id": 2, "amount": "499.50", "date": "2026-03-28T10:00:00Z"},
        {"id": 3, "amount": 900, "date": "2026-02-28"},
        {"id": 4, "amount": 900, "date": "2025-03-05"},
        {"id": 5, "amount": 100, "date": None},
        {"id": 6, "amount": "n/a", "date": "2026-03-02"},
        {"id": 7, "amount": 100, "date": "soon"},
    ]
    assert sum_paid_in_month(payments, 2026, 3, UTC) == pytest.approx(1999.5)


def test_total_paid_this_month_filters_paid_rows(fake_client) -> None:
    """Only the caller's Paid payments should count."""
    fake_client.tables["payments"] = [
        {"id": "p1", "user_id": "u1", "status": "Paid", "amount": 1000, "date": "2026-03-02"},
        {"id": "p2", "user_id": "u1", "status": "Pending", "amount": 500, "date": "2026-03-03"},
        {"id": "p3", "user_id": "u2", "status": "Paid", "amount": 700, "date": "2026-03-03"},
    ]
    service = PaymentService(fake_client)
    assert service.total_paid_this_month("u1", date(2026, 3, 10), UTC) == 1000


def test_total_paid_this_month_uses_gym_calendar(fake_client) -> None:
    """A late-evening UTC payment belongs to the next day's month in Manila."""
    fake_client.tables["payments"] = [
        {"id": "p1", "user_id": "u1", "status": "Paid", "amount": 500, "date": "2026-01-31T20:00:00Z"}
    ]
    manila = ZoneInfo("Asia/Manila")
    service = PaymentService(fake_client)
    assert service.total_paid_this_month("u1", date(2026, 2, 1), manila) == 500.0
    assert service.total_paid_this_month("u1", date(2026, 1, 31), manila) == 0
    assert sum_paid_in_month(fake_client.tables["payments"], 2026, 1, UTC) == 500.0


def test_owner_payment_info(seeded) -> None:
    """Gyms expose their owner's wallet details, or None without an owner."""
    service = PaymentService(seeded)
    info = service.owner_payment_info("gym-1")
    assert info is not None
    assert info["full_name"] == "Ana Reyes"
    assert info["gcash_number"] == "0917"
    assert "role" not in info
    assert service.owner_payment_info("gym-2") is None
    with pytest.raises(NotFoundError):
        service.owner_payment_info("missing")


def test_submit_receipt_records_pending_payment(seeded) -> None:
    """A submitted receipt is uploaded and stored as Pending."""
    service = PaymentService(seeded)
    record = service.submit_receipt(
        user_id="u1",
        user_email="member@example.com",
        gym_id="gym-1",
        file_name="receipt.png",
        content=PNG,
        content_type="image/png",
        now=NOW,
    )
    assert record["status"] == "Pending"
    assert record["gym_id"] == "gym-1"
    assert record["receipt_url"].startswith("https://cdn.test/receipts/receipts/")
    assert len(seeded.uploads) == 1


def test_submit_receipt_requires_gym(seeded) -> None:
    """Missing or unknown gyms are rejected before anything is uploaded."""
    service = PaymentService(seeded)
    with pytest.raises(InvalidInputError):
        service.submit_receipt("u1", None, "", "r.png", PNG, "image/png", NOW)
    with pytest.raises(NotFoundError):
        service.submit_receipt("u1", None, "nope", "r.png", PNG, "image/png", NOW)
    assert seeded.uploads == []


def test_submit_receipt_storage_failure_records_nothing(seeded) -> None:
    """A failed upload surfaces as STORAGE_ERROR and leaves no manual payment behind."""
    seeded.upload_error = StorageException("bucket unavailable")
    service = PaymentService(seeded)
    with pytest.raises(StorageUploadError) as excinfo:
        service.submit_receipt("u1", None, "gym-1", "r.png", PNG, "image/png", NOW)
    assert excinfo.value.status_code == 502
    assert excinfo.value.code == "STORAGE_ERROR"
    assert seeded.tables.get("manual_payments", []) == []


def test_review_manual_payment_flow(seeded) -> None:
    """Only the owning manager can review, and only once."""
    seeded.tables["manual_payments"] = [
        {"id": "mp-1", "gym_id": "gym-1", "status": "Pending", "user_id": "u1"},
    ]
    service = PaymentService(seeded)

    with pytest.raises(ForbiddenError):
        service.review_manual_payment("intruder", "mp-1", "Approved", NOW)
    with pytest.raises(InvalidInputError):
        service.review_manual_payment("boss", "mp-1", "Maybe", NOW)

    reviewed = service.review_manual_payment("boss", "mp-1", "Approved", NOW)
    assert reviewed["status"] == "Approved"
    assert reviewed["reviewed_by"] == "boss"

    with pytest.raises(ConflictError):
        service.review_manual_payment("boss", "mp-1", "Rejected", NOW)


def test_list_gym_manual_payments_requires_ownership(seeded) -> None:
    """Managers can only list receipts for their own gyms."""
    seeded.tables["manual_payments"] = [
        {"id": "a", "gym_id": "gym-1", "status": "Pending", "uploaded_at": "2026-03-01"},
        {"id": "b", "gym_id": "gym-1", "status": "Approved", "uploaded_at": "2026-03-02"},
    ]
    service = PaymentService(seeded)
    assert [row["id"] for row in service.list_gym_manual_payments("boss", "gym-1")] == ["b", "a"]
    pending = service.list_gym_manual_payments("boss", "gym-1", status="Pending")
    assert [row["id"] for row in pending] == ["a"]
    with pytest.raises(ForbiddenError):
        service.list_gym_manual_payments("intruder", "gym-1")
