"""Billing summary and manual receipt endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.config import settings
from app.dependencies import (
    get_current_user,
    get_current_user_email,
    get_current_user_id,
    get_db_client,
    get_viewer_role,
)
from app.schemas.payment import (
    ManualPaymentEnvelope,
    ManualPaymentList,
    PaymentSummary,
    ReviewRequest,
)
from app.services.common import MANAGER_ROLE, ensure_role
from app.services.payment_service import PaymentService
from app.utils.time import local_now
from supabase import Client

router = APIRouter()


@router.get("/summary", response_model=PaymentSummary)
def payment_summary(
    user: Any = Depends(get_current_user),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return the caller's paid bills for the current month."""
    today = local_now(settings.tzinfo).date()
    service = PaymentService(client)
    total = service.total_paid_this_month(get_current_user_id(user), today, settings.tzinfo)
    return {"year": today.year, "month": today.month, "total_bills_paid": total}


@router.post("/manual", status_code=201, response_model=ManualPaymentEnvelope)
async def submit_manual_payment(
    gym_id: str = Form(...),
    file: UploadFile = File(...),
    user: Any = Depends(get_current_user),
    client: Client = Depends(get_db_client),
) -> dict:
    """Upload a payment receipt for admin verification."""
    content = await file.read()
    service = PaymentService(client)
    record = service.submit_receipt(
        user_id=get_current_user_id(user),
        user_email=get_current_user_email(user),
        gym_id=gym_id,
        file_name=file.filename or "receipt",
        content=content,
        content_type=file.content_type,
        now=local_now(settings.tzinfo),
    )
    return {"manual_payment": record}


@router.get("/manual", response_model=ManualPaymentList)
def list_manual_payments(
    user: Any = Depends(get_current_user),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return the caller's receipt submissions."""
    service = PaymentService(client)
    return {"manual_payments": service.list_manual_payments(get_current_user_id(user))}


@router.put("/manual/{payment_id}/review", response_model=ManualPaymentEnvelope)
def review_manual_payment(
    payment_id: str,
    payload: ReviewRequest,
    user: Any = Depends(get_current_user),
    viewer_role: str = Depends(get_viewer_role),
    client: Client = Depends(get_db_client),
) -> dict:
    """Approve or reject a pending receipt."""
    ensure_role(viewer_role, MANAGER_ROLE)
    service = PaymentService(client)
    record = service.review_manual_payment(
        owner_id=get_current_user_id(user),
        payment_id=payment_id,
        decision=payload.decision,
        now=local_now(settings.tzinfo),
    )
    return {"manual_payment": record}
