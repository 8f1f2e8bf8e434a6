"""Gym directory and manual-payment review endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_current_user, get_current_user_id, get_db_client, get_viewer_role
from app.schemas.gym import GymListResponse, PaymentInfoResponse
from app.schemas.payment import ManualPaymentList
from app.services.common import MANAGER_ROLE, ensure_role
from app.services.payment_service import PaymentService
from supabase import Client

router = APIRouter()


@router.get("", response_model=GymListResponse)
def list_gyms(
    _: Any = Depends(get_current_user),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return every gym for the receipt gym picker."""
    service = PaymentService(client)
    return {"gyms": service.list_gyms()}


@router.get("/{gym_id}/payment-info", response_model=PaymentInfoResponse)
def get_payment_info(
    gym_id: str,
    _: Any = Depends(get_current_user),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return the owner's GCash/GoTyme details for one gym."""
    service = PaymentService(client)
    return {"payment_info": service.owner_payment_info(gym_id)}


@router.get("/{gym_id}/manual-payments", response_model=ManualPaymentList)
def list_gym_manual_payments(
    gym_id: str,
    status: str | None = Query(default=None),
    user: Any = Depends(get_current_user),
    viewer_role: str = Depends(get_viewer_role),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return receipts submitted to a gym the manager owns."""
    ensure_role(viewer_role, MANAGER_ROLE)
    service = PaymentService(client)
    payments = service.list_gym_manual_payments(
        owner_id=get_current_user_id(user),
        gym_id=gym_id,
        status=status,
    )
    return {"manual_payments": payments}
