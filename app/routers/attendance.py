"""Attendance endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from app.config import settings
from app.dependencies import get_current_user, get_current_user_id, get_db_client, get_viewer_role
from app.schemas.attendance import CheckInResponse
from app.services.attendance_service import AttendanceService
from app.services.common import MEMBER_ROLE, ensure_role
from app.utils.time import local_now
from supabase import Client

router = APIRouter()


@router.post("/check-in", response_model=CheckInResponse)
def check_in(
    user: Any = Depends(get_current_user),
    viewer_role: str = Depends(get_viewer_role),
    client: Client = Depends(get_db_client),
) -> dict:
    """Record a gym visit for the member and return the refreshed streak."""
    ensure_role(viewer_role, MEMBER_ROLE)
    service = AttendanceService(client)
    return service.check_in(get_current_user_id(user), local_now(settings.tzinfo))
