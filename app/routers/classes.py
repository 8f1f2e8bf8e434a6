"""Class schedule endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from app.config import settings
from app.dependencies import get_current_user, get_current_user_id, get_db_client, get_viewer_role
from app.services.attendance_service import AttendanceService
from app.services.class_service import ClassService
from app.services.common import MANAGER_ROLE, MEMBER_ROLE, ensure_role
from app.utils.time import local_now
from supabase import Client

router = APIRouter()


@router.get("/upcoming")
def upcoming_classes(
    user: Any = Depends(get_current_user),
    viewer_role: str = Depends(get_viewer_role),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return classes the member has booked that have not started yet."""
    ensure_role(viewer_role, MEMBER_ROLE)
    user_id = get_current_user_id(user)
    member = AttendanceService(client).get_member(user_id) or {}
    gym_ids = [str(gym_id) for gym_id in member.get("enrolled_gyms") or []]

    service = ClassService(client)
    classes = service.member_upcoming(user_id, gym_ids, local_now(settings.tzinfo))
    return {"classes": classes}


@router.get("/today")
def classes_today(
    user: Any = Depends(get_current_user),
    viewer_role: str = Depends(get_viewer_role),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return today's classes across the manager's gyms."""
    ensure_role(viewer_role, MANAGER_ROLE)
    service = ClassService(client)
    classes = service.manager_today(get_current_user_id(user), local_now(settings.tzinfo))
    return {"classes": classes}
