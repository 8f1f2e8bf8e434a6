"""Dashboard endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from app.config import settings
from app.dependencies import get_current_user, get_current_user_id, get_db_client, get_viewer_role
from app.schemas.dashboard import DashboardResponse, StreakResponse
from app.services.attendance_service import AttendanceService
from app.services.common import MEMBER_ROLE, ensure_role
from app.services.dashboard_service import DashboardService
from supabase import Client

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    user: Any = Depends(get_current_user),
    viewer_role: str = Depends(get_viewer_role),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return the member or manager dashboard for the caller."""
    service = DashboardService(client)
    dashboard = service.dashboard(
        viewer_role=viewer_role,
        current_user_id=get_current_user_id(user),
    )
    return {"dashboard": dashboard}


@router.get("/streak", response_model=StreakResponse)
def get_streak(
    user: Any = Depends(get_current_user),
    viewer_role: str = Depends(get_viewer_role),
    client: Client = Depends(get_db_client),
) -> dict:
    """Return the member's longest workout streak."""
    ensure_role(viewer_role, MEMBER_ROLE)
    service = AttendanceService(client)
    result = service.streak(get_current_user_id(user), settings.tzinfo)
    return {"workout_streak_days": result.longest, "skipped_entries": result.skipped}
