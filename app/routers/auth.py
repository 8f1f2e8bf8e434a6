"""Authentication endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_viewer_role

router = APIRouter()


@router.get("/session")
def auth_session(
    user: Any = Depends(get_current_user),
    viewer_role: str = Depends(get_viewer_role),
) -> dict:
    """Return the currently authenticated user and their dashboard role."""
    return {"user": user, "role": viewer_role}


@router.post("/signout")
def auth_signout() -> dict:
    """Return success for stateless sign-out handling."""
    return {"success": True}
