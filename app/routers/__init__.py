"""API router package."""

from app.routers import (
    attendance,
    auth,
    classes,
    content,
    dashboard,
    gyms,
    payments,
)

__all__ = [
    "attendance",
    "auth",
    "classes",
    "content",
    "dashboard",
    "gyms",
    "payments",
]
