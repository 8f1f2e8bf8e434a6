"""Service package exports with lazy loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "AttendanceService": "app.services.attendance_service",
    "ClassService": "app.services.class_service",
    "DashboardService": "app.services.dashboard_service",
    "MembershipService": "app.services.membership_service",
    "PaymentService": "app.services.payment_service",
    "ReceiptStorage": "app.services.storage_service",
    "StreakResult": "app.services.streak_service",
    "SupabaseService": "app.services.common",
}

__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(_EXPORTS[name])
    return getattr(module, name)
