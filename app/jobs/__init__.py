"""Background job modules for periodic gym tasks."""

from app.jobs.membership_expiry import membership_expiry

__all__ = [
    "membership_expiry",
]
