"""APScheduler setup and job registration."""

from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import settings
from app.jobs.membership_expiry import membership_expiry

scheduler = AsyncIOScheduler(timezone=settings.timezone)


def register_jobs() -> None:
    """Register all periodic jobs if not already present."""
    if scheduler.get_job("membership_expiry") is None:
        scheduler.add_job(
            membership_expiry,
            CronTrigger(hour=0, minute=10, timezone=settings.timezone),
            id="membership_expiry",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
