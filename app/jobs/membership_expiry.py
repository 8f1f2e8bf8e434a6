"""Membership expiry scheduled job."""

from __future__ import annotations

import logging

from app.config import settings
from app.services.membership_service import MembershipService
from app.utils.supabase_client import get_service_client
from app.utils.time import local_now

logger = logging.getLogger(__name__)


async def membership_expiry() -> None:
    """Expire active memberships whose end date has passed."""
    client = get_service_client()
    service = MembershipService(client)

    today = local_now(settings.tzinfo).date()
    expired = service.expire_overdue(today)

    logger.info("membership_expiry completed with %s expired memberships", len(expired))
