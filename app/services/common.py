"""Shared Supabase data access helpers."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable
from typing import Any

from postgrest import APIError

from app.config import settings
from app.utils.errors import ForbiddenError, InvalidInputError, NotFoundError
from supabase import Client

MEMBER_ROLE = "member"
MANAGER_ROLE = "manager"
VIEWER_ROLES = {MEMBER_ROLE, MANAGER_ROLE}

logger = logging.getLogger(__name__)
_user_cache: dict[str, tuple[float, dict[str, Any]]] = {}
_cache_lock = threading.Lock()


def _cache_get(cache: dict[Any, tuple[float, Any]], key: Any) -> Any | None:
    now = time.monotonic()
    with _cache_lock:
        entry = cache.get(key)
        if not entry:
            return None
        expires_at, value = entry
        if expires_at <= now:
            cache.pop(key, None)
            return None
        return value


def _cache_set(
    cache: dict[Any, tuple[float, Any]],
    key: Any,
    value: Any,
    ttl_seconds: int,
) -> None:
    if ttl_seconds <= 0:
        return

    with _cache_lock:
        max_entries = max(100, settings.data_cache_max_entries)
        if len(cache) >= max_entries:
            oldest_key = next(iter(cache))
            cache.pop(oldest_key, None)
        cache[key] = (time.monotonic() + ttl_seconds, value)


class SupabaseService:
    """Thin helper wrapper around a Supabase client."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def execute(self, query, default: Any = None) -> Any:
        """Execute a Supabase query and normalize API errors."""
        started = time.perf_counter()
        try:
            response = query.execute()
            elapsed_ms = (time.perf_counter() - started) * 1000
            threshold_ms = settings.slow_query_log_threshold_ms
            if threshold_ms > 0 and elapsed_ms >= threshold_ms:
                logger.warning("Slow Supabase query %.1fms", elapsed_ms)
            data = response.data
            return default if data is None and default is not None else data
        except APIError as exc:
            message = getattr(exc, "message", "Database request failed")
            raise InvalidInputError(str(message)) from exc

    def select_one(
        self,
        table: str,
        filters: dict[str, Any],
        columns: str = "*",
        not_found_label: str | None = None,
    ) -> dict[str, Any]:
        """Select a single row and raise NotFoundError when missing."""
        row = self.select_first(table, filters, columns)
        if row is None:
            raise NotFoundError(not_found_label or table)
        return row

    def select_first(
        self,
        table: str,
        filters: dict[str, Any],
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """Select a single row or return None."""
        query = self.client.table(table).select(columns)
        for key, value in filters.items():
            query = query.eq(key, value)
        rows = self.execute(query.limit(1), default=[])
        return rows[0] if rows else None

    def select_many(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        columns: str = "*",
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Select many rows from a table with optional filters."""
        query = self.client.table(table).select(columns)
        if filters:
            for key, value in filters.items():
                query = query.eq(key, value)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit:
            query = query.limit(limit)
        return self.execute(query, default=[])

    def select_in(
        self,
        table: str,
        column: str,
        values: Iterable[Any],
        columns: str = "*",
        filters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Select rows whose ``column`` is one of ``values``."""
        keys = [str(value) for value in values]
        if not keys:
            return []
        query = self.client.table(table).select(columns).in_(column, keys)
        if filters:
            for key, value in filters.items():
                query = query.eq(key, value)
        return self.execute(query, default=[])

    def insert_one(self, table: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return the created object."""
        rows = self.execute(self.client.table(table).insert(payload), default=[])
        if not rows:
            raise InvalidInputError(f"Failed to insert into {table}")
        return rows[0]

    def update(
        self,
        table: str,
        filters: dict[str, Any],
        payload: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Update rows by equality filters and return the updated rows."""
        query = self.client.table(table).update(payload)
        for key, value in filters.items():
            query = query.eq(key, value)
        return self.execute(query, default=[])

    def get_user(self, user_id: str) -> dict[str, Any] | None:
        """Return a ``users`` row, or None when the user has no profile."""
        cache_key = str(user_id)
        cached_user = _cache_get(_user_cache, cache_key)
        if cached_user is not None:
            return dict(cached_user)

        user = self.select_first("users", {"id": cache_key})
        if user is not None:
            _cache_set(_user_cache, cache_key, dict(user), settings.user_cache_ttl_seconds)
        return user

    def get_gym(self, gym_id: str) -> dict[str, Any]:
        """Return one gym or raise NotFoundError."""
        return self.select_one("gyms", {"id": gym_id}, not_found_label="Gym")

    def owned_gyms(self, owner_id: str) -> list[dict[str, Any]]:
        """Return the gyms a manager owns."""
        return self.select_many("gyms", filters={"owner_id": owner_id}, order_by="name")

    def ensure_gym_owner(self, owner_id: str, gym_id: str) -> dict[str, Any]:
        """Return the gym when ``owner_id`` owns it, else raise ForbiddenError."""
        gym = self.get_gym(gym_id)
        if str(gym.get("owner_id")) != str(owner_id):
            raise ForbiddenError("You do not manage this gym")
        return gym


def ensure_role(viewer_role: str, required: str) -> None:
    """Raise ForbiddenError unless the viewer has the ``required`` role."""
    if viewer_role != required:
        raise ForbiddenError(f"Only {required}s can do this")
