"""Supabase clients for the gym portal.

Two process-wide clients share one pooled httpx configuration:

* the anon client only resolves bearer tokens into auth users;
* the service-role client reads and writes ``users``, ``gyms``,
  ``gym_members``, ``gym_classes``, ``payments`` and ``manual_payments``,
  uploads receipts to the ``RECEIPT_BUCKET`` and calls ``append_attendance``.
"""

from functools import lru_cache

import httpx
from supabase.lib.client_options import SyncClientOptions

from app.config import settings
from supabase import Client, create_client

# Receipt images take longer to push than a table read.
RECEIPT_UPLOAD_MIN_TIMEOUT_SECONDS = 60


def _build_sync_options() -> SyncClientOptions:
    max_connections = max(10, settings.supabase_http_max_connections)
    max_keepalive_connections = max(
        5,
        min(max_connections, settings.supabase_http_max_keepalive_connections),
    )
    timeout_seconds = max(1, settings.supabase_postgrest_timeout_seconds)

    pooled_http = httpx.Client(
        timeout=httpx.Timeout(timeout_seconds),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
    )

    return SyncClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=timeout_seconds,
        storage_client_timeout=max(timeout_seconds, RECEIPT_UPLOAD_MIN_TIMEOUT_SECONDS),
        function_client_timeout=min(timeout_seconds, 30),
        httpx_client=pooled_http,
    )


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Return the anon-key client behind ``get_current_user``.

    It only calls ``auth.get_user`` to turn a member or manager bearer token
    into an auth user; no table or bucket access goes through it.
    """
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=_build_sync_options(),
    )


@lru_cache(maxsize=1)
def get_service_client() -> Client:
    """Return the service-role client used for all portal data access.

    Row-level security is bypassed, so gym ownership and the member/manager
    role are enforced in the services. The membership expiry job and the
    attendance import script use it too.
    """
    return create_client(
        settings.supabase_url,
        settings.supabase_service_key,
        options=_build_sync_options(),
    )
