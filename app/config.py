"""Application settings loaded from environment variables."""

from __future__ import annotations

from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration.

    Values are read from environment variables (or a `.env` file).
    """

    # Supabase
    supabase_url: str
    supabase_anon_key: str
    supabase_service_key: str
    supabase_http_max_connections: int = 100
    supabase_http_max_keepalive_connections: int = 50
    supabase_postgrest_timeout_seconds: int = 30

    # Receipt storage
    receipt_bucket: str = "receipts"
    receipt_max_bytes: int = 5 * 1024 * 1024
    receipt_allowed_types: str = "image/jpeg,image/png"

    # App
    app_name: str = "Gym Portal API"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000"
    enable_scheduler: bool = True

    # Gym-local time zone for "today", "this month" and attendance days
    timezone: str = "UTC"

    # Performance tuning
    auth_token_cache_ttl_seconds: int = 15
    auth_token_cache_max_entries: int = 1024
    role_cache_ttl_seconds: int = 60
    user_cache_ttl_seconds: int = 30
    data_cache_max_entries: int = 5000
    slow_request_log_threshold_ms: int = 0
    slow_query_log_threshold_ms: int = 0

    @property
    def origins_list(self) -> list[str]:
        """Parse comma-separated ALLOWED_ORIGINS into a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def receipt_types_list(self) -> list[str]:
        """Parse comma-separated RECEIPT_ALLOWED_TYPES into a list."""
        return [t.strip().lower() for t in self.receipt_allowed_types.split(",") if t.strip()]

    @property
    def tzinfo(self) -> ZoneInfo:
        """Return the configured gym time zone."""
        return ZoneInfo(self.timezone)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()  # type: ignore[call-arg]
