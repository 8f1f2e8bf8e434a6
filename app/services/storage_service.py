"""Receipt image uploads to Supabase Storage."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

import httpx
from storage3.exceptions import StorageException

from app.config import settings
from app.utils.errors import InvalidInputError, PayloadTooLargeError, StorageUploadError
from supabase import Client

logger = logging.getLogger(__name__)

_SAFE_NAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


def detect_content_type(content: bytes, hint: str | None = None) -> str:
    """Sniff PNG/JPEG signatures, falling back to the client-declared type."""
    if content.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if content.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    return (hint or "application/octet-stream").lower()


def validate_receipt(content: bytes, content_type: str) -> None:
    """Reject empty, oversized, or non-image receipts."""
    if not content:
        raise InvalidInputError("Receipt file is empty")
    if len(content) > settings.receipt_max_bytes:
        raise PayloadTooLargeError(settings.receipt_max_bytes)
    if content_type not in settings.receipt_types_list:
        raise InvalidInputError("Accepted formats: JPG, PNG")


def receipt_key(file_name: str, now: datetime) -> str:
    """Return the object key ``receipts/<epoch-ms>_<safe-name>``."""
    safe_name = _SAFE_NAME_RE.sub("-", (file_name or "").strip()).strip("-") or "receipt"
    return f"receipts/{int(now.timestamp() * 1000)}_{safe_name}"


class ReceiptStorage:
    """Upload receipts into the configured bucket."""

    def __init__(self, client: Client, bucket: str | None = None) -> None:
        self.client = client
        self.bucket = bucket or settings.receipt_bucket

    def upload(
        self,
        file_name: str,
        content: bytes,
        content_type: str | None,
        now: datetime,
    ) -> dict[str, Any]:
        """Validate and store one receipt, returning its key and public URL."""
        resolved_type = detect_content_type(content, content_type)
        validate_receipt(content, resolved_type)

        key = receipt_key(file_name, now)
        bucket = self.client.storage.from_(self.bucket)
        try:
            bucket.upload(key, content, {"content-type": resolved_type, "upsert": "false"})
            url = bucket.get_public_url(key)
        except (StorageException, httpx.HTTPError) as exc:
            logger.warning("Receipt upload to %s/%s failed: %s", self.bucket, key, exc)
            raise StorageUploadError() from exc

        return {
            "key": key,
            "url": url,
            "content_type": resolved_type,
            "size_bytes": len(content),
        }
