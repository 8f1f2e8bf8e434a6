"""Receipt storage tests."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from app.services.storage_service import (
    ReceiptStorage,
    detect_content_type,
    receipt_key,
    validate_receipt,
)
from app.utils.errors import InvalidInputError, PayloadTooLargeError

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 16
NOW = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)


def test_detect_content_type_prefers_magic_bytes() -> None:
    """File signatures win over the declared content type."""
    assert detect_content_type(PNG, "image/jpeg") == "image/png"
    assert detect_content_type(JPEG, None) == "image/jpeg"
    assert detect_content_type(b"GIF89a", "image/GIF") == "image/gif"
    assert detect_content_type(b"plain", None) == "application/octet-stream"


def test_validate_receipt_rejects_bad_uploads() -> None:
    """Empty, oversized and non-image files should be refused."""
    with pytest.raises(InvalidInputError):
        validate_receipt(b"", "image/png")
    with pytest.raises(InvalidInputError):
        validate_receipt(b"GIF89a", "image/gif")
    with pytest.raises(PayloadTooLargeError):
        validate_receipt(PNG + b"\x00" * (5 * 1024 * 1024), "image/png")
    validate_receipt(PNG, "image/png")


def test_receipt_key_is_timestamped_and_sanitized() -> None:
    """Keys carry the upload time in ms and a path-safe name."""
    key = receipt_key("my receipt (1).png", NOW)
    assert key == f"receipts/{int(NOW.timestamp() * 1000)}_my-receipt-1-.png"
    assert receipt_key("///", NOW).endswith("_receipt")


def test_upload_stores_file_and_returns_public_url(fake_client) -> None:
    """Uploads should land in the receipts bucket with the sniffed type."""
    stored = ReceiptStorage(fake_client).upload("gcash.png", PNG, "application/octet-stream", NOW)
    assert stored["content_type"] == "image/png"
    assert stored["url"] == f"https://cdn.test/receipts/{stored['key']}"
    assert fake_client.uploads[0]["options"]["content-type"] == "image/png"
