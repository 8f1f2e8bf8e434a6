"""Manual payment schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class ManualPaymentResponse(BaseModel):
    """A receipt submitted for manual verification."""

    id: str
    receipt_url: str
    file_name: str
    uploaded_at: datetime | None = None
    status: str
    user_id: str
    user_email: str | None = None
    gym_id: str
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None


class ReviewRequest(BaseModel):
    """Manager decision on a pending receipt."""

    decision: Literal["Approved", "Rejected"]


class PaymentSummary(BaseModel):
    """Paid bills for the current month."""

    year: int
    month: int
    total_bills_paid: float


class ManualPaymentEnvelope(BaseModel):
    """Single manual payment wrapper."""

    manual_payment: ManualPaymentResponse


class ManualPaymentList(BaseModel):
    """Manual payment listing."""

    manual_payments: list[ManualPaymentResponse]
