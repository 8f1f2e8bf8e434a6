"""Gym and payment-destination schemas."""

from pydantic import BaseModel


class GymOption(BaseModel):
    """Gym entry for the receipt gym picker."""

    id: str
    name: str
    owner_id: str | None = None


class OwnerPaymentInfo(BaseModel):
    """E-wallet details the gym owner publishes for manual payments."""

    full_name: str | None = None
    gcash_number: str | None = None
    gotyme_number: str | None = None
    gcash_qr_url: str | None = None
    gotyme_qr_url: str | None = None


class GymListResponse(BaseModel):
    """Gym picker options."""

    gyms: list[GymOption]


class PaymentInfoResponse(BaseModel):
    """Owner payment details, absent when the gym has no reachable owner."""

    payment_info: OwnerPaymentInfo | None = None
