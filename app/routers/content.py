"""Public marketing content."""

from __future__ import annotations

from fastapi import APIRouter

from app.schemas.content import FeaturesHeader

router = APIRouter()

FEATURES_HEADER = FeaturesHeader(
    title="Membership Management System Features",
    subtitle=(
        "At ByteMinds Systems, we provide a comprehensive gym and fitness center "
        "management solution that streamlines your operations and enhances member "
        "satisfaction."
    ),
)


@router.get("/features", response_model=FeaturesHeader)
def features_header() -> FeaturesHeader:
    """Return the features page heading."""
    return FEATURES_HEADER
