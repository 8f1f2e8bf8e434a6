"""Marketing content schemas."""

from pydantic import BaseModel


class FeaturesHeader(BaseModel):
    """Heading block for the features page."""

    title: str
    subtitle: str
