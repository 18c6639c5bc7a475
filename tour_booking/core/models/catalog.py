"""
Static and read-only catalog models.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict

from ..enums import ImageCategory


class Country(BaseModel):
    """Country entry for the phone and country pickers."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    emoji: str
    name: str
    code: str  # dial code, e.g. "+31"
    placeholder: str = ""


class TourImage(BaseModel):
    """Image shown on the tour pages."""

    model_config = ConfigDict(extra="ignore")

    id: str
    category: ImageCategory
    image_url: str
    alt_text: str = ""
    display_order: int = 0
    created_at: Optional[str] = None
