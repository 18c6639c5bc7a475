"""
Private tour data models.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PrivateTourRequest(BaseModel):
    """Request for a private tour, followed up by a guide."""

    model_config = ConfigDict(extra="forbid")

    customer_name: str
    customer_email: str
    customer_phone: str
    country: str
    number_of_guests: int = Field(ge=1)
    preferred_date: Optional[str] = None  # YYYY-MM-DD
    potential_big_group: Optional[bool] = None


class PrivateTourResponse(BaseModel):
    """Acknowledgement of a private tour request."""

    model_config = ConfigDict(extra="ignore")

    request_id: Optional[str] = None


class PrivateTourPrice(BaseModel):
    """Price shown for a private tour."""

    model_config = ConfigDict(extra="forbid")

    guests: int
    per_person: Decimal
    total: Decimal

    def display(self) -> dict:
        """Prices formatted with two decimals, as shown to the customer."""
        return {
            "guests": self.guests,
            "per_person": f"{self.per_person:.2f}",
            "total": f"{self.total:.2f}",
        }
