"""
Booking-related data models.
"""

from dataclasses import dataclass
from datetime import date as Date
from typing import Optional
from pydantic import BaseModel, ConfigDict

from ..enums import BookingStatus


def _hhmm(value: str) -> str:
    """Drop seconds from a backend time such as ``10:00:00``."""
    return ":".join(value.strip().split(":")[:2])


class TourTime(BaseModel):
    """Active tour start time from the catalog."""

    model_config = ConfigDict(extra="ignore")

    tour_time: str
    tour_title: str

    @property
    def hhmm(self) -> str:
        return _hhmm(self.tour_time)


class AvailabilitySlot(BaseModel):
    """Remaining capacity for one tour time on one date."""

    model_config = ConfigDict(extra="ignore")

    tour_time: str
    tour_title: str
    total_booked: int = 0
    available_spots: int = 0
    is_available: bool = False

    @property
    def hhmm(self) -> str:
        return _hhmm(self.tour_time)

    @property
    def start_minutes(self) -> int:
        """Minutes after midnight at which the tour starts."""
        hours, minutes = self.hhmm.split(":")
        return int(hours) * 60 + int(minutes)

    def fits(self, guests: int) -> bool:
        """Check if the slot is open and has room for ``guests`` people."""
        return self.is_available and self.available_spots >= guests


class BookingRequest(BaseModel):
    """Payload for the create-booking call."""

    model_config = ConfigDict(extra="forbid")

    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = ""
    country: Optional[str] = None
    tour_date: str  # YYYY-MM-DD
    tour_time: str  # HH:MM
    tour_title: str
    num_people: int
    notes: Optional[str] = ""
    potential_big_group: bool = False


class Booking(BaseModel):
    """Persisted booking as returned by the backend."""

    model_config = ConfigDict(extra="ignore")

    id: str
    website_booking_id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    country: Optional[str] = None
    tour_date: str
    tour_time: str
    tour_title: str
    num_people: int
    status: BookingStatus = BookingStatus.SCHEDULED
    notes: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED


class BookingUpdate(BaseModel):
    """Partial update for contact details or schedule of a booking."""

    model_config = ConfigDict(extra="forbid")

    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    tour_date: Optional[str] = None
    tour_time: Optional[str] = None
    num_people: Optional[int] = None


class ExistingBooking(BaseModel):
    """Scheduled booking found under an email address."""

    model_config = ConfigDict(extra="ignore")

    date: str
    time: str
    persons: int
    booking_code: str
    customer_phone: Optional[str] = None
    customer_name: str
    customer_email: str
    country: Optional[str] = None


class CancellationResult(BaseModel):
    """Result of the cancel-booking call."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    message: str = ""


@dataclass
class BookingDraft:
    """Booking being put together in the wizard, not yet persisted."""

    date: Date
    time: str  # HH:MM, venue time
    tour_title: str
    num_guests: int = 1

    # Contact details, filled on the contact form
    name: str = ""
    email: str = ""
    phone: str = ""
    country_id: str = ""

    def to_request(self, *, notes: str = "", potential_big_group: bool = False,
                   customer_phone: Optional[str] = None) -> BookingRequest:
        """Build the create-booking payload for this draft."""
        return BookingRequest(
            customer_name=self.name,
            customer_email=self.email,
            customer_phone=customer_phone if customer_phone is not None else self.phone,
            tour_date=self.date.strftime("%Y-%m-%d"),
            tour_time=self.time,
            tour_title=self.tour_title,
            num_people=self.num_guests,
            notes=notes,
            potential_big_group=potential_big_group,
        )
