"""
Core data models for the tour booking system.
"""

from .booking import (
    AvailabilitySlot,
    Booking,
    BookingDraft,
    BookingRequest,
    BookingUpdate,
    CancellationResult,
    ExistingBooking,
    TourTime,
)
from .private_tour import PrivateTourPrice, PrivateTourRequest, PrivateTourResponse
from .catalog import Country, TourImage
from .wizard import (
    ContactForm,
    DateSelection,
    DuplicateFound,
    Finished,
    PhoneEnrichment,
    PrivateTourContact,
    PrivateTourGuests,
    PrivateTourSubmitted,
    WizardState,
)

__all__ = [
    "AvailabilitySlot",
    "Booking",
    "BookingDraft",
    "BookingRequest",
    "BookingUpdate",
    "CancellationResult",
    "ExistingBooking",
    "TourTime",
    "PrivateTourPrice",
    "PrivateTourRequest",
    "PrivateTourResponse",
    "Country",
    "TourImage",
    "ContactForm",
    "DateSelection",
    "DuplicateFound",
    "Finished",
    "PhoneEnrichment",
    "PrivateTourContact",
    "PrivateTourGuests",
    "PrivateTourSubmitted",
    "WizardState",
]
