"""
Booking-related enums.
"""

from enum import Enum, IntEnum

# Largest party the standard group tour takes; bigger groups go private.
GROUP_TOUR_MAX_GUESTS = 6


class WizardStep(IntEnum):
    """Steps of the booking wizard, numbered as shown to the user."""

    DATE_SELECTION = 1
    CONTACT_FORM = 2
    PHONE_ENRICHMENT = 3
    DUPLICATE_FOUND = 4
    PRIVATE_TOUR_GUESTS = 5
    PRIVATE_TOUR_CONTACT = 6
    PRIVATE_TOUR_SUBMITTED = 7
    FINISHED = 8


class BookingStatus(str, Enum):
    """Booking status as stored by the backend."""

    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"


class EntryPoint(str, Enum):
    """Places a guest counter can be shown; each has its own ceiling."""

    DRAWER = "drawer"
    SIDEBAR = "sidebar"
    PRIVATE_TOUR = "private_tour"

    @property
    def max_guests(self) -> int:
        return {
            EntryPoint.DRAWER: 30,
            EntryPoint.SIDEBAR: 20,
            EntryPoint.PRIVATE_TOUR: 30,
        }[self]

    def clamp(self, guests: int) -> int:
        """Clamp a guest count into ``[1, max_guests]``."""
        return max(1, min(self.max_guests, guests))


class ErrorType(str, Enum):
    """Classification of booking backend failures."""

    FULLY_BOOKED = "FULLY_BOOKED"
    INSUFFICIENT_SPOTS = "INSUFFICIENT_SPOTS"
    NOT_FOUND = "NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN = "UNKNOWN"

    @property
    def is_capacity_error(self) -> bool:
        return self in (ErrorType.FULLY_BOOKED, ErrorType.INSUFFICIENT_SPOTS)


class ImageCategory(str, Enum):
    """Image groups managed from the image admin page."""

    TOUR = "tour"
    GROUP = "group"
    HERO = "hero"
