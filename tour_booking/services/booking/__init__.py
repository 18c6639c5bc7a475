"""
Booking services: wizard, management and shared booking rules.
"""

from .data import CountryDirectory, countries
from .errors import HandledError, handle_booking_error
from .manager import BookingManager
from .service import BookingService, QuickDateOption
from .wizard import BookingWizard

__all__ = [
    "BookingManager",
    "BookingService",
    "BookingWizard",
    "CountryDirectory",
    "HandledError",
    "QuickDateOption",
    "countries",
    "handle_booking_error",
]
