"""
Service layer for the tour booking system.
"""

from .external import BookingAPIClient
from .booking import BookingService, BookingManager, BookingWizard, CountryDirectory
from .private_tour import PrivateTourService
from .memory import StateManager

__all__ = [
    "BookingAPIClient",
    "BookingService",
    "BookingManager",
    "BookingWizard",
    "CountryDirectory",
    "PrivateTourService",
    "StateManager",
]
