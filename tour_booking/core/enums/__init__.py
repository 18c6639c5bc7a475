"""
Enums for the tour booking system.
"""

from .booking import (
    BookingStatus,
    EntryPoint,
    ErrorType,
    ImageCategory,
    WizardStep,
    GROUP_TOUR_MAX_GUESTS,
)

__all__ = [
    "BookingStatus",
    "EntryPoint",
    "ErrorType",
    "ImageCategory",
    "WizardStep",
    "GROUP_TOUR_MAX_GUESTS",
]
