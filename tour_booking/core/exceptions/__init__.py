"""
Custom exceptions for the tour booking system.
"""

from .booking import (
    BookingFlowError,
    BookingValidationError,
    SlotUnavailableError,
    InvalidTransitionError,
    RequestInFlightError,
    BookingAlreadyCancelledError,
)
from .external import (
    ExternalAPIError,
    BookingAPIError,
    BookingNotFoundError,
    NetworkError,
    PrivateTourRequestError,
)

__all__ = [
    "BookingFlowError",
    "BookingValidationError",
    "SlotUnavailableError",
    "InvalidTransitionError",
    "RequestInFlightError",
    "BookingAlreadyCancelledError",
    "ExternalAPIError",
    "BookingAPIError",
    "BookingNotFoundError",
    "NetworkError",
    "PrivateTourRequestError",
]
