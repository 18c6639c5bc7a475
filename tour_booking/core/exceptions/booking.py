"""
Booking-related exceptions.
"""

from typing import Dict, Optional


class BookingFlowError(Exception):
    """Base exception for booking flow errors."""
    pass


class BookingValidationError(BookingFlowError):
    """Exception raised when user input fails validation."""

    def __init__(self, message: str, field_errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.field_errors = field_errors or {}


class SlotUnavailableError(BookingFlowError):
    """Exception raised when a tour slot cannot be offered for the party."""
    pass


class InvalidTransitionError(BookingFlowError):
    """Exception raised when an action is not allowed in the current step."""
    pass


class RequestInFlightError(BookingFlowError):
    """Exception raised when a submission is triggered while another is pending."""
    pass


class BookingAlreadyCancelledError(BookingFlowError):
    """Exception raised when cancelling a booking that is already cancelled."""
    pass
