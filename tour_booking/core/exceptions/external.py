"""
External API-related exceptions.
"""

from typing import Optional


class ExternalAPIError(Exception):
    """Base exception for external API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BookingAPIError(ExternalAPIError):
    """Exception raised when the booking backend rejects a call."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        available_spots: Optional[int] = None,
    ):
        super().__init__(message, status_code)
        self.available_spots = available_spots


class BookingNotFoundError(BookingAPIError):
    """Exception raised when a booking id is unknown to the backend."""
    pass


class NetworkError(ExternalAPIError):
    """Exception raised when the backend cannot be reached at all."""
    pass


class PrivateTourRequestError(ExternalAPIError):
    """Exception raised when a private tour request is rejected."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message, status_code)
        self.reason = reason
