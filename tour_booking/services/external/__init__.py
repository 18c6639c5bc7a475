"""
Booking backend client module.
"""

from .service import BookingAPIClient

__all__ = ["BookingAPIClient"]
