"""
Utility modules for the tour booking system.
"""

from .phone import PhoneNumberParser
from .date import VenueClock, TimeFormatter
from .validation import ValidationUtils
from .logging import get_logger

__all__ = [
    "PhoneNumberParser",
    "VenueClock",
    "TimeFormatter",
    "ValidationUtils",
    "get_logger",
]
