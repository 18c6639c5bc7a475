"""
Classification of booking backend failures into user-facing errors.
"""

import re
from typing import Optional, Union
from pydantic import BaseModel

from ...core.enums import ErrorType
from ...core.exceptions import BookingAPIError, NetworkError

_SPOTS_PATTERN = re.compile(r"Only (\d+) spots?")


class HandledError(BaseModel):
    """A classified failure with the message shown to the customer."""

    type: ErrorType
    message: str
    user_message: str
    available_spots: Optional[int] = None

    @property
    def is_capacity_error(self) -> bool:
        return self.type.is_capacity_error


def handle_booking_error(error: Union[BaseException, str]) -> HandledError:
    """Classify ``error`` by inspecting its message."""
    message = str(error) or error.__class__.__name__

    if "fully booked" in message:
        return HandledError(
            type=ErrorType.FULLY_BOOKED,
            message=message,
            user_message="Sorry, this tour is fully booked. Please select a different time.",
        )

    if "Not enough spots" in message:
        match = _SPOTS_PATTERN.search(message)
        if match:
            spots = int(match.group(1))
        elif isinstance(error, BookingAPIError) and error.available_spots is not None:
            spots = error.available_spots
        else:
            spots = 0
        plural = "" if spots == 1 else "s"
        return HandledError(
            type=ErrorType.INSUFFICIENT_SPOTS,
            message=message,
            user_message=(
                f"Only {spots} spot{plural} remaining. "
                "Please reduce the number of guests or select another time."
            ),
            available_spots=spots,
        )

    if "not found" in message or "Not found" in message:
        return HandledError(
            type=ErrorType.NOT_FOUND,
            message=message,
            user_message="Booking not found. Please check your booking ID.",
        )

    if "required" in message or "invalid" in message or "Invalid" in message:
        return HandledError(
            type=ErrorType.VALIDATION_ERROR,
            message=message,
            user_message=message,
        )

    if isinstance(error, NetworkError):
        return HandledError(
            type=ErrorType.NETWORK_ERROR,
            message="No internet connection",
            user_message="Please check your internet connection and try again.",
        )

    return HandledError(
        type=ErrorType.UNKNOWN,
        message=message,
        user_message="An unexpected error occurred. Please try again.",
    )
