"""
Management of existing bookings: view, reschedule, edit contact, cancel.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from ...config import Settings
from ...core.exceptions import (
    BookingAlreadyCancelledError,
    BookingValidationError,
    ExternalAPIError,
)
from ...core.models import AvailabilitySlot, Booking, BookingUpdate
from ...utils.date import TimeFormatter, VenueClock
from ...utils.event_log import log_event
from ...utils.logging import get_logger
from ...utils.phone import PhoneNumberParser
from ...utils.validation import ValidationUtils
from ..external import BookingAPIClient
from ..memory import StateManager
from .data import CountryDirectory, countries as default_countries
from .service import BookingService

logger = get_logger("tours.manage")

DEFAULT_CANCEL_REASON = "Customer requested cancellation"

CONTACT_FIELDS = {
    "name": "customer_name",
    "email": "customer_email",
    "phone": "customer_phone",
}


class BookingManager:
    """Operations behind the view-booking, cancel and thank-you pages."""

    def __init__(
        self,
        client: BookingAPIClient,
        *,
        clock: Optional[VenueClock] = None,
        settings: Optional[Settings] = None,
        countries: Optional[CountryDirectory] = None,
        state_manager: Optional[StateManager] = None,
    ):
        self.client = client
        self.bookings = BookingService(client, clock, settings)
        self.clock = self.bookings.clock
        self.countries = countries or default_countries
        self.state_manager = state_manager

    async def load(self, booking_id: str) -> Booking:
        """Fetch a booking by its public id."""
        booking_id = (booking_id or "").strip()
        if not booking_id:
            raise BookingValidationError(
                "Booking ID is required", {"booking_id": "Booking ID is required"}
            )
        return await self.client.get_booking(booking_id)

    async def available_tours(self, day: date) -> List[AvailabilitySlot]:
        """Availability shown in the reschedule picker."""
        return await self.bookings.get_availability(day)

    async def reschedule(
        self, booking: Booking, day: date, time: str, guests: int
    ) -> Optional[Booking]:
        """
        Move ``booking`` to a new date, time or party size.

        Returns:
            The re-fetched booking, or None when nothing changed
        """
        if booking.is_cancelled:
            raise BookingAlreadyCancelledError("Cancelled bookings cannot be changed")

        errors: Dict[str, str] = {}
        if day < self.clock.today():
            errors["date"] = "Please select today or a later date"
        if not TimeFormatter.is_valid_time_format(TimeFormatter.to_24_hour(time)):
            errors["time"] = "Please select a tour time"
        if guests < 1:
            errors["guests"] = "At least one guest is required"
        if errors:
            raise BookingValidationError("Please check the new schedule", errors)

        new_date = TimeFormatter.format_for_api(day)
        new_time = TimeFormatter.to_24_hour(time)
        current_time = ":".join(booking.tour_time.split(":")[:2])
        if (
            booking.tour_date == new_date
            and current_time == new_time
            and booking.num_people == guests
        ):
            logger.info(f"booking {booking.website_booking_id}: no changes to save")
            return None

        await self.client.update_booking(
            booking.website_booking_id,
            BookingUpdate(tour_date=new_date, tour_time=new_time, num_people=guests),
        )
        logger.info(
            f"booking {booking.website_booking_id} moved to {new_date} {new_time} "
            f"({guests} guests)"
        )
        log_event(
            "booking_schedule_updated",
            {
                "booking_id": booking.website_booking_id,
                "date": new_date,
                "time": new_time,
                "guests": guests,
            },
        )
        return await self.client.get_booking(booking.website_booking_id)

    async def update_contact(
        self,
        booking: Booking,
        field: str,
        value: str,
        country_id: Optional[str] = None,
    ) -> Booking:
        """Change one contact detail and return the re-fetched booking."""
        if field not in CONTACT_FIELDS:
            raise BookingValidationError(
                f"Unknown contact field: {field}", {"field": "Unknown contact field"}
            )

        value = (value or "").strip()
        if not value:
            raise BookingValidationError(
                f"{field.capitalize()} is required", {field: f"{field.capitalize()} is required"}
            )

        changes: Dict[str, Any] = {}
        if field == "email":
            valid, message = ValidationUtils.validate_email(value)
            if not valid:
                raise BookingValidationError(message, {"email": message})
            changes["customer_email"] = value
        elif field == "phone":
            digits = PhoneNumberParser.sanitize(value)
            country = self.countries.find(country_id) if country_id else None
            if country_id and country is None:
                raise BookingValidationError(
                    "Invalid country selected", {"country": "Invalid country selected"}
                )
            if not digits:
                raise BookingValidationError(
                    "Phone number is required", {"phone": "Phone number is required"}
                )
            if country:
                changes["customer_phone"] = PhoneNumberParser.with_dial_code(digits, country)
                changes["country"] = country.name
            else:
                changes["customer_phone"] = digits
        else:
            changes[CONTACT_FIELDS[field]] = value

        await self.client.update_booking(booking.website_booking_id, BookingUpdate(**changes))
        logger.info(f"booking {booking.website_booking_id}: {field} updated")
        log_event(
            "booking_contact_updated",
            {"booking_id": booking.website_booking_id, "field": field},
        )
        return await self.client.get_booking(booking.website_booking_id)

    async def cancel(self, booking_id: str, reason: Optional[str] = None) -> Booking:
        """Cancel a booking and return it as stored afterwards."""
        booking = await self.load(booking_id)
        if booking.is_cancelled:
            raise BookingAlreadyCancelledError("This booking has already been cancelled")

        reason = (reason or "").strip() or DEFAULT_CANCEL_REASON
        await self.client.cancel_booking(booking.website_booking_id, reason)
        logger.info(f"booking {booking.website_booking_id} cancelled: {reason}")
        log_event(
            "booking_cancelled",
            {"booking_id": booking.website_booking_id, "reason": reason},
        )
        return await self.client.get_booking(booking.website_booking_id)

    async def confirmation(
        self, booking_id: Optional[str] = None, client_id: Optional[str] = None
    ) -> Optional[Booking]:
        """
        Booking shown on the thank-you page.

        Falls back to the last booking remembered for ``client_id`` when no id
        is given. Lookup failures are logged and yield None.
        """
        if not booking_id and client_id and self.state_manager is not None:
            booking_id = await self.state_manager.get_last_booking(client_id)
        if not booking_id:
            return None

        try:
            return await self.client.get_booking(booking_id.strip())
        except ExternalAPIError as e:
            logger.error(f"Error fetching booking {booking_id}: {e}")
            return None
