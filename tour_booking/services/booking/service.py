"""
Booking rules shared by the wizard and the booking pages.
"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel

from ...config import Settings, get_settings
from ...core.exceptions import ExternalAPIError
from ...core.models import (
    AvailabilitySlot,
    Booking,
    BookingDraft,
    BookingRequest,
    ExistingBooking,
    TourTime,
)
from ...utils.date import TimeFormatter, VenueClock
from ...utils.logging import get_logger
from ..external import BookingAPIClient

logger = get_logger("tours.booking")


class QuickDateOption(BaseModel):
    """One of the two quick-pick date buttons above the calendar."""

    label: str
    date: date


class BookingService:
    """Availability rules, duplicate lookup and booking creation."""

    def __init__(
        self,
        client: BookingAPIClient,
        clock: Optional[VenueClock] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.client = client
        self.clock = clock or VenueClock(settings.venue_timezone)
        self.cutoff_minutes = settings.same_day_cutoff_minutes
        self.default_tour_title = settings.default_tour_title

    async def get_tour_times(self) -> List[TourTime]:
        """Get the active tour catalog."""
        return await self.client.list_tour_times()

    async def get_availability(self, day: date) -> List[AvailabilitySlot]:
        """Get availability for ``day``; errors propagate."""
        return await self.client.check_availability(TimeFormatter.format_for_api(day))

    async def refresh_availability(self, day: date) -> List[AvailabilitySlot]:
        """Get availability for ``day``, logging failures and returning ``[]``."""
        try:
            return await self.get_availability(day)
        except ExternalAPIError as e:
            logger.error(f"Failed to check availability for {day}: {e}")
            return []

    # ------------------------------------------------------------------
    def starts_after_cutoff(self, slot: AvailabilitySlot) -> bool:
        """Check if ``slot`` starts more than the cutoff after venue time now."""
        return slot.start_minutes > self.clock.minutes_now() + self.cutoff_minutes

    def offerable_slots(
        self, slots: List[AvailabilitySlot], guests: int, day: Optional[date]
    ) -> List[AvailabilitySlot]:
        """
        Slots a party of ``guests`` may pick on ``day``.

        A slot must be open with enough spots left; on the current venue day
        it must also start after the same-day cutoff.
        """
        offered = [slot for slot in slots if slot.fits(guests)]
        if self.clock.is_today(day):
            offered = [slot for slot in offered if self.starts_after_cutoff(slot)]
        return offered

    def is_today_available(
        self, today_slots: List[AvailabilitySlot], loading: bool = False
    ) -> bool:
        """Check if today still has an open tour that has not started yet."""
        if loading or not today_slots:
            return False
        return any(
            slot.is_available and self.starts_after_cutoff(slot) for slot in today_slots
        )

    def quick_date_options(
        self,
        today_slots: List[AvailabilitySlot],
        selected: Optional[date] = None,
        loading: bool = False,
    ) -> List[QuickDateOption]:
        """Labels and dates for the two quick-pick buttons."""
        if self.clock.is_today(selected) or self.is_today_available(today_slots, loading):
            return [
                QuickDateOption(label="Today", date=self.clock.today()),
                QuickDateOption(label="Tomorrow", date=self.clock.days_from_today(1)),
            ]
        return [
            QuickDateOption(label="Tomorrow", date=self.clock.days_from_today(1)),
            QuickDateOption(label="Day after Tomorrow", date=self.clock.days_from_today(2)),
        ]

    def resolve_tour_title(self, tour_times: List[TourTime], time: str) -> str:
        """Title of the tour starting at ``time``, or the default title."""
        wanted = TimeFormatter.to_24_hour(time)
        for tour_time in tour_times:
            if tour_time.hhmm == wanted:
                return tour_time.tour_title
        return self.default_tour_title

    # ------------------------------------------------------------------
    def build_booking_request(
        self,
        draft: BookingDraft,
        potential_big_group: bool,
        notes: str = "",
        customer_phone: Optional[str] = None,
    ) -> BookingRequest:
        return draft.to_request(
            notes=notes,
            potential_big_group=potential_big_group,
            customer_phone=customer_phone,
        )

    async def find_duplicate(self, email: str) -> Optional[ExistingBooking]:
        """
        Existing scheduled booking for ``email``, if any.

        The existence check runs first; details are only fetched when it
        reports a booking. A positive check without details yields ``None``.
        """
        if not await self.client.check_booking_exists(email):
            return None
        existing = await self.client.get_booking_by_email(email)
        if existing is None:
            logger.warning(f"booking reported for {email} but no details returned")
        return existing

    async def create_booking(self, request: BookingRequest) -> Booking:
        booking = await self.client.create_booking(request)
        logger.info(
            f"booking {booking.website_booking_id} created for "
            f"{request.tour_date} {request.tour_time} ({request.num_people} guests)"
        )
        return booking
