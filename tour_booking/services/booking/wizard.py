"""
Booking wizard controller.

Drives a visitor from date selection to a created booking, diverting large
parties to a private tour request and offering to reschedule when the email
already has a scheduled booking.
"""

from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional
from urllib.parse import quote
from uuid import uuid4

from ...config import Settings
from ...core.enums import GROUP_TOUR_MAX_GUESTS, EntryPoint
from ...core.exceptions import (
    BookingValidationError,
    ExternalAPIError,
    InvalidTransitionError,
    RequestInFlightError,
    SlotUnavailableError,
)
from ...core.models import (
    AvailabilitySlot,
    Booking,
    BookingDraft,
    BookingUpdate,
    ContactForm,
    DateSelection,
    DuplicateFound,
    Finished,
    PhoneEnrichment,
    PrivateTourContact,
    PrivateTourGuests,
    PrivateTourPrice,
    PrivateTourSubmitted,
    TourTime,
    WizardState,
)
from ...utils.date import TimeFormatter, VenueClock
from ...utils.event_log import log_event
from ...utils.logging import get_logger
from ...utils.phone import PhoneNumberParser
from ...utils.validation import ValidationUtils
from ..external import BookingAPIClient
from ..memory import StateManager
from ..private_tour import PrivateTourService, calculate_private_tour_price
from .data import CountryDirectory, countries as default_countries
from .errors import HandledError, handle_booking_error
from .service import BookingService, QuickDateOption

logger = get_logger("tours.wizard")


def thank_you_url(booking_id: str) -> str:
    return f"/thank-you?bookingId={quote(booking_id)}"


def view_booking_url(booking_code: str) -> str:
    return f"/view-booking/{quote(booking_code)}"


class BookingWizard:
    """
    State machine behind the booking drawer.

    The current screen is ``state``, one of the named states in
    ``core.models.wizard``. Actions check that they are valid for the current
    state and raise ``InvalidTransitionError`` otherwise. Input problems
    raise ``BookingValidationError``; backend failures are classified and
    surfaced on ``error`` instead of being raised.
    """

    def __init__(
        self,
        client: BookingAPIClient,
        *,
        clock: Optional[VenueClock] = None,
        settings: Optional[Settings] = None,
        countries: Optional[CountryDirectory] = None,
        state_manager: Optional[StateManager] = None,
        client_id: Optional[str] = None,
        session_id: Optional[str] = None,
        entry_point: EntryPoint = EntryPoint.DRAWER,
    ):
        self.client = client
        self.bookings = BookingService(client, clock, settings)
        self.clock = self.bookings.clock
        self.private_tours = PrivateTourService(client)
        self.countries = countries or default_countries
        self.state_manager = state_manager
        self.client_id = client_id
        self.session_id = session_id or uuid4().hex
        self.entry_point = entry_point

        self.state: WizardState = DateSelection()
        self.tour_times: List[TourTime] = []
        self.today_availability: List[AvailabilitySlot] = []
        self.availability: List[AvailabilitySlot] = []
        self.is_loading_initial = True
        # Bumped on every date change; older availability responses are dropped
        self._date_generation = 0

        # Once a visitor asks for more than six guests this stays set for the
        # whole session, even after they go back down.
        self.has_selected_over6 = False

        self.pending = False
        self.error: Optional[HandledError] = None
        self.field_errors: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------
    def _expect(self, *state_types):
        if not isinstance(self.state, state_types):
            raise InvalidTransitionError(
                f"Action not available in step {int(self.state.step)} "
                f"({type(self.state).__name__})"
            )
        return self.state

    def _transition(self, new_state: WizardState) -> None:
        old_state = self.state
        self.state = new_state
        if old_state.step != new_state.step:
            logger.debug(
                f"[{self.session_id}] {type(old_state).__name__} -> {type(new_state).__name__}"
            )
            log_event(
                "step_transition",
                {"from": int(old_state.step), "to": int(new_state.step)},
                session_id=self.session_id,
            )

    def _reset_feedback(self) -> None:
        self.error = None
        self.field_errors = {}

    def _reject(self, errors: Dict[str, str]) -> None:
        self.field_errors = errors
        raise BookingValidationError("Please check your details", errors)

    @asynccontextmanager
    async def _request(self):
        """Mark a create/update/cancel call as in flight."""
        if self.pending:
            raise RequestInFlightError("Another request is still in progress")
        self.pending = True
        try:
            yield
        finally:
            self.pending = False

    async def _remember(self, booking: Booking) -> None:
        if self.state_manager is None or not self.client_id:
            return
        await self.state_manager.remember_last_booking(
            self.client_id, booking.website_booking_id
        )

    async def _handle_failure(self, error: ExternalAPIError, draft: BookingDraft) -> None:
        """Surface a failed create; capacity problems send the visitor back to the slots."""
        handled = handle_booking_error(error)
        self.error = handled
        logger.error(f"[{self.session_id}] booking failed: {handled.message}")
        log_event(
            "booking_failed",
            {"type": handled.type.value, "message": handled.message},
            session_id=self.session_id,
        )
        if handled.is_capacity_error:
            self._date_generation += 1
            self.availability = await self.bookings.refresh_availability(draft.date)
            self._transition(
                DateSelection(date=draft.date, guests=draft.num_guests, slots_shown=True)
            )

    # ------------------------------------------------------------------
    # Step 1: date, guests and time
    # ------------------------------------------------------------------
    async def start(self) -> None:
        """Load the tour catalog and today's availability."""
        self.is_loading_initial = True
        try:
            self.tour_times = await self.bookings.get_tour_times()
            self.today_availability = await self.bookings.get_availability(self.clock.today())
        except ExternalAPIError as e:
            logger.error(f"Failed to fetch initial data: {e}")
        finally:
            self.is_loading_initial = False

    async def select_date(self, day: date) -> None:
        """Pick a tour date; everything chosen after the date is reset."""
        self._expect(DateSelection)
        self._reset_feedback()
        if day < self.clock.today():
            self._reject({"date": "Please select today or a later date"})

        self._date_generation += 1
        generation = self._date_generation
        self.availability = []
        self._transition(DateSelection(date=day))
        availability = await self.bookings.refresh_availability(day)
        if generation != self._date_generation:
            logger.debug(f"[{self.session_id}] dropping stale availability for {day}")
            return
        self.availability = availability
        log_event(
            "date_selected",
            {"date": day.isoformat(), "slots": len(self.availability)},
            session_id=self.session_id,
        )

    def clear_date(self) -> None:
        self._expect(DateSelection)
        self._date_generation += 1
        self.availability = []
        self._transition(DateSelection())

    def _dated_selection(self) -> DateSelection:
        state = self._expect(DateSelection)
        if state.date is None:
            raise InvalidTransitionError("Select a date first")
        return state

    def increment_guests(self) -> None:
        state = self._dated_selection()
        guests = self.entry_point.clamp(state.guests + 1)
        if guests > GROUP_TOUR_MAX_GUESTS:
            self.has_selected_over6 = True
        self.state = replace(state, guests=guests, slots_shown=False)

    def decrement_guests(self) -> None:
        state = self._dated_selection()
        self.state = replace(
            state, guests=self.entry_point.clamp(state.guests - 1), slots_shown=False
        )

    def continue_from_guests(self) -> None:
        """Show the tours for the party, or divert large parties to a private tour."""
        state = self._dated_selection()
        if state.guests > GROUP_TOUR_MAX_GUESTS:
            self._transition(
                PrivateTourGuests(
                    guests=EntryPoint.PRIVATE_TOUR.clamp(state.guests),
                    preferred_date=state.date,
                )
            )
            return
        self.state = replace(state, slots_shown=True)

    def edit_guests(self) -> None:
        """Hide the slot list to change the party size."""
        state = self._dated_selection()
        self.state = replace(state, slots_shown=False)

    def try_fewer_guests(self) -> None:
        state = self._dated_selection()
        self.state = replace(state, guests=max(1, state.guests - 1), slots_shown=False)

    @property
    def offered_slots(self) -> List[AvailabilitySlot]:
        """Slots the current party may pick, empty until slots are shown."""
        state = self.state
        if not isinstance(state, DateSelection) or not state.slots_shown:
            return []
        return self.bookings.offerable_slots(self.availability, state.guests, state.date)

    def select_time(self, time: str) -> None:
        """Pick one of the offered slots and move on to the contact form."""
        state = self._dated_selection()
        if not state.slots_shown:
            raise InvalidTransitionError("Show the available tours first")

        wanted = TimeFormatter.to_24_hour(time)
        slot = next((s for s in self.offered_slots if s.hhmm == wanted), None)
        if slot is None:
            raise SlotUnavailableError(
                f"The {wanted} tour is not available for {state.guests} guests"
            )

        draft = BookingDraft(
            date=state.date,
            time=slot.hhmm,
            tour_title=slot.tour_title or self.bookings.resolve_tour_title(self.tour_times, slot.hhmm),
            num_guests=state.guests,
        )
        self._transition(ContactForm(draft=draft))

    # ------------------------------------------------------------------
    # Step 2: contact form, duplicate check and create
    # ------------------------------------------------------------------
    async def submit_contact(self, name: str, email: str, phone: str = "") -> None:
        state = self._expect(ContactForm)
        self._reset_feedback()
        draft = state.draft
        draft.name = (name or "").strip()
        draft.email = (email or "").strip()
        draft.phone = PhoneNumberParser.sanitize(phone)

        errors = ValidationUtils.collect_errors(
            name=ValidationUtils.validate_name(draft.name),
            email=ValidationUtils.validate_email(draft.email),
        )
        if errors:
            self._reject(errors)

        async with self._request():
            try:
                existing = await self.bookings.find_duplicate(draft.email)
                if existing is not None:
                    logger.info(
                        f"[{self.session_id}] existing booking {existing.booking_code} "
                        f"found for {draft.email}"
                    )
                    log_event(
                        "duplicate_found",
                        {"booking_code": existing.booking_code},
                        session_id=self.session_id,
                    )
                    self._transition(DuplicateFound(existing=existing, draft=draft))
                    return

                booking = await self.bookings.create_booking(
                    self.bookings.build_booking_request(draft, self.has_selected_over6)
                )
            except ExternalAPIError as e:
                await self._handle_failure(e, draft)
                return

        log_event(
            "booking_created",
            {"booking_id": booking.website_booking_id},
            session_id=self.session_id,
        )
        await self._remember(booking)
        self._transition(PhoneEnrichment(booking=booking))

    # ------------------------------------------------------------------
    # Step 3: optional phone and country
    # ------------------------------------------------------------------
    async def submit_phone(self, phone: str = "", country_id: str = "") -> None:
        """Attach phone and/or country to the new booking, then finish."""
        state = self._expect(PhoneEnrichment)
        self._reset_feedback()
        digits = PhoneNumberParser.sanitize(phone)
        country = self.countries.find(country_id) if country_id else None

        errors = ValidationUtils.collect_errors(
            country=(False, "Invalid country selected") if country_id and country is None else (True, None),
            phone=ValidationUtils.validate_phone(digits, country),
        )
        if errors:
            self._reject(errors)

        changes: Dict[str, Any] = {}
        if digits and country:
            changes["customer_phone"] = PhoneNumberParser.with_dial_code(digits, country)
        if country:
            changes["country"] = country.name

        booking_id = state.booking.website_booking_id
        if changes:
            async with self._request():
                try:
                    await self.client.update_booking(booking_id, BookingUpdate(**changes))
                except ExternalAPIError as e:
                    self.error = handle_booking_error(e)
                    logger.error(f"Error updating booking {booking_id}: {e}")
                    return
            logger.info(f"booking {booking_id} updated with {', '.join(sorted(changes))}")

        self._transition(Finished(redirect_url=thank_you_url(booking_id)))

    def skip_phone(self) -> None:
        state = self._expect(PhoneEnrichment)
        self._transition(Finished(redirect_url=thank_you_url(state.booking.website_booking_id)))

    # ------------------------------------------------------------------
    # Step 4: existing booking for the email
    # ------------------------------------------------------------------
    async def reschedule_existing(self) -> None:
        """
        Cancel the existing booking and book the draft instead.

        The cancel is not undone if the create then fails; that case is
        logged and recorded as ``reschedule_orphaned``.
        """
        state = self._expect(DuplicateFound)
        self._reset_feedback()
        existing, draft = state.existing, state.draft
        new_date = TimeFormatter.format_for_api(draft.date)
        cancelled = False

        async with self._request():
            try:
                await self.client.cancel_booking(
                    existing.booking_code, f"Rescheduled to {new_date} at {draft.time}"
                )
                cancelled = True
                booking = await self.bookings.create_booking(
                    self.bookings.build_booking_request(
                        draft,
                        self.has_selected_over6,
                        notes=f"Rescheduled from {existing.date} at {existing.time}",
                        customer_phone=existing.customer_phone or draft.phone,
                    )
                )
            except ExternalAPIError as e:
                if cancelled:
                    logger.error(
                        f"[{self.session_id}] booking {existing.booking_code} was cancelled "
                        f"but the replacement could not be created: {e}"
                    )
                    log_event(
                        "reschedule_orphaned",
                        {"cancelled_booking": existing.booking_code, "error": str(e)},
                        session_id=self.session_id,
                    )
                await self._handle_failure(e, draft)
                return

            if existing.country and not booking.country:
                try:
                    await self.client.update_booking(
                        booking.website_booking_id, BookingUpdate(country=existing.country)
                    )
                except ExternalAPIError as e:
                    logger.warning(
                        f"Could not copy country to booking {booking.website_booking_id}: {e}"
                    )

        log_event(
            "booking_rescheduled",
            {"from": existing.booking_code, "to": booking.website_booking_id},
            session_id=self.session_id,
        )
        await self._remember(booking)
        self._transition(Finished(redirect_url=thank_you_url(booking.website_booking_id)))

    def view_existing(self) -> None:
        state = self._expect(DuplicateFound)
        self._transition(Finished(redirect_url=view_booking_url(state.existing.booking_code)))

    # ------------------------------------------------------------------
    # Steps 5-7: private tour
    # ------------------------------------------------------------------
    def increment_private_guests(self) -> None:
        state = self._expect(PrivateTourGuests)
        guests = EntryPoint.PRIVATE_TOUR.clamp(state.guests + 1)
        if guests > GROUP_TOUR_MAX_GUESTS:
            self.has_selected_over6 = True
        self.state = replace(state, guests=guests)

    def decrement_private_guests(self) -> None:
        state = self._expect(PrivateTourGuests)
        self.state = replace(state, guests=EntryPoint.PRIVATE_TOUR.clamp(state.guests - 1))

    @property
    def private_price(self) -> Optional[PrivateTourPrice]:
        state = self.state
        if isinstance(state, (PrivateTourGuests, PrivateTourContact)):
            return calculate_private_tour_price(state.guests)
        return None

    def continue_private(self) -> None:
        state = self._expect(PrivateTourGuests)
        self._transition(
            PrivateTourContact(guests=state.guests, preferred_date=state.preferred_date)
        )

    async def submit_private_tour(
        self, name: str, email: str, country_id: str, phone: str
    ) -> None:
        """Send the private tour request; a rejected request still completes the flow."""
        state = self._expect(PrivateTourContact)
        self._reset_feedback()
        try:
            request = self.private_tours.build_request(
                name=name,
                email=email,
                phone=phone,
                country=self.countries.find(country_id),
                guests=state.guests,
                preferred_date=state.preferred_date,
            )
        except BookingValidationError as e:
            self.field_errors = e.field_errors
            raise

        async with self._request():
            accepted = await self.private_tours.submit_quietly(request)
        self._transition(PrivateTourSubmitted(request=request, accepted=accepted))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def back(self) -> None:
        state = self.state
        self._reset_feedback()
        if isinstance(state, DateSelection):
            if state.date is None:
                raise InvalidTransitionError("Already at the first step")
            self.clear_date()
        elif isinstance(state, ContactForm):
            draft = state.draft
            self._transition(
                DateSelection(date=draft.date, guests=draft.num_guests, slots_shown=True)
            )
        elif isinstance(state, DuplicateFound):
            self._transition(ContactForm(draft=state.draft))
        elif isinstance(state, PrivateTourGuests):
            self._transition(
                DateSelection(
                    date=state.preferred_date,
                    guests=self.entry_point.clamp(state.guests),
                )
            )
        elif isinstance(state, PrivateTourContact):
            self._transition(
                PrivateTourGuests(guests=state.guests, preferred_date=state.preferred_date)
            )
        else:
            raise InvalidTransitionError(
                f"Going back is not possible from {type(state).__name__}"
            )

    def close(self) -> None:
        """Close the wizard; any pending result is abandoned."""
        self._date_generation += 1
        self.availability = []
        self._transition(Finished(redirect_url=None))

    # ------------------------------------------------------------------
    # Derived view data
    # ------------------------------------------------------------------
    @property
    def progress(self) -> int:
        """Progress bar percentage for the current step."""
        state = self.state
        if isinstance(state, DateSelection):
            if state.date is None:
                return 0
            if state.guests == 1 and not state.slots_shown:
                return 25
            if not state.slots_shown:
                return 50
            return 75
        return {
            ContactForm: 85,
            PhoneEnrichment: 95,
            DuplicateFound: 90,
            PrivateTourGuests: 30,
            PrivateTourContact: 70,
            PrivateTourSubmitted: 100,
            Finished: 100,
        }[type(state)]

    @property
    def show_big_group_warning(self) -> bool:
        """Group tour note for visitors who asked for more than six and went back down."""
        guests = getattr(self.state, "guests", None)
        return self.has_selected_over6 and guests is not None and guests <= GROUP_TOUR_MAX_GUESTS

    @property
    def show_private_tour_hint(self) -> bool:
        state = self.state
        return isinstance(state, DateSelection) and state.guests > GROUP_TOUR_MAX_GUESTS

    @property
    def quick_dates(self) -> List[QuickDateOption]:
        selected = self.state.date if isinstance(self.state, DateSelection) else None
        return self.bookings.quick_date_options(
            self.today_availability, selected, self.is_loading_initial
        )

    @property
    def is_finished(self) -> bool:
        return isinstance(self.state, (Finished, PrivateTourSubmitted))

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the wizard for the web layer."""
        state = self.state
        data: Dict[str, Any] = {
            "session_id": self.session_id,
            "entry_point": self.entry_point.value,
            "step": int(state.step),
            "state": type(state).__name__,
            "progress": self.progress,
            "pending": self.pending,
            "has_selected_over6": self.has_selected_over6,
            "show_big_group_warning": self.show_big_group_warning,
            "error": self.error.model_dump(mode="json") if self.error else None,
            "field_errors": dict(self.field_errors),
            **state.payload(),
        }

        if isinstance(state, DateSelection):
            data["show_private_tour_hint"] = self.show_private_tour_hint
            data["quick_dates"] = [option.model_dump(mode="json") for option in self.quick_dates]
            data["slots"] = [
                {**slot.model_dump(), "display_time": TimeFormatter.to_12_hour(slot.hhmm)}
                for slot in self.offered_slots
            ]
        elif isinstance(state, PrivateTourSubmitted):
            data["accepted"] = state.accepted

        price = self.private_price
        if price is not None:
            data["price"] = price.display()
        return data
