"""
Private tour request handling for the wizard and the stand-alone page.
"""

from datetime import date
from typing import Optional

from ...core.enums import GROUP_TOUR_MAX_GUESTS, EntryPoint
from ...core.exceptions import BookingValidationError, ExternalAPIError
from ...core.models import Country, PrivateTourRequest, PrivateTourResponse
from ...utils.date import TimeFormatter
from ...utils.event_log import log_event
from ...utils.logging import get_logger
from ...utils.phone import PhoneNumberParser
from ...utils.validation import ValidationUtils
from ..external import BookingAPIClient

logger = get_logger("tours.private")

DEFAULT_GUESTS = 4


class PrivateTourService:
    """Builds, validates and submits private tour requests."""

    def __init__(self, client: BookingAPIClient):
        self.client = client

    @staticmethod
    def guests_from_query(param: Optional[str]) -> int:
        """
        Guest count from the ``guests`` query parameter.

        Values outside 1..30 or that are not numbers fall back to the default.
        """
        try:
            guests = int(param) if param is not None else DEFAULT_GUESTS
        except (TypeError, ValueError):
            return DEFAULT_GUESTS
        if guests < 1 or guests > EntryPoint.PRIVATE_TOUR.max_guests:
            return DEFAULT_GUESTS
        return guests

    @staticmethod
    def build_request(
        *,
        name: str,
        email: str,
        phone: str,
        country: Optional[Country],
        guests: int,
        preferred_date: Optional[date],
        has_selected_over6: Optional[bool] = None,
    ) -> PrivateTourRequest:
        """
        Validate the private tour form and build the request payload.

        ``potential_big_group`` is only sent when ``has_selected_over6`` is
        given; the wizard leaves it out.

        Raises:
            BookingValidationError: With one message per invalid field
        """
        digits = PhoneNumberParser.sanitize(phone)
        errors = ValidationUtils.collect_errors(
            date=(True, None) if preferred_date else (False, "Please select a date"),
            name=ValidationUtils.validate_name(name),
            email=ValidationUtils.validate_email(email),
            country=(True, None) if country else (False, "Invalid country selected"),
            phone=ValidationUtils.validate_phone(digits, country, required=True),
        )
        if errors:
            raise BookingValidationError("Please check your details", errors)

        return PrivateTourRequest(
            customer_name=name.strip(),
            customer_email=email.strip(),
            customer_phone=PhoneNumberParser.with_dial_code(digits, country),
            country=country.name,
            number_of_guests=guests,
            preferred_date=TimeFormatter.format_for_api(preferred_date),
            potential_big_group=(
                None
                if has_selected_over6 is None
                else has_selected_over6 and guests <= GROUP_TOUR_MAX_GUESTS
            ),
        )

    async def submit(self, request: PrivateTourRequest) -> PrivateTourResponse:
        """Send the request; failures raise ``PrivateTourRequestError``."""
        response = await self.client.submit_private_tour_request(request)
        logger.info(
            f"private tour request {response.request_id} for "
            f"{request.number_of_guests} guests on {request.preferred_date}"
        )
        log_event(
            "private_tour_requested",
            {"request_id": response.request_id, "guests": request.number_of_guests},
        )
        return response

    async def submit_quietly(self, request: PrivateTourRequest) -> bool:
        """Send the request, logging failures instead of raising them."""
        try:
            await self.submit(request)
        except ExternalAPIError as e:
            reason = getattr(e, "reason", None)
            logger.error(f"Private tour request failed ({reason}): {e.message}")
            log_event("private_tour_failed", {"reason": reason, "message": e.message})
            return False
        return True
