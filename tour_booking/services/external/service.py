"""
HTTP client for the booking backend.
"""

from typing import Any, Dict, List, Optional
import httpx
from pydantic import ValidationError

from ...config import ExternalAPIConfig
from ...core.enums import ImageCategory
from ...core.exceptions import (
    BookingAPIError,
    BookingNotFoundError,
    ExternalAPIError,
    NetworkError,
    PrivateTourRequestError,
)
from ...core.models import (
    AvailabilitySlot,
    Booking,
    BookingRequest,
    BookingUpdate,
    CancellationResult,
    ExistingBooking,
    PrivateTourRequest,
    PrivateTourResponse,
    TourImage,
    TourTime,
)
from ...utils.logging import get_logger

logger = get_logger("tours.client")


class BookingAPIClient:
    """Client for the booking REST endpoints and edge functions."""

    def __init__(
        self,
        config: Optional[ExternalAPIConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or ExternalAPIConfig.from_settings()
        self.timeout = self.config.timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Send one request; transport failures become :class:`NetworkError`."""
        try:
            async with self._client() as client:
                return await client.request(
                    method,
                    url,
                    json=json,
                    params=params,
                    headers=headers if headers is not None else self.config.get_headers(),
                )
        except httpx.TimeoutException:
            logger.error(f"{method} {url} timed out")
            raise NetworkError("Request timed out")
        except httpx.TransportError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise NetworkError(f"Request failed: {e}")

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {"data": payload}

    def _raise_for_error(self, response: httpx.Response, fallback: str) -> Dict[str, Any]:
        """Return the JSON body or raise with the backend's ``error`` message."""
        payload = self._json(response)
        if response.is_success:
            return payload

        message = payload.get("error") or fallback
        logger.error(f"backend HTTP {response.status_code}: {message}")
        if response.status_code == 404 or "not found" in message.lower():
            raise BookingNotFoundError(message, response.status_code)
        raise BookingAPIError(
            message,
            response.status_code,
            available_spots=payload.get("available_spots"),
        )

    @staticmethod
    def _booking(payload: Dict[str, Any]) -> Booking:
        booking = payload.get("booking")
        if not isinstance(booking, dict):
            raise BookingAPIError("Malformed booking response")
        return Booking(**booking)

    # ------------------------------------------------------------------
    async def list_tour_times(self) -> List[TourTime]:
        """Get the active tour times."""
        response = await self._request(
            "GET",
            self.config.get_rest_url("tour_times"),
            params={"active": "eq.true", "select": "tour_time,tour_title"},
        )
        if not response.is_success:
            raise ExternalAPIError("Failed to fetch tour times", response.status_code)
        return [TourTime(**item) for item in response.json()]

    async def check_availability(
        self, date: str, tour_time: Optional[str] = None
    ) -> List[AvailabilitySlot]:
        """Get remaining capacity per tour time for ``date`` (YYYY-MM-DD)."""
        response = await self._request(
            "POST",
            self.config.get_rest_url("rpc/get_tour_availability"),
            json={"p_date": date, "p_tour_time": tour_time},
        )
        if not response.is_success:
            raise ExternalAPIError("Failed to check availability", response.status_code)
        return [AvailabilitySlot(**item) for item in response.json()]

    async def create_booking(self, request: BookingRequest) -> Booking:
        """Create a booking; capacity problems come back as error messages."""
        response = await self._request(
            "POST",
            self.config.get_function_url("create-website-booking"),
            json=request.model_dump(exclude_none=True),
        )
        payload = self._raise_for_error(response, "Failed to create booking")
        return self._booking(payload)

    async def get_booking(self, website_booking_id: str) -> Booking:
        """Get a booking by its public id."""
        response = await self._request(
            "GET",
            self.config.get_function_url("get-website-booking"),
            params={"website_booking_id": website_booking_id},
        )
        payload = self._raise_for_error(response, "Failed to get booking details")
        return self._booking(payload)

    async def update_booking(self, website_booking_id: str, update: BookingUpdate) -> Booking:
        """Update contact details and/or schedule of a booking."""
        response = await self._request(
            "POST",
            self.config.get_function_url("update-website-booking"),
            json={"website_booking_id": website_booking_id, **update.model_dump(exclude_none=True)},
        )
        payload = self._raise_for_error(response, "Failed to update booking")
        return self._booking(payload)

    async def cancel_booking(
        self, website_booking_id: str, reason: Optional[str] = None
    ) -> CancellationResult:
        """Cancel a booking."""
        body: Dict[str, Any] = {"website_booking_id": website_booking_id}
        if reason is not None:
            body["reason"] = reason
        response = await self._request(
            "POST", self.config.get_function_url("cancel-booking"), json=body
        )
        payload = self._raise_for_error(response, "Failed to cancel booking")
        return CancellationResult(**payload)

    async def check_booking_exists(self, email: str) -> bool:
        """Fast check whether a scheduled booking exists for ``email``."""
        response = await self._request(
            "POST",
            self.config.get_lookup_function_url("check-booking-by-email"),
            json={"email": email},
            headers={"Content-Type": "application/json"},
        )
        if not response.is_success:
            raise ExternalAPIError("Failed to check booking existence", response.status_code)
        return bool(self._json(response).get("exists"))

    async def get_booking_by_email(self, email: str) -> Optional[ExistingBooking]:
        """Get the existing booking for ``email``; 404 means there is none."""
        response = await self._request(
            "POST",
            self.config.get_lookup_function_url("get-booking-by-email"),
            json={"email": email},
            headers={"Content-Type": "application/json"},
        )
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise ExternalAPIError("Failed to get booking details", response.status_code)

        payload = self._json(response)
        if not payload.get("success") or not payload.get("booking"):
            return None
        return ExistingBooking(**payload["booking"])

    async def submit_private_tour_request(
        self, request: PrivateTourRequest
    ) -> PrivateTourResponse:
        """Send a private tour request to its dedicated endpoint."""
        response = await self._request(
            "POST",
            self.config.private_tour_url,
            json=request.model_dump(exclude_none=True),
            headers={"Content-Type": "application/json"},
        )
        payload = self._json(response)
        if not response.is_success:
            raise PrivateTourRequestError(
                payload.get("error") or "Failed to submit private tour request",
                response.status_code,
                reason=payload.get("reason"),
            )
        try:
            return PrivateTourResponse(**payload)
        except ValidationError as e:
            logger.error(f"Malformed private tour response: {e}")
            raise PrivateTourRequestError(
                "Malformed private tour response", response.status_code
            )

    async def list_images(self, category: ImageCategory) -> List[TourImage]:
        """Get images of a category in display order; failures yield ``[]``."""
        try:
            response = await self._request(
                "GET",
                self.config.get_rest_url("tour_images"),
                params={
                    "select": "*",
                    "category": f"eq.{category.value}",
                    "order": "display_order.asc",
                },
            )
            if not response.is_success:
                raise ExternalAPIError("Failed to fetch images", response.status_code)
            return [TourImage(**item) for item in response.json() or []]
        except ExternalAPIError as e:
            logger.error(f"Error fetching images: {e}")
            return []
