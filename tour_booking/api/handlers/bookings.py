"""
Endpoints for existing bookings: view, reschedule, contact edits, cancel.
"""

from datetime import date as Date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from ...core.models import AvailabilitySlot, Booking
from ...services.booking import BookingManager


class RescheduleRequest(BaseModel):
    date: Date
    time: str
    guests: int


class ContactUpdateRequest(BaseModel):
    field: str
    value: str
    country_id: Optional[str] = None


class CancelRequest(BaseModel):
    reason: Optional[str] = None


class RescheduleResponse(BaseModel):
    changed: bool
    booking: Booking


class BookingsHandler:
    """Handler for the booking management pages."""

    def __init__(self, manager: BookingManager):
        self.manager = manager
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup booking routes."""

        @self.router.get("/availability", response_model=List[AvailabilitySlot])
        async def availability(date: Date):
            """Tour availability for the reschedule picker."""
            return await self.manager.available_tours(date)

        @self.router.get("/confirmation", response_model=Booking)
        async def confirmation(booking_id: Optional[str] = None, client_id: Optional[str] = None):
            """Booking shown on the thank-you page."""
            booking = await self.manager.confirmation(booking_id, client_id)
            if booking is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
            return booking

        @self.router.get("/{booking_id}", response_model=Booking)
        async def get_booking(booking_id: str):
            return await self.manager.load(booking_id)

        @self.router.post("/{booking_id}/reschedule", response_model=RescheduleResponse)
        async def reschedule(booking_id: str, body: RescheduleRequest):
            booking = await self.manager.load(booking_id)
            updated = await self.manager.reschedule(booking, body.date, body.time, body.guests)
            if updated is None:
                return RescheduleResponse(changed=False, booking=booking)
            return RescheduleResponse(changed=True, booking=updated)

        @self.router.post("/{booking_id}/contact", response_model=Booking)
        async def update_contact(booking_id: str, body: ContactUpdateRequest):
            booking = await self.manager.load(booking_id)
            return await self.manager.update_contact(
                booking, body.field, body.value, body.country_id
            )

        @self.router.post("/{booking_id}/cancel", response_model=Booking)
        async def cancel(booking_id: str, body: Optional[CancelRequest] = None):
            reason = body.reason if body else None
            return await self.manager.cancel(booking_id, reason)
