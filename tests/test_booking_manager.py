"""
Tests for managing existing bookings.
"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, Mock

from tour_booking.core.exceptions import (
    BookingAlreadyCancelledError,
    BookingNotFoundError,
    BookingValidationError,
)
from tour_booking.services.booking import BookingManager


@pytest.fixture
def manager(mock_client, clock):
    return BookingManager(mock_client, clock=clock)


class TestReschedule:
    """Moving a booking to another date, time or party size."""

    @pytest.mark.asyncio
    async def test_unchanged_schedule_makes_no_call(self, manager, mock_client, booking_factory):
        booking = booking_factory(tour_date="2025-11-16", tour_time="10:00:00", num_people=2)
        assert await manager.reschedule(booking, date(2025, 11, 16), "10:00 AM", 2) is None
        mock_client.update_booking.assert_not_called()

    @pytest.mark.asyncio
    async def test_new_time_updates_and_refetches(self, manager, mock_client, booking_factory):
        booking = booking_factory()
        mock_client.get_booking.return_value = booking_factory(tour_time="15:00")

        updated = await manager.reschedule(booking, date(2025, 11, 16), "3:00 PM", 2)

        booking_id, update = mock_client.update_booking.await_args.args
        assert booking_id == "WB-1001"
        assert update.tour_date == "2025-11-16"
        assert update.tour_time == "15:00"
        assert update.num_people == 2
        mock_client.get_booking.assert_awaited_once_with("WB-1001")
        assert updated.tour_time == "15:00"

    @pytest.mark.asyncio
    async def test_past_date_rejected(self, manager, booking_factory):
        with pytest.raises(BookingValidationError) as exc_info:
            await manager.reschedule(booking_factory(), date(2025, 11, 1), "10:00", 2)
        assert "date" in exc_info.value.field_errors

    @pytest.mark.asyncio
    async def test_cancelled_booking_cannot_move(self, manager, booking_factory):
        with pytest.raises(BookingAlreadyCancelledError):
            await manager.reschedule(
                booking_factory(status="cancelled"), date(2025, 11, 20), "10:00", 2
            )


class TestUpdateContact:
    """Editing a single contact detail."""

    @pytest.mark.asyncio
    async def test_update_name(self, manager, mock_client, booking_factory):
        await manager.update_contact(booking_factory(), "name", "  Anna Jansen ")
        update = mock_client.update_booking.await_args.args[1]
        assert update.customer_name == "Anna Jansen"
        mock_client.get_booking.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_phone_with_country(self, manager, mock_client, booking_factory):
        await manager.update_contact(booking_factory(), "phone", "7400 123456", "gb")
        update = mock_client.update_booking.await_args.args[1]
        assert update.customer_phone == "+447400123456"
        assert update.country == "United Kingdom"

    @pytest.mark.asyncio
    async def test_invalid_email(self, manager, mock_client, booking_factory):
        with pytest.raises(BookingValidationError):
            await manager.update_contact(booking_factory(), "email", "anna@")
        mock_client.update_booking.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_value(self, manager, booking_factory):
        with pytest.raises(BookingValidationError):
            await manager.update_contact(booking_factory(), "name", "   ")

    @pytest.mark.asyncio
    async def test_unknown_field(self, manager, booking_factory):
        with pytest.raises(BookingValidationError):
            await manager.update_contact(booking_factory(), "tour_date", "2025-11-20")


class TestCancel:

    @pytest.mark.asyncio
    async def test_cancel_with_default_reason(self, manager, mock_client, booking_factory):
        mock_client.get_booking.side_effect = [
            booking_factory(),
            booking_factory(status="cancelled"),
        ]

        booking = await manager.cancel(" WB-1001 ")

        mock_client.cancel_booking.assert_awaited_once_with(
            "WB-1001", "Customer requested cancellation"
        )
        assert booking.is_cancelled

    @pytest.mark.asyncio
    async def test_already_cancelled_makes_no_call(self, manager, mock_client, booking_factory):
        mock_client.get_booking.return_value = booking_factory(status="cancelled")
        with pytest.raises(BookingAlreadyCancelledError):
            await manager.cancel("WB-1001", "Plans changed")
        mock_client.cancel_booking.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_booking(self, manager, mock_client):
        mock_client.get_booking.side_effect = BookingNotFoundError("Booking not found", 404)
        with pytest.raises(BookingNotFoundError):
            await manager.cancel("WB-404")


class TestConfirmation:
    """Thank-you page lookups."""

    @pytest.mark.asyncio
    async def test_by_booking_id(self, manager, mock_client):
        booking = await manager.confirmation("WB-1001")
        assert booking.website_booking_id == "WB-1001"

    @pytest.mark.asyncio
    async def test_falls_back_to_remembered_booking(self, mock_client, clock):
        state_manager = Mock()
        state_manager.get_last_booking = AsyncMock(return_value="WB-1001")
        manager = BookingManager(mock_client, clock=clock, state_manager=state_manager)

        booking = await manager.confirmation(None, "browser-1")

        state_manager.get_last_booking.assert_awaited_once_with("browser-1")
        mock_client.get_booking.assert_awaited_once_with("WB-1001")
        assert booking is not None

    @pytest.mark.asyncio
    async def test_nothing_to_show(self, manager, mock_client):
        assert await manager.confirmation(None, None) is None
        mock_client.get_booking.assert_not_called()

    @pytest.mark.asyncio
    async def test_lookup_failure_yields_none(self, manager, mock_client):
        mock_client.get_booking.side_effect = BookingNotFoundError("Booking not found", 404)
        assert await manager.confirmation("WB-404") is None


@pytest.mark.asyncio
async def test_load_requires_id(manager):
    with pytest.raises(BookingValidationError):
        await manager.load("  ")
