"""
Pytest configuration and fixtures.
"""

import pytest
from datetime import datetime
from unittest.mock import Mock, AsyncMock
from tour_booking.core.models import (
    AvailabilitySlot,
    Booking,
    CancellationResult,
    ExistingBooking,
    PrivateTourResponse,
    TourTime,
)
from tour_booking.services.external import BookingAPIClient
from tour_booking.utils.date import VenueClock
from tour_booking.utils.event_log import set_log_path


# Saturday 15 Nov 2025, 14:00 in Amsterdam
FIXED_NOW = datetime(2025, 11, 15, 14, 0)


def make_booking(**overrides) -> Booking:
    data = {
        "id": "uuid-1",
        "website_booking_id": "WB-1001",
        "customer_name": "Anna de Vries",
        "customer_email": "anna@example.com",
        "customer_phone": "",
        "country": None,
        "tour_date": "2025-11-16",
        "tour_time": "10:00",
        "tour_title": "🏆 Amsterdam Original Tour",
        "num_people": 2,
        "status": "scheduled",
    }
    data.update(overrides)
    return Booking(**data)


def make_slot(tour_time: str, available_spots: int = 10, is_available: bool = True) -> AvailabilitySlot:
    return AvailabilitySlot(
        tour_time=tour_time,
        tour_title="🏆 Amsterdam Original Tour",
        total_booked=15 - available_spots,
        available_spots=available_spots,
        is_available=is_available,
    )


@pytest.fixture(autouse=True)
def event_log_file(tmp_path):
    """Send the event log of every test to a temporary file."""
    path = tmp_path / "events.jsonl"
    set_log_path(path)
    return path


@pytest.fixture
def clock():
    """Venue clock frozen at Saturday 14:00."""
    return VenueClock("Europe/Amsterdam", now=lambda: FIXED_NOW)


@pytest.fixture
def slots():
    """Availability for one day: 14:20 is too close to now, 16:00 has two spots left."""
    return [
        make_slot("10:00:00", 10),
        make_slot("14:20:00", 10),
        make_slot("15:00:00", 8),
        make_slot("16:00:00", 2),
        make_slot("18:00:00", 0, is_available=False),
    ]


@pytest.fixture
def mock_client(slots):
    """Mock booking API client."""
    api = Mock(spec=BookingAPIClient)
    api.list_tour_times = AsyncMock(return_value=[
        TourTime(tour_time="10:00:00", tour_title="🏆 Amsterdam Original Tour"),
        TourTime(tour_time="15:00:00", tour_title="🌆 Afternoon Tour"),
    ])
    api.check_availability = AsyncMock(return_value=slots)
    api.create_booking = AsyncMock(return_value=make_booking())
    api.get_booking = AsyncMock(return_value=make_booking())
    api.update_booking = AsyncMock(return_value=make_booking())
    api.cancel_booking = AsyncMock(return_value=CancellationResult(success=True, message="Booking cancelled"))
    api.check_booking_exists = AsyncMock(return_value=False)
    api.get_booking_by_email = AsyncMock(return_value=None)
    api.submit_private_tour_request = AsyncMock(return_value=PrivateTourResponse(request_id="PT-1"))
    api.list_images = AsyncMock(return_value=[])
    return api


@pytest.fixture
def existing_booking():
    """Scheduled booking already held under the visitor's email."""
    return ExistingBooking(
        date="2025-11-20",
        time="10:00",
        persons=2,
        booking_code="WB-0999",
        customer_phone="+31612345678",
        customer_name="Anna de Vries",
        customer_email="anna@example.com",
        country="Netherlands",
    )


@pytest.fixture
def booking_factory():
    """Build bookings with selected fields overridden."""
    return make_booking


@pytest.fixture
def slot_factory():
    return make_slot
