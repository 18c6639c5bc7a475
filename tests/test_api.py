"""
Tests for the HTTP surface.
"""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from tour_booking.api.app import create_app
from tour_booking.api.errors import register_exception_handlers
from tour_booking.api.handlers import HealthHandler, WizardHandler
from tour_booking.config import Settings
from tour_booking.core.exceptions import BookingAPIError, BookingNotFoundError
from tour_booking.services.memory import StateManager


@pytest.fixture
def app(mock_client, clock, tmp_path):
    return create_app(
        booking_client=mock_client,
        clock=clock,
        state_manager=StateManager(str(tmp_path / "state.db")),
    )


@pytest.fixture
def http(app):
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


async def _action(ac, session_id, action, **fields):
    return await ac.post(f"/wizard/{session_id}/actions", json={"action": action, **fields})


@pytest.mark.asyncio
async def test_health(http):
    async with http as ac:
        resp = await ac.get("/health/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.json()["venue_time"].startswith("2025-11-15T14:00:00")


@pytest.mark.asyncio
async def test_ready_degraded_without_key(clock):
    handler = HealthHandler(clock=clock, settings=Settings(booking_api_key=None))
    app = FastAPI()
    app.include_router(handler.router, prefix="/health")
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.get("/health/ready")
        assert resp.json()["status"] == "degraded"
        assert resp.json()["booking_api_key_set"] is False


class TestWizardEndpoints:
    """Driving a wizard session over HTTP."""

    @pytest.mark.asyncio
    async def test_full_booking_flow(self, http, mock_client):
        async with http as ac:
            resp = await ac.post("/wizard", json={"client_id": "browser-1"})
            assert resp.status_code == 201
            data = resp.json()
            session_id = data["session_id"]
            assert data["step"] == 1
            assert data["progress"] == 0

            resp = await _action(ac, session_id, "select_date", date="2025-11-16")
            assert resp.json()["progress"] == 25

            resp = await _action(ac, session_id, "continue_from_guests")
            assert resp.json()["slots"][0]["display_time"] == "10:00 AM"

            resp = await _action(ac, session_id, "select_time", time="10:00 AM")
            assert resp.json()["state"] == "ContactForm"

            resp = await _action(
                ac, session_id, "submit_contact", name="Anna", email="anna@example.com"
            )
            assert resp.json()["state"] == "PhoneEnrichment"

            resp = await _action(ac, session_id, "submit_phone", phone="612345678", country_id="nl")
            data = resp.json()
            assert data["state"] == "Finished"
            assert data["redirect_url"] == "/thank-you?bookingId=WB-1001"

            resp = await ac.get("/bookings/confirmation", params={"client_id": "browser-1"})
            assert resp.status_code == 200
            assert resp.json()["website_booking_id"] == "WB-1001"

        mock_client.create_booking.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_validation_error_is_422(self, http):
        async with http as ac:
            session_id = (await ac.post("/wizard")).json()["session_id"]
            await _action(ac, session_id, "select_date", date="2025-11-16")
            await _action(ac, session_id, "continue_from_guests")
            await _action(ac, session_id, "select_time", time="10:00")

            resp = await _action(ac, session_id, "submit_contact", name="Anna", email="@x.com")

            assert resp.status_code == 422
            assert resp.json()["field_errors"] == {"email": "Please enter a valid email address"}

    @pytest.mark.asyncio
    async def test_wrong_step_is_409(self, http):
        async with http as ac:
            session_id = (await ac.post("/wizard")).json()["session_id"]
            resp = await _action(ac, session_id, "skip_phone")
            assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_unavailable_slot_is_409(self, http):
        async with http as ac:
            session_id = (await ac.post("/wizard")).json()["session_id"]
            await _action(ac, session_id, "select_date", date="2025-11-16")
            await _action(ac, session_id, "continue_from_guests")
            resp = await _action(ac, session_id, "select_time", time="18:00")
            assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_missing_date_is_422(self, http):
        async with http as ac:
            session_id = (await ac.post("/wizard")).json()["session_id"]
            resp = await _action(ac, session_id, "select_date")
            assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_action_and_session(self, http):
        async with http as ac:
            session_id = (await ac.post("/wizard")).json()["session_id"]
            assert (await _action(ac, session_id, "teleport")).status_code == 422
            assert (await ac.get("/wizard/nope")).status_code == 404

    @pytest.mark.asyncio
    async def test_close_session(self, http):
        async with http as ac:
            session_id = (await ac.post("/wizard", json={"entry_point": "sidebar"})).json()["session_id"]
            resp = await ac.delete(f"/wizard/{session_id}")
            assert resp.json() == {"closed": True}
            assert (await ac.get(f"/wizard/{session_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_finished_session_is_dropped(self, http):
        async with http as ac:
            session_id = (await ac.post("/wizard")).json()["session_id"]
            resp = await _action(ac, session_id, "close")
            assert resp.json()["state"] == "Finished"
            assert (await ac.get(f"/wizard/{session_id}")).status_code == 404


class TestWizardSessionExpiry:
    """Sessions left alone past the idle limit are dropped."""

    @pytest.fixture
    def now(self):
        return {"value": 0.0}

    @pytest.fixture
    def handler(self, mock_client, clock, now):
        return WizardHandler(mock_client, clock=clock, idle_seconds=60, monotonic=lambda: now["value"])

    @pytest.fixture
    def expiring_http(self, handler):
        app = FastAPI()
        register_exception_handlers(app)
        app.include_router(handler.router, prefix="/wizard")
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    @pytest.mark.asyncio
    async def test_idle_session_dropped_on_next_request(self, expiring_http, handler, now):
        async with expiring_http as ac:
            idle_id = (await ac.post("/wizard")).json()["session_id"]
            now["value"] = 61.0
            active_id = (await ac.post("/wizard")).json()["session_id"]

            assert list(handler.sessions) == [active_id]
            assert (await ac.get(f"/wizard/{idle_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_activity_keeps_session_alive(self, expiring_http, handler, now):
        async with expiring_http as ac:
            session_id = (await ac.post("/wizard")).json()["session_id"]
            now["value"] = 50.0
            await _action(ac, session_id, "select_date", date="2025-11-16")
            now["value"] = 100.0
            resp = await ac.get(f"/wizard/{session_id}")
            assert resp.status_code == 200
            assert resp.json()["date"] == "2025-11-16"


class TestBookingEndpoints:
    """Booking management routes."""

    @pytest.mark.asyncio
    async def test_get_booking(self, http):
        async with http as ac:
            resp = await ac.get("/bookings/WB-1001")
            assert resp.status_code == 200
            assert resp.json()["customer_name"] == "Anna de Vries"

    @pytest.mark.asyncio
    async def test_unknown_booking_is_404(self, http, mock_client):
        mock_client.get_booking.side_effect = BookingNotFoundError("Booking not found", 404)
        async with http as ac:
            resp = await ac.get("/bookings/WB-404")
            assert resp.status_code == 404
            assert resp.json()["detail"] == "Booking not found. Please check your booking ID."

    @pytest.mark.asyncio
    async def test_backend_failure_is_502(self, http, mock_client):
        mock_client.check_availability.side_effect = BookingAPIError("Internal server error", 500)
        async with http as ac:
            resp = await ac.get("/bookings/availability", params={"date": "2025-11-16"})
            assert resp.status_code == 502

    @pytest.mark.asyncio
    async def test_unchanged_reschedule(self, http, mock_client):
        async with http as ac:
            resp = await ac.post(
                "/bookings/WB-1001/reschedule",
                json={"date": "2025-11-16", "time": "10:00", "guests": 2},
            )
            assert resp.status_code == 200
            assert resp.json()["changed"] is False
        mock_client.update_booking.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancel_already_cancelled_is_409(self, http, mock_client, booking_factory):
        mock_client.get_booking.return_value = booking_factory(status="cancelled")
        async with http as ac:
            resp = await ac.post("/bookings/WB-1001/cancel", json={})
            assert resp.status_code == 409
        mock_client.cancel_booking.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_contact(self, http, mock_client):
        async with http as ac:
            resp = await ac.post(
                "/bookings/WB-1001/contact",
                json={"field": "phone", "value": "6 12345678", "country_id": "nl"},
            )
            assert resp.status_code == 200
        update = mock_client.update_booking.await_args.args[1]
        assert update.customer_phone == "+31612345678"


class TestPrivateTourAndCatalog:

    @pytest.mark.asyncio
    async def test_form_defaults_from_query(self, http):
        async with http as ac:
            resp = await ac.get("/private-tours/form", params={"guests": "8"})
            assert resp.json()["guests"] == 8
            assert resp.json()["has_selected_over6"] is True

            resp = await ac.get("/private-tours/form", params={"guests": "99"})
            assert resp.json()["guests"] == 4

    @pytest.mark.asyncio
    async def test_price(self, http):
        async with http as ac:
            resp = await ac.get("/private-tours/price", params={"guests": 12})
            assert resp.json() == {"guests": 12, "per_person": "24.95", "total": "299.40"}
            assert (await ac.get("/private-tours/price", params={"guests": 0})).status_code == 422

    @pytest.mark.asyncio
    async def test_submit_private_tour(self, http, mock_client):
        async with http as ac:
            resp = await ac.post("/private-tours", json={
                "name": "Anna",
                "email": "anna@example.com",
                "phone": "612345678",
                "country_id": "nl",
                "guests": 8,
                "preferred_date": "2025-11-20",
            })
            assert resp.status_code == 201
            assert resp.json()["request_id"] == "PT-1"

    @pytest.mark.asyncio
    async def test_country_search(self, http):
        async with http as ac:
            resp = await ac.get("/catalog/countries", params={"q": "the"})
            assert [c["id"] for c in resp.json()] == ["nl"]
            resp = await ac.get("/catalog/countries")
            assert len(resp.json()) > 40

    @pytest.mark.asyncio
    async def test_tour_times(self, http):
        async with http as ac:
            resp = await ac.get("/catalog/tour-times")
            assert resp.json()[1]["tour_title"] == "🌆 Afternoon Tour"
