"""
Booking wizard session endpoints.
"""

import inspect
import time
from datetime import date as Date
from typing import Callable, Dict, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from ...config import get_settings
from ...core.enums import EntryPoint
from ...core.exceptions import BookingValidationError
from ...services.booking import BookingWizard
from ...services.external import BookingAPIClient
from ...services.memory import StateManager
from ...utils.date import VenueClock
from ...utils.event_log import set_session_id
from ...utils.logging import get_logger

logger = get_logger("tours.api.wizard")

# action -> (wizard method, request fields passed as arguments)
ACTIONS = {
    "select_date": ("select_date", ("date",)),
    "clear_date": ("clear_date", ()),
    "increment_guests": ("increment_guests", ()),
    "decrement_guests": ("decrement_guests", ()),
    "continue_from_guests": ("continue_from_guests", ()),
    "edit_guests": ("edit_guests", ()),
    "try_fewer_guests": ("try_fewer_guests", ()),
    "select_time": ("select_time", ("time",)),
    "submit_contact": ("submit_contact", ("name", "email", "phone")),
    "submit_phone": ("submit_phone", ("phone", "country_id")),
    "skip_phone": ("skip_phone", ()),
    "reschedule_existing": ("reschedule_existing", ()),
    "view_existing": ("view_existing", ()),
    "increment_private_guests": ("increment_private_guests", ()),
    "decrement_private_guests": ("decrement_private_guests", ()),
    "continue_private": ("continue_private", ()),
    "submit_private_tour": ("submit_private_tour", ("name", "email", "country_id", "phone")),
    "back": ("back", ()),
    "close": ("close", ()),
}

# Arguments that must be present for the action to make sense
REQUIRED_FIELDS = {"date", "time"}


class StartWizardRequest(BaseModel):
    entry_point: EntryPoint = EntryPoint.DRAWER
    client_id: Optional[str] = None


class WizardActionRequest(BaseModel):
    action: str
    date: Optional[Date] = None
    time: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: str = ""
    country_id: str = ""


class WizardHandler:
    """
    Keeps wizard sessions in memory and forwards actions to them.

    A session is dropped once it has returned its finished state, or when it
    has not been touched for ``idle_seconds``.
    """

    def __init__(
        self,
        client: BookingAPIClient,
        clock: Optional[VenueClock] = None,
        state_manager: Optional[StateManager] = None,
        idle_seconds: Optional[int] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.clock = clock
        self.state_manager = state_manager
        self.idle_seconds = (
            idle_seconds if idle_seconds is not None else get_settings().wizard_idle_seconds
        )
        self._monotonic = monotonic
        self.sessions: Dict[str, BookingWizard] = {}
        self._last_seen: Dict[str, float] = {}
        self.router = APIRouter()
        self._setup_routes()

    def _evict_idle(self) -> None:
        cutoff = self._monotonic() - self.idle_seconds
        for session_id in [sid for sid, seen in self._last_seen.items() if seen < cutoff]:
            logger.info(f"wizard {session_id} dropped after {self.idle_seconds}s idle")
            self._drop(session_id)

    def _drop(self, session_id: str) -> None:
        self.sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    def _get(self, session_id: str) -> BookingWizard:
        self._evict_idle()
        wizard = self.sessions.get(session_id)
        if wizard is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown wizard session")
        self._last_seen[session_id] = self._monotonic()
        set_session_id(session_id)
        return wizard

    async def _dispatch(self, wizard: BookingWizard, body: WizardActionRequest) -> None:
        if body.action not in ACTIONS:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Unknown action: {body.action}",
            )
        method_name, fields = ACTIONS[body.action]
        args = []
        for field in fields:
            value = getattr(body, field)
            if field in REQUIRED_FIELDS and value is None:
                raise BookingValidationError(
                    f"{field} is required", {field: f"Please select a {field}"}
                )
            args.append(value)

        result = getattr(wizard, method_name)(*args)
        if inspect.isawaitable(result):
            await result

    def _setup_routes(self):
        """Setup wizard routes."""

        @self.router.post("", status_code=status.HTTP_201_CREATED)
        async def start_wizard(body: Optional[StartWizardRequest] = None):
            """Open a new wizard and load the tour catalog."""
            body = body or StartWizardRequest()
            wizard = BookingWizard(
                self.client,
                clock=self.clock,
                state_manager=self.state_manager,
                client_id=body.client_id,
                entry_point=body.entry_point,
            )
            self._evict_idle()
            set_session_id(wizard.session_id)
            await wizard.start()
            self.sessions[wizard.session_id] = wizard
            self._last_seen[wizard.session_id] = self._monotonic()
            logger.info(f"wizard {wizard.session_id} opened from {body.entry_point.value}")
            return wizard.snapshot()

        @self.router.get("/{session_id}")
        async def get_wizard(session_id: str):
            return self._get(session_id).snapshot()

        @self.router.post("/{session_id}/actions")
        async def wizard_action(session_id: str, body: WizardActionRequest):
            """Apply one user action and return the resulting wizard state."""
            wizard = self._get(session_id)
            await self._dispatch(wizard, body)
            snapshot = wizard.snapshot()
            if wizard.is_finished:
                self._drop(session_id)
            return snapshot

        @self.router.delete("/{session_id}")
        async def close_wizard(session_id: str):
            self._get(session_id).close()
            self._drop(session_id)
            return {"closed": True}
