"""
Liveness and readiness of the booking service.
"""

import time
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ...config import ExternalAPIConfig, Settings, get_settings
from ...utils.date import VenueClock


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    venue_time: str
    uptime_seconds: float


class ReadinessResponse(BaseModel):
    status: str
    booking_api: str
    booking_api_key_set: bool


class HealthHandler:
    """Reports process uptime and the venue clock the wizard books against."""

    def __init__(self, clock: Optional[VenueClock] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.clock = clock or VenueClock(self.settings.venue_timezone)
        self.started = time.monotonic()
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup health routes."""

        @self.router.get("/", response_model=HealthResponse)
        async def health():
            return HealthResponse(
                status="healthy",
                service=self.settings.app_name,
                version=self.settings.app_version,
                venue_time=self.clock.now().isoformat(),
                uptime_seconds=round(time.monotonic() - self.started, 3),
            )

        @self.router.get("/ready", response_model=ReadinessResponse)
        async def ready():
            """Degraded while no backend key is configured."""
            config = ExternalAPIConfig.from_settings(self.settings)
            return ReadinessResponse(
                status="ready" if config.is_booking_api_configured() else "degraded",
                booking_api=config.booking_base_url,
                booking_api_key_set=config.booking_api_key is not None,
            )
