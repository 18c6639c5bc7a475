"""
FastAPI application factory and configuration.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import get_settings
from ..services.booking import BookingManager, countries
from ..services.external import BookingAPIClient
from ..services.memory import StateManager
from ..services.private_tour import PrivateTourService
from ..utils.date import VenueClock
from .errors import register_exception_handlers
from .middleware import SecurityHeaders, LoggingMiddleware
from .handlers import (
    BookingsHandler,
    CatalogHandler,
    HealthHandler,
    PrivateToursHandler,
    WizardHandler,
)


def create_app(
    booking_client: Optional[BookingAPIClient] = None,
    clock: Optional[VenueClock] = None,
    state_manager: Optional[StateManager] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Booking funnel for the Amsterdam walking tours",
        version=settings.app_version,
        debug=settings.debug,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    # Shared services
    client = booking_client or BookingAPIClient()
    state_manager = state_manager or StateManager()
    manager = BookingManager(client, clock=clock, state_manager=state_manager)

    # Initialize handlers
    health_handler = HealthHandler(clock=clock, settings=settings)
    wizard_handler = WizardHandler(client, clock=clock, state_manager=state_manager)
    bookings_handler = BookingsHandler(manager)
    private_tours_handler = PrivateToursHandler(PrivateTourService(client), countries)
    catalog_handler = CatalogHandler(client, countries)

    # Register routes
    app.include_router(health_handler.router, prefix="/health", tags=["health"])
    app.include_router(wizard_handler.router, prefix="/wizard", tags=["wizard"])
    app.include_router(bookings_handler.router, prefix="/bookings", tags=["bookings"])
    app.include_router(private_tours_handler.router, prefix="/private-tours", tags=["private-tours"])
    app.include_router(catalog_handler.router, prefix="/catalog", tags=["catalog"])

    return app
