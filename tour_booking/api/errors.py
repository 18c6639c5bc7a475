"""
Mapping of booking exceptions to HTTP responses.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    BookingAlreadyCancelledError,
    BookingNotFoundError,
    BookingValidationError,
    ExternalAPIError,
    InvalidTransitionError,
    PrivateTourRequestError,
    RequestInFlightError,
    SlotUnavailableError,
)
from ..services.booking import handle_booking_error
from ..utils.logging import get_logger

logger = get_logger("tours.api")


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers turning domain errors into JSON error responses."""

    @app.exception_handler(BookingValidationError)
    async def validation_error(request: Request, exc: BookingValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "field_errors": exc.field_errors},
        )

    @app.exception_handler(SlotUnavailableError)
    @app.exception_handler(InvalidTransitionError)
    @app.exception_handler(RequestInFlightError)
    @app.exception_handler(BookingAlreadyCancelledError)
    async def conflict(request: Request, exc: Exception):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc)},
        )

    @app.exception_handler(BookingNotFoundError)
    async def not_found(request: Request, exc: BookingNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": handle_booking_error(exc).user_message},
        )

    @app.exception_handler(PrivateTourRequestError)
    async def private_tour_rejected(request: Request, exc: PrivateTourRequestError):
        logger.error(f"private tour request rejected: {exc.message} ({exc.reason})")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.message, "reason": exc.reason},
        )

    @app.exception_handler(ExternalAPIError)
    async def backend_failure(request: Request, exc: ExternalAPIError):
        handled = handle_booking_error(exc)
        logger.error(f"{request.method} {request.url.path}: backend failure: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": handled.user_message, "type": handled.type.value},
        )
