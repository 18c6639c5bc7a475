"""
Stand-alone private tour page endpoints.
"""

from datetime import date as Date
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from ...core.enums import GROUP_TOUR_MAX_GUESTS
from ...services.booking import CountryDirectory
from ...services.private_tour import PrivateTourService, calculate_private_tour_price


class PrivateTourForm(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    country_id: str = ""
    guests: int
    preferred_date: Optional[Date] = None
    has_selected_over6: bool = False


class PrivateToursHandler:
    """Handler for the private tour request page."""

    def __init__(self, service: PrivateTourService, countries: CountryDirectory):
        self.service = service
        self.countries = countries
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup private tour routes."""

        @self.router.get("/form")
        async def initial_form(guests: Optional[str] = None):
            """Initial guest count and over-six flag from the ``guests`` query parameter."""
            count = self.service.guests_from_query(guests)
            return {
                "guests": count,
                "has_selected_over6": count > GROUP_TOUR_MAX_GUESTS,
                "price": calculate_private_tour_price(count).display(),
            }

        @self.router.get("/price")
        async def price(guests: int):
            try:
                return calculate_private_tour_price(guests).display()
            except ValueError as e:
                raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

        @self.router.post("", status_code=status.HTTP_201_CREATED)
        async def submit(body: PrivateTourForm):
            """Validate and send a private tour request."""
            request = self.service.build_request(
                name=body.name,
                email=body.email,
                phone=body.phone,
                country=self.countries.find(body.country_id),
                guests=body.guests,
                preferred_date=body.preferred_date,
                has_selected_over6=body.has_selected_over6,
            )
            response = await self.service.submit(request)
            return {"request_id": response.request_id, "request": request.model_dump()}
