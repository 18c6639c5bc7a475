"""
Read-only catalog endpoints: tour times, images and countries.
"""

from typing import List

from fastapi import APIRouter

from ...core.enums import ImageCategory
from ...core.models import Country, TourImage, TourTime
from ...services.booking import CountryDirectory
from ...services.external import BookingAPIClient


class CatalogHandler:
    """Handler for catalog lookups."""

    def __init__(self, client: BookingAPIClient, countries: CountryDirectory):
        self.client = client
        self.countries = countries
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup catalog routes."""

        @self.router.get("/tour-times", response_model=List[TourTime])
        async def tour_times():
            return await self.client.list_tour_times()

        @self.router.get("/images/{category}", response_model=List[TourImage])
        async def images(category: ImageCategory):
            return await self.client.list_images(category)

        @self.router.get("/countries", response_model=List[Country])
        async def countries(q: str = ""):
            """All countries, or those matching the picker search ``q``."""
            if not q.strip():
                return self.countries.all()
            return self.countries.search(q)
