"""
External API configuration.
"""

from typing import Dict, Optional
from pydantic import BaseModel

from .settings import Settings, get_settings


class ExternalAPIConfig(BaseModel):
    """Endpoints and credentials for the booking backend."""

    booking_base_url: str = "https://ckgsdkifvijxxvjlhsaa.supabase.co"
    booking_api_key: Optional[str] = None
    lookup_base_url: str = "https://ckgsdkifvijxxvjlhsaa.supabase.co"
    private_tour_url: str = (
        "https://ckgsdkifvijxxvjlhsaa.supabase.co/functions/v1/create-private-tour-request"
    )
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ExternalAPIConfig":
        """Build the config from application settings."""
        settings = settings or get_settings()
        return cls(
            booking_base_url=settings.booking_api_base.rstrip("/"),
            booking_api_key=settings.booking_api_key,
            lookup_base_url=settings.booking_lookup_api_base.rstrip("/"),
            private_tour_url=settings.private_tour_api_url,
            timeout=settings.request_timeout,
        )

    def get_rest_url(self, path: str) -> str:
        """Get a database REST endpoint URL."""
        return f"{self.booking_base_url}/rest/v1/{path.lstrip('/')}"

    def get_function_url(self, name: str) -> str:
        """Get an edge function URL on the booking backend."""
        return f"{self.booking_base_url}/functions/v1/{name}"

    def get_lookup_function_url(self, name: str) -> str:
        """Get an edge function URL on the duplicate-lookup host."""
        return f"{self.lookup_base_url}/functions/v1/{name}"

    def get_headers(self) -> Dict[str, str]:
        """Headers sent with every booking backend call."""
        headers = {"Content-Type": "application/json"}
        if self.booking_api_key:
            headers["apikey"] = self.booking_api_key
            headers["Authorization"] = f"Bearer {self.booking_api_key}"
        return headers

    def is_booking_api_configured(self) -> bool:
        """Check if the booking backend credentials are present."""
        return bool(self.booking_base_url and self.booking_api_key)
