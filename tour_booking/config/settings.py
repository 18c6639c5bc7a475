"""
Application settings and configuration.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Amsterdam Walking Tours Booking"
    app_version: str = "1.0.0"
    debug: bool = False

    # Booking backend (database REST + edge functions)
    booking_api_base: str = "https://ckgsdkifvijxxvjlhsaa.supabase.co"
    booking_api_key: Optional[str] = None
    booking_lookup_api_base: str = "https://ckgsdkifvijxxvjlhsaa.supabase.co"
    private_tour_api_url: str = (
        "https://ckgsdkifvijxxvjlhsaa.supabase.co/functions/v1/create-private-tour-request"
    )
    request_timeout: float = 10.0

    # Tour rules
    venue_timezone: str = "Europe/Amsterdam"
    same_day_cutoff_minutes: int = 30
    default_tour_title: str = "🏆 Amsterdam Original Tour"

    # Local state
    state_db_path: str = "state.db"
    event_log_path: str = "tour_event_log.jsonl"

    # Wizard sessions untouched for this long are dropped
    wizard_idle_seconds: int = 1800

    # Logging
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
