"""
Configuration management for the tour booking system.
"""

from .settings import Settings, get_settings
from .external_apis import ExternalAPIConfig

__all__ = [
    "Settings",
    "get_settings",
    "ExternalAPIConfig",
]
