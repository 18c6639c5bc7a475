"""
API handler modules.
"""

from .bookings import BookingsHandler
from .catalog import CatalogHandler
from .health import HealthHandler
from .private_tours import PrivateToursHandler
from .wizard import WizardHandler

__all__ = [
    "BookingsHandler",
    "CatalogHandler",
    "HealthHandler",
    "PrivateToursHandler",
    "WizardHandler",
]
