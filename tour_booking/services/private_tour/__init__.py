"""
Private tour pricing and requests.
"""

from .pricing import calculate_private_tour_price
from .service import PrivateTourService

__all__ = ["calculate_private_tour_price", "PrivateTourService"]
