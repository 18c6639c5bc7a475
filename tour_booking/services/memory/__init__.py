"""
Last-booking memory for thank-you page revisits.
"""

from .state_manager import StateManager

__all__ = ["StateManager"]
