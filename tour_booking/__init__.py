"""
Booking funnel for the Amsterdam walking tours website.
"""

__version__ = "1.0.0"
