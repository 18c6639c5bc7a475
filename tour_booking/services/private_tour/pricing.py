"""
Private tour pricing.
"""

from decimal import Decimal

from ...core.models import PrivateTourPrice

# Flat price for small private groups
SMALL_GROUP_TOTAL = Decimal("249")
SMALL_GROUP_MAX = 10
PER_PERSON_CENTS = Decimal("0.95")
LARGE_GROUP_PER_PERSON = Decimal("24.95")


def calculate_private_tour_price(guests: int) -> PrivateTourPrice:
    """
    Price a private tour for ``guests`` people.

    Up to ten guests share a flat total, shown per person rounded down to
    whole euros plus 95 cents. Larger groups pay a fixed rate per person.

    Raises:
        ValueError: If ``guests`` is below one
    """
    if guests < 1:
        raise ValueError("A private tour needs at least one guest")

    if guests <= SMALL_GROUP_MAX:
        per_person = (SMALL_GROUP_TOTAL // guests) + PER_PERSON_CENTS
        return PrivateTourPrice(guests=guests, per_person=per_person, total=SMALL_GROUP_TOTAL)

    return PrivateTourPrice(
        guests=guests,
        per_person=LARGE_GROUP_PER_PERSON,
        total=LARGE_GROUP_PER_PERSON * guests,
    )
