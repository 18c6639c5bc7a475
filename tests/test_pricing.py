import pytest
from decimal import Decimal

from tour_booking.services.private_tour import calculate_private_tour_price


@pytest.mark.parametrize("guests", range(1, 11))
def test_small_groups_share_flat_total(guests):
    price = calculate_private_tour_price(guests)
    assert price.per_person == Decimal(249 // guests) + Decimal("0.95")
    assert price.total == Decimal("249")


def test_known_small_group_prices():
    assert calculate_private_tour_price(1).display()["per_person"] == "249.95"
    assert calculate_private_tour_price(3).display()["per_person"] == "83.95"
    assert calculate_private_tour_price(7).display()["per_person"] == "35.95"
    assert calculate_private_tour_price(10).display()["per_person"] == "24.95"


@pytest.mark.parametrize("guests", [11, 15, 30])
def test_large_groups_pay_per_person(guests):
    price = calculate_private_tour_price(guests)
    assert price.per_person == Decimal("24.95")
    assert price.total == Decimal("24.95") * guests


def test_large_group_display():
    assert calculate_private_tour_price(12).display() == {
        "guests": 12,
        "per_person": "24.95",
        "total": "299.40",
    }


@pytest.mark.parametrize("guests", [0, -1])
def test_rejects_empty_group(guests):
    with pytest.raises(ValueError):
        calculate_private_tour_price(guests)
