"""
Tests for minor-unit currency helpers.
"""
import pytest
from decimal import Decimal
from yoursplit.core.money import from_minor_units, qround, split_evenly, to_minor_units


@pytest.mark.parametrize("value,expected", [
    (Decimal("100.00"), 10000),
    ("33.33", 3333),
    (0.1, 10),
    (19.99, 1999),
    (5, 500),
    ("10.005", 1001),
    ("-2.50", -250),
])
def test_to_minor_units(value, expected):
    assert to_minor_units(value) == expected


def test_from_minor_units_keeps_two_places():
    assert str(from_minor_units(3333)) == "33.33"
    assert str(from_minor_units(-5000)) == "-50.00"
    assert str(from_minor_units(0)) == "0.00"


def test_qround_half_up():
    assert qround(Decimal("2.675")) == Decimal("2.68")
    assert qround(Decimal("33.333")) == Decimal("33.33")


def test_split_evenly_distributes_remainder_first():
    assert split_evenly(10000, ["a", "b", "c"]) == [("a", 3334), ("b", 3333), ("c", 3333)]
    assert split_evenly(2, ["a", "b", "c"]) == [("a", 1), ("b", 1), ("c", 0)]


@pytest.mark.parametrize("total,count", [(1, 7), (99999, 13), (600, 6), (0, 3)])
def test_split_evenly_sums_to_total(total, count):
    shares = split_evenly(total, [str(i) for i in range(count)])

    assert sum(share for _, share in shares) == total
    assert max(s for _, s in shares) - min(s for _, s in shares) <= 1


def test_split_evenly_needs_keys():
    with pytest.raises(ValueError):
        split_evenly(100, [])
