"""Tests for cent-rounded money helpers."""

from decimal import Decimal

from storefront.shared.money import ZERO, as_float, clamp, to_money, within_tolerance


class TestToMoney:
    def test_float_keeps_its_decimal_spelling(self):
        assert to_money(6.99) == Decimal("6.99")

    def test_rounds_half_up(self):
        assert to_money(Decimal("1.005")) == Decimal("1.01")
        assert to_money(Decimal("5.9825")) == Decimal("5.98")
        assert to_money(Decimal("1.07685")) == Decimal("1.08")

    def test_none_is_zero(self):
        assert to_money(None) == ZERO

    def test_strings_are_accepted(self):
        assert to_money("19.030") == Decimal("19.03")


class TestTolerance:
    def test_one_cent_apart_is_within(self):
        assert within_tolerance(Decimal("19.03"), Decimal("19.04"))

    def test_two_cents_apart_is_not(self):
        assert not within_tolerance(Decimal("19.03"), Decimal("19.05"))


def test_clamp_bounds_both_sides():
    assert clamp(Decimal("-1"), ZERO, Decimal("10")) == ZERO
    assert clamp(Decimal("11"), ZERO, Decimal("10")) == Decimal("10")
    assert clamp(Decimal("5"), ZERO, Decimal("10")) == Decimal("5")


def test_as_float_rounds_first():
    assert as_float(Decimal("13.9800001")) == 13.98
