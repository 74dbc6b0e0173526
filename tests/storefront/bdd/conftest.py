"""Shared BDD fixtures and step definitions for checkout scenarios."""

from decimal import Decimal

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.catalogue.variant import Variant
from storefront.coupon.coupon import Coupon
from storefront.ordering.order import Order


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the rejection raised by the last checkout step."""
    return {"exc": None}


@pytest.fixture()
def checkout():
    """What the shopper has chosen so far, and the last quote."""
    return {"coupon_code": None, "quote": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a "{size}" variant priced at "{price}" with {on_hand:d} in stock'),
    target_fixture="variant_id",
)
def variant_in_stock(make_product, make_variant, size, price, on_hand):
    return make_variant(make_product(), size=size, price=float(price), on_hand=on_hand)


@given(parsers.cfparse('the carrier quotes Ground Advantage at "{amount}"'))
def carrier_quotes_ground(ground_at, amount):
    ground_at(amount)


@given("the carrier is unreachable")
def carrier_unreachable(rate_estimator):
    rate_estimator.configure(should_succeed=False)


@given(parsers.cfparse('a percentage coupon "{code}" worth {value:d}'))
def percentage_coupon(make_coupon, code, value):
    make_coupon(code=code, value=float(value))


@given(parsers.cfparse('a percentage coupon "{code}" worth {value:d} limited to {limit:d} uses'))
def limited_percentage_coupon(make_coupon, code, value, limit):
    make_coupon(code=code, value=float(value), usage_limit=limit)


@given(parsers.cfparse('the shopper applies coupon "{code}"'))
def shopper_applies_coupon(checkout, code):
    checkout["coupon_code"] = code


@given(parsers.cfparse('payment "{auth_ref}" captured for "{amount}"'))
def payment_captured(verifier, auth_ref, amount):
    verifier.record_capture(auth_ref, Decimal(amount))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the checkout is rejected with "{error_type}"'))
def checkout_rejected(error, error_type):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_type


@then(parsers.cfparse("{count:d} units remain in stock"))
def units_remain(variant_id, count):
    assert current_domain.repository_for(Variant).get(variant_id).on_hand == count


@then(parsers.cfparse('coupon "{code}" usage count is {count:d}'))
def coupon_usage(code, count):
    assert current_domain.repository_for(Coupon).find_by_code(code).usage_count == count


@then("no order is recorded")
def no_order():
    assert current_domain.repository_for(Order)._dao.query.all().total == 0
