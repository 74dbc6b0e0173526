"""BDD tests for checkout quoting."""

from decimal import Decimal

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when
from storefront.checkout.engine import QuoteRequest
from storefront.checkout.errors import CheckoutError

scenarios("features/checkout_totals.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('I quote {quantity:d} units to zip "{zip_code}"'))
def quote_units(engine, variant_id, checkout, error, quantity, zip_code):
    request = QuoteRequest(
        variant_id=variant_id,
        quantity=quantity,
        zip_code=zip_code,
        coupon_code=checkout["coupon_code"],
    )
    try:
        checkout["quote"] = engine.quote(request)
    except (CheckoutError, ValidationError) as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the "{service_id}" option totals "{amount}"'))
def option_total(checkout, service_id, amount):
    assert checkout["quote"].option(service_id).total == Decimal(amount)


@then(parsers.cfparse('the "{service_id}" option has tax "{amount}"'))
def option_tax(checkout, service_id, amount):
    assert checkout["quote"].option(service_id).tax == Decimal(amount)


@then(parsers.cfparse('the "{service_id}" option has coupon discount "{amount}"'))
def option_coupon_discount(checkout, service_id, amount):
    assert checkout["quote"].option(service_id).coupon_discount == Decimal(amount)


@then("the quote used fallback rates")
def used_fallback(checkout):
    assert checkout["quote"].used_fallback_rates is True
