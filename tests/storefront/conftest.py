from decimal import Decimal

import pytest


@pytest.fixture(scope="session")
def _storefront_domain():
    """The storefront domain, initialized in ``pytest_sessionstart``."""
    from storefront.domain import storefront

    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Checkout collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def rate_estimator():
    from storefront.shipping.fake_adapter import FakeRateEstimator

    return FakeRateEstimator()


@pytest.fixture()
def verifier():
    from storefront.payments.fake_adapter import FakePaymentVerifier

    return FakePaymentVerifier()


@pytest.fixture()
def notifier():
    from storefront.notifications.fake_adapter import FakeNotificationRelay

    return FakeNotificationRelay()


@pytest.fixture()
def settings():
    from storefront.config import CheckoutSettings

    return CheckoutSettings(admin_key="test-admin-key")


@pytest.fixture()
def engine(_storefront_domain, settings, rate_estimator, verifier, notifier):
    from storefront.checkout.assembly import build_engine
    from storefront.shipping.cache import RateCache
    from storefront.tax.table_adapter import TableTaxEstimator

    return build_engine(
        _storefront_domain,
        settings=settings,
        rate_estimator=rate_estimator,
        tax_estimator=TableTaxEstimator(),
        verifier=verifier,
        notifier=notifier,
        cache=RateCache(),
    )


# ---------------------------------------------------------------------------
# Catalogue data
# ---------------------------------------------------------------------------
def create_product(name="Tamarind_Sweets", description="Tangy tamarind candy"):
    from protean.utils.globals import current_domain
    from storefront.catalogue.management import CreateProduct

    return current_domain.process(CreateProduct(name=name, description=description), asynchronous=False)


def add_variant(product_id, size="4oz", price=6.99, size_oz=4, on_hand=20, low_stock_threshold=5):
    from protean.utils.globals import current_domain
    from storefront.catalogue.management import AddVariant

    command = AddVariant(
        product_id=product_id,
        size=size,
        size_oz=size_oz,
        price=price,
        on_hand=on_hand,
        low_stock_threshold=low_stock_threshold,
    )
    return current_domain.process(command, asynchronous=False)


def create_coupon(code="family", kind="percentage", value=25.0, usage_limit=-1, expires_at=None):
    from protean.utils.globals import current_domain
    from storefront.coupon.management import CreateCoupon

    command = CreateCoupon(code=code, kind=kind, value=value, usage_limit=usage_limit, expires_at=expires_at)
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def product_id():
    return create_product()


@pytest.fixture()
def variant_id(product_id):
    return add_variant(product_id)


@pytest.fixture()
def family_coupon():
    create_coupon()
    return "family"


@pytest.fixture()
def ground_at(rate_estimator):
    """Pin the carrier's Ground Advantage rate to a known amount."""
    from storefront.shipping.port import RateOption

    def _pin(amount):
        rate_estimator.configure(
            rates=[RateOption("GROUND_ADVANTAGE", "Ground Advantage", Decimal(amount), "2-5 business days")]
        )

    return _pin


@pytest.fixture()
def make_product():
    return create_product


@pytest.fixture()
def make_variant():
    return add_variant


@pytest.fixture()
def make_coupon():
    return create_coupon
