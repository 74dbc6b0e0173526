"""Rate estimator factory.

Selects the adapter from RATE_ESTIMATOR_ADAPTER:
- ``fake`` (default) for development and testing
- ``usps`` for the live USPS pricing API (USPS_CLIENT_ID / USPS_CLIENT_SECRET)
"""

import os

from storefront.shipping.port import RateEstimator


def build_rate_estimator(timeout: float = 10.0) -> RateEstimator:
    adapter = os.environ.get("RATE_ESTIMATOR_ADAPTER", "fake")
    if adapter == "fake":
        from storefront.shipping.fake_adapter import FakeRateEstimator

        return FakeRateEstimator()
    if adapter == "usps":
        from storefront.shipping.usps_adapter import PRODUCTION_BASE_URL, UspsRateEstimator

        return UspsRateEstimator(
            client_id=os.environ["USPS_CLIENT_ID"],
            client_secret=os.environ["USPS_CLIENT_SECRET"],
            base_url=os.environ.get("USPS_BASE_URL", PRODUCTION_BASE_URL),
            timeout=timeout,
        )
    raise ValueError(f"Unknown rate estimator adapter: {adapter}")
