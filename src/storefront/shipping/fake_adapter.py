"""Configurable fake rate estimator for development and testing.

Returns a fixed price list without network calls. Can be switched to
fail, which exercises the static fallback table.
"""

from decimal import Decimal

from storefront.shipping.port import PackageSpec, RateEstimator, RateOption

DEFAULT_FAKE_RATES = (
    RateOption("GROUND_ADVANTAGE", "Ground Advantage", Decimal("8.45"), "2-5 business days"),
    RateOption("PRIORITY_MAIL", "Priority Mail", Decimal("15.20"), "1-3 business days"),
    RateOption("PRIORITY_MAIL_EXPRESS", "Priority Express", Decimal("44.10"), "1-2 business days"),
)


class FakeRateEstimator(RateEstimator):
    def __init__(self, rates=DEFAULT_FAKE_RATES) -> None:
        self.rates: list[RateOption] = list(rates)
        self.should_succeed: bool = True
        self.failure_reason: str = "Carrier API timed out"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool = True, failure_reason: str = "Carrier API timed out", rates=None) -> None:
        """Configure estimator behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        if rates is not None:
            self.rates = list(rates)

    def estimate(self, origin_zip: str, dest_zip: str, package: PackageSpec) -> list[RateOption]:
        self.calls.append(
            {
                "origin_zip": origin_zip,
                "dest_zip": dest_zip,
                "weight_lb": package.weight_lb,
                "dims": package.dims_key,
            }
        )
        if not self.should_succeed:
            raise TimeoutError(self.failure_reason)
        return list(self.rates)
