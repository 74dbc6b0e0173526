"""Configurable fake payment verifier for development and testing.

Captures are recorded explicitly with ``record_capture``; unknown
references are rejected the way the real processor would.
"""

from decimal import Decimal

from storefront.checkout.errors import PaymentRejected, UpstreamUnavailable
from storefront.payments.port import PaymentVerifier
from storefront.shared.money import to_money


class FakePaymentVerifier(PaymentVerifier):
    def __init__(self) -> None:
        self.captures: dict[str, Decimal] = {}
        self.reachable: bool = True
        self.calls: list[str] = []

    def configure(self, reachable: bool = True) -> None:
        self.reachable = reachable

    def record_capture(self, auth_ref: str, amount) -> None:
        self.captures[auth_ref] = to_money(amount)

    def captured_amount(self, auth_ref: str) -> Decimal:
        self.calls.append(auth_ref)
        if not self.reachable:
            raise UpstreamUnavailable("Payment processor", "connection timed out")
        if auth_ref not in self.captures:
            raise PaymentRejected(auth_ref, "no capture found for this authorization")
        return self.captures[auth_ref]

    def reset(self) -> None:
        self.captures.clear()
        self.calls.clear()
        self.reachable = True
