"""Payment verifier factory.

PAYMENT_VERIFIER_ADAPTER selects the implementation:
- ``fake`` (default) for development and testing
- ``paypal`` for PayPal Orders v2 (PAYPAL_CLIENT_ID / PAYPAL_CLIENT_SECRET)
"""

import os

from storefront.payments.port import PaymentVerifier


def build_payment_verifier(timeout: float = 10.0) -> PaymentVerifier:
    adapter = os.environ.get("PAYMENT_VERIFIER_ADAPTER", "fake")
    if adapter == "fake":
        from storefront.payments.fake_adapter import FakePaymentVerifier

        return FakePaymentVerifier()
    if adapter == "paypal":
        from storefront.payments.paypal_adapter import LIVE_BASE_URL, PayPalPaymentVerifier

        return PayPalPaymentVerifier(
            client_id=os.environ["PAYPAL_CLIENT_ID"],
            client_secret=os.environ["PAYPAL_CLIENT_SECRET"],
            base_url=os.environ.get("PAYPAL_BASE_URL", LIVE_BASE_URL),
            timeout=timeout,
        )
    raise ValueError(f"Unknown payment verifier adapter: {adapter}")
