"""PayPal payment verifier.

Reads the captured amount of a PayPal checkout order through the Orders
v2 API. Only captures in COMPLETED state count.
"""

import time
from decimal import Decimal, InvalidOperation

import requests
import structlog

from storefront.checkout.errors import PaymentRejected, UpstreamUnavailable
from storefront.payments.port import PaymentVerifier
from storefront.shared.money import ZERO, to_money

logger = structlog.get_logger(__name__)

LIVE_BASE_URL = "https://api-m.paypal.com"
SANDBOX_BASE_URL = "https://api-m.sandbox.paypal.com"


class PayPalPaymentVerifier(PaymentVerifier):
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str = LIVE_BASE_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._token: str | None = None
        self._token_expires_at: float = 0.0

    def _access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        try:
            response = self.session.post(
                f"{self.base_url}/v1/oauth2/token",
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
            token = payload["access_token"]
            expires_in = int(payload.get("expires_in", 3600))
        except (requests.RequestException, KeyError, ValueError) as exc:
            raise UpstreamUnavailable("PayPal OAuth", str(exc)) from exc

        self._token = token
        self._token_expires_at = time.monotonic() + max(expires_in - 60, 0)
        return self._token

    def captured_amount(self, auth_ref: str) -> Decimal:
        token = self._access_token()
        try:
            response = self.session.get(
                f"{self.base_url}/v2/checkout/orders/{auth_ref}",
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise UpstreamUnavailable("PayPal", str(exc)) from exc

        if response.status_code >= 500:
            raise UpstreamUnavailable("PayPal", f"HTTP {response.status_code}")
        if response.status_code == 404:
            raise PaymentRejected(auth_ref, "order not found at PayPal")
        if response.status_code >= 400:
            raise PaymentRejected(auth_ref, f"PayPal answered HTTP {response.status_code}")

        try:
            order = response.json()
        except ValueError as exc:
            raise UpstreamUnavailable("PayPal", "malformed order response") from exc

        if order.get("status") != "COMPLETED":
            raise PaymentRejected(auth_ref, f"order status is {order.get('status')}")

        total = ZERO
        try:
            for unit in order.get("purchase_units", []):
                for capture in unit.get("payments", {}).get("captures", []):
                    if capture.get("status") == "COMPLETED":
                        total += Decimal(str(capture["amount"]["value"]))
        except (KeyError, InvalidOperation) as exc:
            raise UpstreamUnavailable("PayPal", "malformed capture data") from exc

        if total <= ZERO:
            raise PaymentRejected(auth_ref, "no completed capture")

        logger.info("PayPal capture verified", auth_ref=auth_ref, amount=str(total))
        return to_money(total)
