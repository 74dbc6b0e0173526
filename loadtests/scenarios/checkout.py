"""Checkout load test scenarios.

A stateful SequentialTaskSet journey through the full single-line checkout
(browse, quote, capture on the fake verifier, commit) and a lighter browsing
user that only asks for quotes. Many concurrent commits against the same
seeded variants exercise the stock and coupon-usage guards.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import auth_ref, commit_data, coupon_code, destination, quote_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState

# Rejections the service is expected to produce under contention
EXPECTED_REJECTIONS = {"InsufficientInventory", "CouponInvalid"}


def _pick_variant(client, state: CheckoutState) -> bool:
    with client.get("/products", catch_response=True, name="GET /products") as resp:
        if resp.status_code != 200:
            resp.failure(f"List products failed: {resp.status_code} - {extract_error_detail(resp)}")
            return False
        state.variant_ids = [
            variant["variant_id"]
            for product in resp.json()
            for variant in product["variants"]
            if variant["in_stock"]
        ]
        if not state.variant_ids:
            resp.failure("Catalogue is empty or sold out; run scripts/seed.py")
            return False
    state.variant_id = random.choice(state.variant_ids)
    return True


class CheckoutJourney(SequentialTaskSet):
    """List Products -> Quote -> Capture Payment -> Commit.

    Picks the cheapest non-pickup option half the time and a random one
    otherwise, captures exactly the quoted total, then commits.
    """

    def on_start(self):
        self.state = CheckoutState()
        self.address = destination()

    @task
    def browse(self):
        if not _pick_variant(self.client, self.state):
            self.interrupt()

    @task
    def quote(self):
        self.state.coupon_code = coupon_code()
        payload = quote_data(self.state.variant_id, self.address["zip_code"], self.state.coupon_code)
        with self.client.post(
            "/checkout/quote",
            json=payload,
            catch_response=True,
            name="POST /checkout/quote",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Quote failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
                return

            quote = resp.json()
            shipped = [option for option in quote["options"] if option["service_id"] != "PICKUP"]
            option = shipped[0] if random.random() < 0.5 else random.choice(quote["options"])
            self.state.quantity = quote["quantity"]
            self.state.service_id = option["service_id"]
            self.state.total = option["total"]

    @task
    def capture_payment(self):
        self.state.auth_ref = auth_ref()
        with self.client.post(
            "/payments/fake/captures",
            json={"auth_ref": self.state.auth_ref, "amount": self.state.total},
            catch_response=True,
            name="POST /payments/fake/captures",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Capture failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def commit(self):
        payload = commit_data(
            self.state.variant_id,
            self.state.quantity,
            self.state.service_id,
            self.state.auth_ref,
            self.state.total,
            self.address,
            self.state.coupon_code,
        )
        with self.client.post(
            "/checkout/commit",
            json=payload,
            catch_response=True,
            name="POST /checkout/commit",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
                resp.success()
            elif resp.status_code in (409, 422) and resp.json().get("error_type") in EXPECTED_REJECTIONS:
                resp.success()
            else:
                resp.failure(f"Commit failed: {resp.status_code} - {extract_error_detail(resp)}")
        self.interrupt()


class QuoteOnlyJourney(SequentialTaskSet):
    """List Products -> Quote, without buying."""

    def on_start(self):
        self.state = CheckoutState()

    @task
    def browse(self):
        if not _pick_variant(self.client, self.state):
            self.interrupt()

    @task
    def quote(self):
        payload = quote_data(self.state.variant_id, destination()["zip_code"], coupon_code())
        with self.client.post(
            "/checkout/quote",
            json=payload,
            catch_response=True,
            name="POST /checkout/quote",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Quote failed: {resp.status_code} - {extract_error_detail(resp)}")
        self.interrupt()


class CheckoutUser(HttpUser):
    """Shoppers who complete a purchase."""

    wait_time = between(1, 3)
    tasks = [CheckoutJourney]


class BrowsingUser(HttpUser):
    """Shoppers who compare shipping options and leave."""

    wait_time = between(0.5, 2)
    tasks = [QuoteOnlyJourney]
