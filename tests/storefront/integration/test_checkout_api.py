"""Integration tests for the shopper-facing checkout endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain
from storefront.api import (
    catalogue_router,
    checkout_router,
    order_router,
    payments_router,
    register_checkout_error_handlers,
    subscription_router,
)
from storefront.catalogue.variant import Variant
from storefront.ordering.order import Order


@pytest.fixture()
def client(engine, ground_at):
    ground_at("9.95")
    app = FastAPI()
    app.include_router(catalogue_router)
    app.include_router(checkout_router)
    app.include_router(subscription_router)
    app.include_router(order_router)
    app.include_router(payments_router)
    register_exception_handlers(app)
    register_checkout_error_handlers(app)
    app.state.engine = engine
    return TestClient(app)


def _commit_body(variant_id, **overrides):
    body = {
        "variant_id": variant_id,
        "quantity": 2,
        "shipping_service_id": "GROUND_ADVANTAGE",
        "auth_ref": "PAY-001",
        "captured_amount": "19.03",
        "customer": {"email": "jo@example.com", "name": "Jo Doe"},
        "destination": {"street": "1 Main St", "city": "Sherwood", "state": "AR", "zip_code": "72120"},
        "coupon_code": "FAMILY",
    }
    body.update(overrides)
    return body


class TestCatalogueEndpoints:
    def test_list_products_with_variants(self, client, variant_id):
        response = client.get("/products")
        assert response.status_code == 200
        data = response.json()
        assert data[0]["name"] == "Tamarind_Sweets"
        assert data[0]["variants"][0]["variant_id"] == variant_id
        assert data[0]["variants"][0]["in_stock"] is True

    def test_list_variants(self, client, product_id, variant_id):
        response = client.get(f"/products/{product_id}/variants")
        assert response.status_code == 200
        assert [variant["size"] for variant in response.json()] == ["4oz"]


class TestQuoteEndpoint:
    def test_quote(self, client, variant_id, family_coupon):
        response = client.post(
            "/checkout/quote",
            json={"variant_id": variant_id, "quantity": 2, "zip_code": "72120", "coupon_code": "FAMILY"},
        )
        assert response.status_code == 200
        data = response.json()
        ground = next(option for option in data["options"] if option["service_id"] == "GROUND_ADVANTAGE")
        assert ground["subtotal"] == "13.98"
        assert ground["coupon_discount"] == "5.98"
        assert ground["tax"] == "1.08"
        assert ground["total"] == "19.03"
        assert data["options"][0]["service_id"] == "PICKUP"

    def test_zero_quantity_rejected_at_the_boundary(self, client, variant_id):
        response = client.post("/checkout/quote", json={"variant_id": variant_id, "quantity": 0, "zip_code": "72120"})
        assert response.status_code == 422

    def test_malformed_zip(self, client, variant_id):
        response = client.post("/checkout/quote", json={"variant_id": variant_id, "quantity": 1, "zip_code": "72"})
        assert response.status_code == 400

    def test_unserviceable_destination(self, client, variant_id):
        response = client.post(
            "/checkout/quote", json={"variant_id": variant_id, "quantity": 1, "zip_code": "09012"}
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "UnserviceableDestination"

    def test_exhausted_coupon(self, client, variant_id, make_coupon):
        make_coupon(code="gone", usage_limit=0)
        response = client.post(
            "/checkout/quote",
            json={"variant_id": variant_id, "quantity": 1, "zip_code": "72120", "coupon_code": "gone"},
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "CouponInvalid"


class TestCommitEndpoint:
    def test_commit(self, client, verifier, variant_id, family_coupon):
        verifier.record_capture("PAY-001", "19.03")

        response = client.post("/checkout/commit", json=_commit_body(variant_id))

        assert response.status_code == 201
        data = response.json()
        assert data["breakdown"]["total"] == "19.03"
        order = current_domain.repository_for(Order).get(data["order_id"])
        assert order.payment_reference == "PAY-001"

    def test_duplicate_payment_is_conflict(self, client, verifier, variant_id, family_coupon):
        verifier.record_capture("PAY-001", "19.03")
        client.post("/checkout/commit", json=_commit_body(variant_id))

        response = client.post("/checkout/commit", json=_commit_body(variant_id))

        assert response.status_code == 409
        assert response.json()["error_type"] == "DuplicatePayment"

    def test_total_mismatch_is_conflict(self, client, verifier, variant_id, family_coupon):
        verifier.record_capture("PAY-001", "5.00")

        response = client.post("/checkout/commit", json=_commit_body(variant_id, captured_amount="5.00"))

        assert response.status_code == 409
        assert response.json()["error_type"] == "TotalMismatch"
        assert current_domain.repository_for(Variant).get(variant_id).on_hand == 20

    def test_unknown_authorization_is_payment_required(self, client, variant_id, family_coupon):
        response = client.post("/checkout/commit", json=_commit_body(variant_id))
        assert response.status_code == 402

    def test_processor_down_is_service_unavailable(self, client, verifier, variant_id, family_coupon):
        verifier.configure(reachable=False)
        response = client.post("/checkout/commit", json=_commit_body(variant_id))
        assert response.status_code == 503

    def test_insufficient_inventory_is_conflict(self, client, verifier, variant_id):
        verifier.record_capture("PAY-001", "163.79")
        response = client.post(
            "/checkout/commit",
            json=_commit_body(variant_id, quantity=21, captured_amount="163.79", coupon_code=None),
        )
        assert response.status_code == 409
        assert response.json()["error_type"] == "InsufficientInventory"

    def test_fake_capture_endpoint(self, client, verifier, variant_id, family_coupon):
        response = client.post("/payments/fake/captures", json={"auth_ref": "PAY-009", "amount": "19.03"})
        assert response.status_code == 201

        response = client.post("/checkout/commit", json=_commit_body(variant_id, auth_ref="PAY-009"))
        assert response.status_code == 201

    def test_fake_capture_blocked_in_production(self, client, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        response = client.post("/payments/fake/captures", json={"auth_ref": "PAY-009", "amount": "19.03"})
        assert response.status_code == 403


class TestSupportingEndpoints:
    def test_validate_coupon(self, client, family_coupon):
        response = client.post(
            "/coupons/validate", json={"code": "family", "subtotal": "13.98", "shipping_cost": "9.95"}
        )
        assert response.status_code == 200
        assert response.json()["discount"] == "5.98"

    def test_shipping_rates(self, client, variant_id, rate_estimator):
        rate_estimator.configure(should_succeed=False)
        response = client.post("/shipping/rates", json={"variant_id": variant_id, "quantity": 2, "zip_code": "72120"})
        assert response.status_code == 200
        data = response.json()
        assert data["used_fallback_rates"] is True
        assert data["package"]["weight_lb"] == "1.00"
        assert data["options"][1]["cost"] == "9.95"

    def test_tax_info(self, client):
        response = client.get("/tax/AR")
        assert response.status_code == 200
        assert response.json()["will_collect_tax"] is True

    def test_subscription_lifecycle(self, client):
        response = client.post("/subscriptions", json={"user_id": "user-1", "external_reference": "I-SUB-1"})
        assert response.status_code == 201

        response = client.post("/subscriptions", json={"user_id": "user-1", "external_reference": "I-SUB-2"})
        assert response.status_code == 400

        assert client.get("/subscriptions/user-1").json()["is_subscriber"] is True

        response = client.post("/subscriptions/cancel", json={"user_id": "user-1"})
        assert response.status_code == 200
        assert client.get("/subscriptions/user-1").json()["is_subscriber"] is False

    def test_order_history(self, client, verifier, variant_id, family_coupon):
        verifier.record_capture("PAY-001", "19.03")
        client.post("/checkout/commit", json=_commit_body(variant_id, user_id="user-1"))

        response = client.get("/orders/history", params={"user_id": "user-1"})

        assert response.status_code == 200
        assert len(response.json()["orders"]) == 1

    def test_order_history_requires_identity(self, client):
        assert client.get("/orders/history").status_code == 400
