"""FastAPI endpoints for shoppers: catalogue, checkout and subscriptions."""

import os

from fastapi import APIRouter, Depends, HTTPException, Query
from protean.exceptions import ValidationError

from storefront.api.dependencies import get_engine
from storefront.api.schemas import (
    CancelSubscriptionRequest,
    CommitCheckoutRequest,
    CouponCheckResponse,
    ProductSchema,
    QuoteCheckoutRequest,
    RecordCaptureRequest,
    ShippingRatesRequest,
    StatusResponse,
    SubscribeRequest,
    SubscriptionIdResponse,
    SubscriptionStatusResponse,
    ValidateCouponRequest,
    VariantSchema,
)
from storefront.catalogue.product import Product
from storefront.catalogue.variant import Variant
from storefront.checkout.engine import CheckoutEngine, CommitRequest, Customer, Destination, QuoteRequest
from storefront.ordering.order import Order
from storefront.ordering.reports import order_summary
from storefront.payments.fake_adapter import FakePaymentVerifier
from storefront.subscription.management import CancelSubscription, Subscribe
from storefront.subscription.subscription import MEMBER_BENEFITS, Subscription

catalogue_router = APIRouter(prefix="/products", tags=["catalogue"])
checkout_router = APIRouter(tags=["checkout"])
subscription_router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
payments_router = APIRouter(prefix="/payments", tags=["payments"])


def _variant_schema(variant: Variant) -> VariantSchema:
    return VariantSchema(
        variant_id=str(variant.id),
        size=variant.size,
        size_oz=variant.size_oz,
        price=variant.unit_price,
        in_stock=variant.on_hand > 0,
    )


# --- Catalogue ---


@catalogue_router.get("", response_model=list[ProductSchema])
async def list_products(engine: CheckoutEngine = Depends(get_engine)) -> list[ProductSchema]:
    variants = engine.domain.repository_for(Variant)
    return [
        ProductSchema(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            variants=[_variant_schema(variant) for variant in variants.for_product(str(product.id))],
        )
        for product in engine.domain.repository_for(Product).available()
    ]


@catalogue_router.get("/{product_id}/variants", response_model=list[VariantSchema])
async def list_variants(product_id: str, engine: CheckoutEngine = Depends(get_engine)) -> list[VariantSchema]:
    engine.domain.repository_for(Product).get(product_id)
    return [_variant_schema(variant) for variant in engine.domain.repository_for(Variant).for_product(product_id)]


# --- Checkout ---


@checkout_router.post("/coupons/validate", response_model=CouponCheckResponse)
async def validate_coupon(body: ValidateCouponRequest, engine: CheckoutEngine = Depends(get_engine)):
    check = engine.validate_coupon(body.code, body.subtotal, body.shipping_cost)
    return CouponCheckResponse(
        code=check.code,
        kind=check.kind,
        value=check.value,
        base=check.base,
        discount=check.discount,
    )


@checkout_router.post("/shipping/rates")
async def shipping_rates(body: ShippingRatesRequest, engine: CheckoutEngine = Depends(get_engine)) -> dict:
    resolution = engine.shipping_rates(body.variant_id, body.quantity, body.zip_code, body.state)
    return {
        "destination_zip": resolution.destination_zip,
        "destination_state": resolution.destination_state,
        "used_fallback_rates": resolution.used_fallback_rates,
        "package": {
            "weight_lb": str(resolution.package.weight_lb),
            "dimensions": resolution.package.dims_key,
        },
        "options": [
            {
                "service_id": option.service_id,
                "name": option.name,
                "cost": f"{option.cost:.2f}",
                "eta": option.eta,
            }
            for option in resolution.options
        ],
    }


@checkout_router.get("/tax/{state}")
async def tax_info(state: str, engine: CheckoutEngine = Depends(get_engine)) -> dict:
    return engine.taxes.describe(state)


@checkout_router.post("/checkout/quote")
async def quote_checkout(body: QuoteCheckoutRequest, engine: CheckoutEngine = Depends(get_engine)) -> dict:
    quote = engine.quote(
        QuoteRequest(
            variant_id=body.variant_id,
            quantity=body.quantity,
            zip_code=body.zip_code,
            state=body.state,
            coupon_code=body.coupon_code,
            user_id=body.user_id,
        )
    )
    return quote.as_dict()


@checkout_router.post("/checkout/commit", status_code=201)
async def commit_checkout(body: CommitCheckoutRequest, engine: CheckoutEngine = Depends(get_engine)) -> dict:
    confirmation = engine.commit(
        CommitRequest(
            variant_id=body.variant_id,
            quantity=body.quantity,
            destination=Destination(
                zip_code=body.destination.zip_code,
                street=body.destination.street,
                city=body.destination.city,
                state=body.destination.state,
            ),
            shipping_service_id=body.shipping_service_id,
            auth_ref=body.auth_ref,
            captured_amount=body.captured_amount,
            customer=Customer(
                email=body.customer.email,
                name=body.customer.name,
                phone=body.customer.phone,
            ),
            coupon_code=body.coupon_code,
            user_id=body.user_id,
            notes=body.notes,
        )
    )
    return confirmation.as_dict()


# --- Subscriptions ---


@subscription_router.post("", status_code=201, response_model=SubscriptionIdResponse)
async def subscribe(body: SubscribeRequest, engine: CheckoutEngine = Depends(get_engine)) -> SubscriptionIdResponse:
    command = Subscribe(user_id=body.user_id, external_reference=body.external_reference)
    result = engine.domain.process(command, asynchronous=False)
    return SubscriptionIdResponse(subscription_id=result)


@subscription_router.post("/cancel", response_model=StatusResponse)
async def cancel_subscription(
    body: CancelSubscriptionRequest, engine: CheckoutEngine = Depends(get_engine)
) -> StatusResponse:
    engine.domain.process(CancelSubscription(user_id=body.user_id), asynchronous=False)
    return StatusResponse()


@subscription_router.get("/{user_id}", response_model=SubscriptionStatusResponse)
async def subscription_status(user_id: str, engine: CheckoutEngine = Depends(get_engine)):
    subscription = engine.domain.repository_for(Subscription).active_for_user(user_id)
    if subscription is None:
        return SubscriptionStatusResponse(user_id=user_id, is_subscriber=False)
    return SubscriptionStatusResponse(
        user_id=user_id,
        is_subscriber=True,
        status=subscription.status,
        next_billing_date=subscription.next_billing_date.isoformat() if subscription.next_billing_date else None,
        benefits=list(MEMBER_BENEFITS),
    )


# --- Order history ---


@order_router.get("/history")
async def order_history(
    user_id: str | None = Query(default=None),
    email: str | None = Query(default=None),
    engine: CheckoutEngine = Depends(get_engine),
) -> dict:
    if not user_id and not email:
        raise ValidationError({"user_id": ["Provide a user id or an email address"]})
    orders = engine.domain.repository_for(Order).history(user_id=user_id, customer_email=email)
    return {"orders": [order_summary(order) for order in orders]}


# --- Development payment captures ---


@payments_router.post("/fake/captures", status_code=201, response_model=StatusResponse)
async def record_fake_capture(body: RecordCaptureRequest, engine: CheckoutEngine = Depends(get_engine)):
    """Record a capture on the fake verifier (non-production only)."""
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Fake captures not available in production")

    if not isinstance(engine.verifier, FakePaymentVerifier):
        raise HTTPException(status_code=400, detail="Fake captures only available for FakePaymentVerifier")
    engine.verifier.record_capture(body.auth_ref, body.amount)
    return StatusResponse()
