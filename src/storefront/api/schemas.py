"""Pydantic request/response schemas for the Storefront API.

These are the external contracts. Monetary amounts travel as decimals
(strings or numbers in JSON) and are never trusted for pricing: the only
client-supplied amount that matters is the captured total, which is
compared, not used.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = Field(default=None, max_length=2)
    zip_code: str


class CustomerSchema(BaseModel):
    email: str
    name: str
    phone: str | None = None


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class QuoteCheckoutRequest(BaseModel):
    variant_id: str
    quantity: int = Field(ge=1, default=1)
    zip_code: str
    state: str | None = Field(default=None, max_length=2)
    coupon_code: str | None = None
    user_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "variant_id": "var-001",
                    "quantity": 2,
                    "zip_code": "72120",
                    "coupon_code": "FAMILY",
                }
            ]
        }
    }


class CommitCheckoutRequest(BaseModel):
    variant_id: str
    quantity: int = Field(ge=1)
    shipping_service_id: str
    auth_ref: str = Field(min_length=1, max_length=128)
    captured_amount: Decimal = Field(ge=0)
    customer: CustomerSchema
    destination: AddressSchema
    coupon_code: str | None = None
    user_id: str | None = None
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "variant_id": "var-001",
                    "quantity": 2,
                    "shipping_service_id": "GROUND_ADVANTAGE",
                    "auth_ref": "5O190127TN364715T",
                    "captured_amount": "19.03",
                    "customer": {"email": "jo@example.com", "name": "Jo Doe", "phone": "501-555-0100"},
                    "destination": {
                        "street": "1 Main St",
                        "city": "North Little Rock",
                        "state": "AR",
                        "zip_code": "72120",
                    },
                    "coupon_code": "FAMILY",
                }
            ]
        }
    }


class ValidateCouponRequest(BaseModel):
    code: str
    subtotal: Decimal = Field(ge=0)
    shipping_cost: Decimal = Field(ge=0, default=Decimal("0"))


class CouponCheckResponse(BaseModel):
    valid: bool = True
    code: str
    kind: str
    value: Decimal
    base: Decimal
    discount: Decimal


class ShippingRatesRequest(BaseModel):
    variant_id: str
    quantity: int = Field(ge=1, default=1)
    zip_code: str
    state: str | None = Field(default=None, max_length=2)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class VariantSchema(BaseModel):
    variant_id: str
    size: str
    size_oz: int
    price: Decimal
    in_stock: bool


class ProductSchema(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    variants: list[VariantSchema] = []


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------
class SubscribeRequest(BaseModel):
    user_id: str
    external_reference: str = Field(min_length=1, max_length=128)


class CancelSubscriptionRequest(BaseModel):
    user_id: str


class SubscriptionStatusResponse(BaseModel):
    user_id: str
    is_subscriber: bool
    status: str | None = None
    next_billing_date: str | None = None
    benefits: list[str] = []


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: str | None = None


class AddVariantRequest(BaseModel):
    size: str = Field(min_length=1, max_length=30)
    size_oz: int = Field(ge=0, default=0)
    price: Decimal = Field(gt=0, decimal_places=2)
    on_hand: int = Field(ge=0, default=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)


class RestockRequest(BaseModel):
    quantity: int = Field(ge=1)


class UpdatePriceRequest(BaseModel):
    price: Decimal = Field(gt=0, decimal_places=2)


class CreateCouponRequest(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    kind: str = "percentage"
    value: Decimal = Field(gt=0)
    usage_limit: int = Field(ge=-1, default=-1)
    expires_at: str | None = None
    description: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str


class RecordCaptureRequest(BaseModel):
    auth_ref: str
    amount: Decimal = Field(ge=0)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class ProductIdResponse(BaseModel):
    product_id: str


class VariantIdResponse(BaseModel):
    variant_id: str


class CouponIdResponse(BaseModel):
    coupon_id: str


class SubscriptionIdResponse(BaseModel):
    subscription_id: str


class StockResponse(BaseModel):
    variant_id: str
    on_hand: int
