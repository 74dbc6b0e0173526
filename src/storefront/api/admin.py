"""Administrative endpoints, guarded by the ``X-Admin-Key`` header."""

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ValidationError

from storefront.api.dependencies import get_engine, require_admin_key
from storefront.api.schemas import (
    AddVariantRequest,
    CouponIdResponse,
    CreateCouponRequest,
    CreateProductRequest,
    ProductIdResponse,
    RestockRequest,
    StatusResponse,
    StockResponse,
    UpdateOrderStatusRequest,
    UpdatePriceRequest,
    VariantIdResponse,
)
from storefront.catalogue.management import (
    ActivateProduct,
    AddVariant,
    CreateProduct,
    DeactivateProduct,
    RestockVariant,
    UpdateVariantPrice,
)
from storefront.checkout.engine import CheckoutEngine
from storefront.coupon.management import ActivateCoupon, CreateCoupon, DeactivateCoupon
from storefront.ordering.order import Order
from storefront.ordering.reports import order_summary, store_stats
from storefront.ordering.status import UpdateOrderStatus

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin_key)])

_COUPON_ACTIONS = {"activate": ActivateCoupon, "deactivate": DeactivateCoupon}


# --- Orders ---


@admin_router.get("/orders")
async def list_orders(
    status: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    engine: CheckoutEngine = Depends(get_engine),
) -> dict:
    orders = engine.domain.repository_for(Order).recent(limit=limit, status=status)
    return {"orders": [order_summary(order) for order in orders]}


@admin_router.put("/orders/{order_id}/status", response_model=StatusResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, engine: CheckoutEngine = Depends(get_engine)
) -> StatusResponse:
    engine.domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return StatusResponse()


@admin_router.get("/stats")
async def stats(engine: CheckoutEngine = Depends(get_engine)) -> dict:
    return store_stats(engine.domain)


# --- Coupons ---


@admin_router.post("/coupons", status_code=201, response_model=CouponIdResponse)
async def create_coupon(body: CreateCouponRequest, engine: CheckoutEngine = Depends(get_engine)) -> CouponIdResponse:
    command = CreateCoupon(
        code=body.code,
        kind=body.kind,
        value=float(body.value),
        usage_limit=body.usage_limit,
        expires_at=body.expires_at,
        description=body.description,
    )
    result = engine.domain.process(command, asynchronous=False)
    return CouponIdResponse(coupon_id=result)


@admin_router.put("/coupons/{code}/{action}", response_model=StatusResponse)
async def toggle_coupon(code: str, action: str, engine: CheckoutEngine = Depends(get_engine)) -> StatusResponse:
    command_cls = _COUPON_ACTIONS.get(action)
    if command_cls is None:
        raise ValidationError({"action": [f"Unknown coupon action '{action}'"]})
    engine.domain.process(command_cls(code=code), asynchronous=False)
    return StatusResponse()


# --- Catalogue ---


@admin_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, engine: CheckoutEngine = Depends(get_engine)) -> ProductIdResponse:
    result = engine.domain.process(CreateProduct(name=body.name, description=body.description), asynchronous=False)
    return ProductIdResponse(product_id=result)


@admin_router.post("/products/{product_id}/variants", status_code=201, response_model=VariantIdResponse)
async def add_variant(
    product_id: str, body: AddVariantRequest, engine: CheckoutEngine = Depends(get_engine)
) -> VariantIdResponse:
    command = AddVariant(
        product_id=product_id,
        size=body.size,
        size_oz=body.size_oz,
        price=float(body.price),
        on_hand=body.on_hand,
        low_stock_threshold=(
            body.low_stock_threshold
            if body.low_stock_threshold is not None
            else engine.settings.low_stock_threshold
        ),
    )
    result = engine.domain.process(command, asynchronous=False)
    return VariantIdResponse(variant_id=result)


@admin_router.put("/products/{product_id}/deactivate", response_model=StatusResponse)
async def deactivate_product(product_id: str, engine: CheckoutEngine = Depends(get_engine)) -> StatusResponse:
    engine.domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@admin_router.put("/products/{product_id}/activate", response_model=StatusResponse)
async def activate_product(product_id: str, engine: CheckoutEngine = Depends(get_engine)) -> StatusResponse:
    engine.domain.process(ActivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@admin_router.put("/variants/{variant_id}/stock", response_model=StockResponse)
async def restock_variant(
    variant_id: str, body: RestockRequest, engine: CheckoutEngine = Depends(get_engine)
) -> StockResponse:
    on_hand = engine.domain.process(RestockVariant(variant_id=variant_id, quantity=body.quantity), asynchronous=False)
    return StockResponse(variant_id=variant_id, on_hand=on_hand)


@admin_router.put("/variants/{variant_id}/price", response_model=StatusResponse)
async def update_variant_price(
    variant_id: str, body: UpdatePriceRequest, engine: CheckoutEngine = Depends(get_engine)
) -> StatusResponse:
    engine.domain.process(UpdateVariantPrice(variant_id=variant_id, price=float(body.price)), asynchronous=False)
    return StatusResponse()
