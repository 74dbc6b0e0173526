"""Checkout engine: quoting and committing a single-line order.

Lifecycle of a checkout:

    Quoted  ->  Authorized (at the payment processor)  ->  Committed
       \\______________________________________________->  Rejected

``quote`` is pure: it reads the catalogue, coupons and subscriptions and
never writes. ``commit`` recomputes everything from server-side state,
checks the result against what the processor captured, and then records
the order, withdraws stock and redeems the coupon in one Unit of Work.

The engine is assembled once per process (``checkout.assembly.build_engine``) and holds
its collaborators explicitly; it keeps no module-level state.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

import structlog
from protean.domain import Domain
from protean.exceptions import ValidationError

from storefront.catalogue.product import Product
from storefront.catalogue.variant import Variant
from storefront.checkout.breakdown import Breakdown, Quote, compute_breakdown
from storefront.checkout.errors import CheckoutError, CouponInvalid, DuplicatePayment, PersistenceError, TotalMismatch
from storefront.config import CheckoutSettings
from storefront.coupon.coupon import Coupon
from storefront.notifications.port import NotificationRelay
from storefront.notifications.templates import LOW_STOCK, ORDER_COMPLETED
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder
from storefront.payments.port import PaymentVerifier
from storefront.pricing.discounts import DiscountResolver, discount_base
from storefront.shared.money import ZERO, as_float, to_money, within_tolerance
from storefront.shipping.resolver import ShippingCostResolver, ShippingResolution
from storefront.subscription.subscription import Subscription
from storefront.tax.resolver import TaxResolver

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Destination:
    zip_code: str
    street: str | None = None
    city: str | None = None
    state: str | None = None


@dataclass(frozen=True)
class Customer:
    email: str
    name: str
    phone: str | None = None


@dataclass(frozen=True)
class QuoteRequest:
    variant_id: str
    quantity: int
    zip_code: str
    state: str | None = None
    coupon_code: str | None = None
    user_id: str | None = None


@dataclass(frozen=True)
class CommitRequest:
    variant_id: str
    quantity: int
    destination: Destination
    shipping_service_id: str
    auth_ref: str
    captured_amount: Decimal
    customer: Customer
    coupon_code: str | None = None
    user_id: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class CouponCheck:
    code: str
    kind: str
    value: Decimal
    base: Decimal
    discount: Decimal


@dataclass(frozen=True)
class Confirmation:
    order_id: str
    payment_reference: str
    breakdown: Breakdown
    used_fallback_rates: bool

    def as_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "payment_reference": self.payment_reference,
            "status": "completed",
            "used_fallback_rates": self.used_fallback_rates,
            "breakdown": self.breakdown.as_dict(),
        }


def _require(condition: bool, field_name: str, message: str) -> None:
    if not condition:
        raise ValidationError({field_name: [message]})


class CheckoutEngine:
    def __init__(
        self,
        domain: Domain,
        settings: CheckoutSettings,
        shipping: ShippingCostResolver,
        taxes: TaxResolver,
        verifier: PaymentVerifier,
        notifier: NotificationRelay,
        discounts: DiscountResolver | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.domain = domain
        self.settings = settings
        self.shipping = shipping
        self.taxes = taxes
        self.verifier = verifier
        self.notifier = notifier
        self.discounts = discounts or DiscountResolver(settings.subscriber_discount_rate)
        self.clock = clock or (lambda: datetime.now(UTC))
        # Serialises in-process commits; the placement handler re-checks stock
        self._commit_lock = threading.Lock()

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def _load_variant(self, variant_id: str) -> tuple[Variant, Product]:
        variant = self.domain.repository_for(Variant).get(variant_id)
        product = self.domain.repository_for(Product).get(variant.product_id)
        if not product.available:
            raise ValidationError({"variant_id": [f"{product.name} is not currently available"]})
        return variant, product

    def _load_coupon(self, code: str | None, now: datetime | None = None) -> Coupon | None:
        if not code or not code.strip():
            return None
        coupon = self.domain.repository_for(Coupon).find_by_code(code)
        if coupon is None:
            raise CouponInvalid(code, "unknown coupon code")
        coupon.ensure_redeemable(now or self.clock())
        return coupon

    def is_subscriber(self, user_id: str | None) -> bool:
        if not user_id:
            return False
        return self.domain.repository_for(Subscription).active_for_user(user_id) is not None

    # -------------------------------------------------------------------
    # Quote
    # -------------------------------------------------------------------
    def shipping_rates(self, variant_id: str, quantity: int, zip_code: str, state: str | None = None):
        _require(quantity is not None and quantity >= 1, "quantity", "Quantity must be at least 1")
        variant, _ = self._load_variant(variant_id)
        return self.shipping.resolve(zip_code, variant.size, quantity, variant.size_oz, state)

    def _price_options(
        self,
        subtotal: Decimal,
        resolution: ShippingResolution,
        coupon: Coupon | None,
        is_subscriber: bool,
    ) -> tuple[Breakdown, ...]:
        return tuple(
            compute_breakdown(
                subtotal,
                option,
                self.discounts,
                self.taxes,
                resolution.destination_zip,
                resolution.destination_state,
                coupon=coupon,
                is_subscriber=is_subscriber,
            )
            for option in resolution.options
        )

    def quote(self, request: QuoteRequest) -> Quote:
        _require(request.quantity is not None and request.quantity >= 1, "quantity", "Quantity must be at least 1")

        variant, product = self._load_variant(request.variant_id)
        subtotal = to_money(variant.unit_price * request.quantity)
        coupon = self._load_coupon(request.coupon_code)
        subscriber = self.is_subscriber(request.user_id)
        resolution = self.shipping.resolve(
            request.zip_code, variant.size, request.quantity, variant.size_oz, request.state
        )

        quote = Quote(
            variant_id=str(variant.id),
            product_id=str(product.id),
            size=variant.size,
            quantity=request.quantity,
            unit_price=variant.unit_price,
            destination_zip=request.zip_code,
            destination_state=resolution.destination_state,
            package=resolution.package,
            coupon_code=coupon.code if coupon else None,
            is_subscriber=subscriber,
            in_stock=variant.on_hand >= request.quantity,
            used_fallback_rates=resolution.used_fallback_rates,
            options=self._price_options(subtotal, resolution, coupon, subscriber),
        )
        logger.info(
            "Checkout quoted",
            variant_id=quote.variant_id,
            quantity=quote.quantity,
            destination_state=quote.destination_state,
            used_fallback_rates=quote.used_fallback_rates,
        )
        return quote

    def validate_coupon(self, code: str, subtotal, shipping_cost=ZERO) -> CouponCheck:
        """Preview a coupon against an amount without reserving a use."""
        _require(bool(code and code.strip()), "code", "Coupon code is required")
        _require(subtotal is not None and to_money(subtotal) >= ZERO, "subtotal", "Subtotal must be zero or more")

        coupon = self._load_coupon(code)
        base = discount_base(subtotal, shipping_cost)
        return CouponCheck(
            code=coupon.code,
            kind=coupon.kind,
            value=to_money(coupon.value),
            base=base,
            discount=self.discounts.coupon_discount(coupon, base),
        )

    # -------------------------------------------------------------------
    # Commit
    # -------------------------------------------------------------------
    def _validate_commit(self, request: CommitRequest) -> None:
        _require(request.quantity is not None and request.quantity >= 1, "quantity", "Quantity must be at least 1")
        _require(bool(request.auth_ref and request.auth_ref.strip()), "auth_ref", "Payment reference is required")
        _require(bool(request.shipping_service_id), "shipping_service_id", "Shipping method is required")
        _require(
            bool(request.customer.email and "@" in request.customer.email), "customer_email", "Valid email is required"
        )
        _require(bool(request.customer.name and request.customer.name.strip()), "customer_name", "Name is required")
        _require(request.captured_amount is not None, "captured_amount", "Captured amount is required")

    def _reject(self, request: CommitRequest, exc: Exception) -> None:
        logger.warning(
            "Checkout rejected",
            auth_ref=request.auth_ref,
            variant_id=request.variant_id,
            reason=type(exc).__name__,
            detail=str(exc),
        )

    def commit(self, request: CommitRequest) -> Confirmation:
        try:
            return self._commit(request)
        except (CheckoutError, ValidationError) as exc:
            self._reject(request, exc)
            raise

    def _commit(self, request: CommitRequest) -> Confirmation:
        self._validate_commit(request)
        now = self.clock()

        if self.domain.repository_for(Order).find_by_payment_reference(request.auth_ref) is not None:
            raise DuplicatePayment(request.auth_ref)

        variant, product = self._load_variant(request.variant_id)
        coupon = self._load_coupon(request.coupon_code, now)
        subscriber = self.is_subscriber(request.user_id)

        destination = request.destination
        resolution = self.shipping.resolve(
            destination.zip_code, variant.size, request.quantity, variant.size_oz, destination.state
        )
        option = resolution.option(request.shipping_service_id)
        subtotal = to_money(variant.unit_price * request.quantity)
        breakdown = compute_breakdown(
            subtotal,
            option,
            self.discounts,
            self.taxes,
            resolution.destination_zip,
            resolution.destination_state,
            coupon=coupon,
            is_subscriber=subscriber,
        )

        presented = to_money(request.captured_amount)
        captured = self.verifier.captured_amount(request.auth_ref)
        tolerance = self.settings.total_tolerance
        if not within_tolerance(presented, breakdown.total, tolerance) or not within_tolerance(
            captured, breakdown.total, tolerance
        ):
            raise TotalMismatch(breakdown.total, presented, to_money(captured))

        variant.ensure_available(request.quantity)

        command = PlaceOrder(
            product_id=str(product.id),
            variant_id=str(variant.id),
            quantity=request.quantity,
            customer_email=request.customer.email.strip().lower(),
            customer_name=request.customer.name.strip(),
            customer_phone=request.customer.phone,
            street=destination.street,
            city=destination.city,
            state=resolution.destination_state,
            zip_code=destination.zip_code,
            shipping_method=option.service_id,
            coupon_code=coupon.code if coupon else None,
            unit_price=as_float(variant.unit_price),
            subtotal=as_float(breakdown.subtotal),
            shipping_cost=as_float(breakdown.shipping),
            coupon_discount=as_float(breakdown.coupon_discount),
            subscriber_discount=as_float(breakdown.subscriber_discount),
            tax=as_float(breakdown.tax),
            tax_rate=float(breakdown.tax_rate),
            total=as_float(breakdown.total),
            used_fallback_rates=resolution.used_fallback_rates,
            payment_reference=request.auth_ref,
            notes=request.notes,
            user_id=request.user_id,
            checked_at=now,
        )

        with self._commit_lock:
            try:
                order_id = self.domain.process(command, asynchronous=False)
            except (CheckoutError, ValidationError):
                raise
            except Exception as exc:
                logger.exception("Order commit failed", auth_ref=request.auth_ref, error_type=type(exc).__name__)
                raise PersistenceError() from exc

        logger.info(
            "Checkout committed",
            order_id=order_id,
            auth_ref=request.auth_ref,
            total=str(breakdown.total),
            used_fallback_rates=resolution.used_fallback_rates,
        )
        self._after_commit(order_id, request, product, variant, breakdown)

        return Confirmation(
            order_id=order_id,
            payment_reference=request.auth_ref,
            breakdown=breakdown,
            used_fallback_rates=resolution.used_fallback_rates,
        )

    # -------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------
    def _notify(self, event: str, payload: dict) -> None:
        try:
            self.notifier.notify(event, payload)
        except Exception as exc:
            # Delivery problems never undo a committed order
            logger.warning("Notification relay failed", notification_event=event, error=str(exc))

    def _after_commit(
        self, order_id: str, request: CommitRequest, product: Product, variant: Variant, breakdown: Breakdown
    ) -> None:
        self._notify(
            ORDER_COMPLETED,
            {
                "order_id": order_id,
                "product_name": product.name,
                "size": variant.size,
                "quantity": request.quantity,
                "customer_name": request.customer.name,
                "customer_email": request.customer.email,
                "shipping_method": breakdown.service_name,
                "total": f"{breakdown.total:.2f}",
            },
        )

        try:
            variant = self.domain.repository_for(Variant).get(request.variant_id)
        except Exception as exc:
            logger.warning("Low stock check skipped", variant_id=request.variant_id, error=str(exc))
            return
        if variant.is_low_on_stock:
            self._notify(
                LOW_STOCK,
                {
                    "variant_id": str(variant.id),
                    "product_name": product.name,
                    "size": variant.size,
                    "on_hand": variant.on_hand,
                    "threshold": variant.low_stock_threshold,
                },
            )
