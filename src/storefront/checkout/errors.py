"""Checkout failure taxonomy.

Malformed input is reported with Protean's ``ValidationError``; everything
below is a checkout-specific outcome with its own HTTP status.
"""


class CheckoutError(Exception):
    """Base exception for checkout failures."""

    pass


class CouponInvalid(CheckoutError):
    """Coupon is unknown, inactive, expired or exhausted."""

    def __init__(self, code: str, reason: str):
        self.code = code
        self.reason = reason
        super().__init__(f"Coupon '{code}' cannot be applied: {reason}")


class InsufficientInventory(CheckoutError):
    def __init__(self, variant_id: str, requested: int, on_hand: int):
        self.variant_id = variant_id
        self.requested = requested
        self.on_hand = on_hand
        super().__init__(f"Only {on_hand} unit(s) of variant {variant_id} available, {requested} requested")


class UnserviceableDestination(CheckoutError):
    def __init__(self, destination: str, reason: str | None = None):
        self.destination = destination
        msg = f"Cannot ship to {destination}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class TotalMismatch(CheckoutError):
    """Authorized amount disagrees with the server-computed total."""

    def __init__(self, expected, presented, captured=None):
        self.expected = expected
        self.presented = presented
        self.captured = captured
        msg = f"Order total {expected} does not match the authorized amount {presented}"
        if captured is not None and captured != presented:
            msg = f"{msg} (processor captured {captured})"
        super().__init__(msg)


class UpstreamUnavailable(CheckoutError):
    """An external estimator or verifier could not be reached in time."""

    def __init__(self, service: str, reason: str | None = None):
        self.service = service
        self.reason = reason
        msg = f"{service} is unavailable"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class PaymentRejected(CheckoutError):
    """The payment processor reported the authorization as not captured."""

    def __init__(self, auth_ref: str, reason: str):
        self.auth_ref = auth_ref
        self.reason = reason
        super().__init__(f"Payment {auth_ref} was rejected: {reason}")


class DuplicatePayment(CheckoutError):
    def __init__(self, auth_ref: str):
        self.auth_ref = auth_ref
        super().__init__(f"Payment {auth_ref} has already been used for an order")


class PersistenceError(CheckoutError):
    """Order could not be recorded. Never carries internal detail."""

    def __init__(self):
        super().__init__("The order could not be recorded. Please try again or contact support.")


ERROR_STATUS_CODES: dict[type, int] = {
    CouponInvalid: 422,
    InsufficientInventory: 409,
    UnserviceableDestination: 422,
    TotalMismatch: 409,
    UpstreamUnavailable: 503,
    PaymentRejected: 402,
    DuplicatePayment: 409,
    PersistenceError: 500,
}
