"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the checkout's validation rules
and match the field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_US")

# Five-digit ZIPs that resolve to a serviceable state, weighted toward
#   Arkansas (the merchant's home state and only tax nexus).
DESTINATION_ZIPS = [
    ("72120", "AR"),
    ("72201", "AR"),
    ("72701", "AR"),
    ("10001", "NY"),
    ("60601", "IL"),
    ("75201", "TX"),
    ("94105", "CA"),
    ("98101", "WA"),
]

COUPON_CODES = [None, None, None, "family"]


def destination() -> dict:
    """Generate an AddressSchema payload on a serviceable ZIP."""
    zip_code, state = random.choice(DESTINATION_ZIPS)
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": state,
        "zip_code": zip_code,
    }


def customer() -> dict:
    """Generate a CustomerSchema payload with a unique email."""
    local = fake.user_name()[:20]
    return {
        "email": f"{local}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}",
        "name": fake.name()[:100],
        "phone": fake.numerify("501-###-####"),
    }


def auth_ref() -> str:
    """Generate a processor-style order reference like 'LT-1A2B3C4D5E6F'."""
    return f"LT-{uuid.uuid4().hex[:12].upper()}"


def quantity() -> int:
    return random.choices([1, 2, 3, 4], weights=[50, 30, 15, 5])[0]


def coupon_code() -> str | None:
    return random.choice(COUPON_CODES)


def quote_data(variant_id: str, zip_code: str, coupon: str | None = None) -> dict:
    """Generate a QuoteCheckoutRequest payload."""
    payload = {"variant_id": variant_id, "quantity": quantity(), "zip_code": zip_code}
    if coupon:
        payload["coupon_code"] = coupon
    return payload


def commit_data(
    variant_id: str,
    quantity: int,
    service_id: str,
    reference: str,
    total: str,
    address: dict,
    coupon: str | None = None,
) -> dict:
    """Generate a CommitCheckoutRequest payload for a captured payment."""
    payload = {
        "variant_id": variant_id,
        "quantity": quantity,
        "shipping_service_id": service_id,
        "auth_ref": reference,
        "captured_amount": total,
        "customer": customer(),
        "destination": address,
    }
    if coupon:
        payload["coupon_code"] = coupon
    return payload
