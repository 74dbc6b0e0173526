"""Seed a running Storefront with its starter catalogue and coupon.

Creates two products with three sizes each and the ``family`` 25% coupon
through the admin API, so it works against any persistence the server
is configured with (including the in-memory default).

Prerequisites:
    Server running: uvicorn app:app --app-dir src --port 8000

Usage:
    python scripts/seed.py
    python scripts/seed.py --base-url http://localhost:8000 --admin-key change-me --on-hand 500
"""

import argparse
import os
import sys

import requests

CATALOGUE = [
    (
        "Tamarind_Sweets",
        "Tangy tamarind candy, hand rolled in sugar",
        [("4oz", 4, "6.99"), ("8oz", 8, "13.98"), ("16oz", 16, "27.96")],
    ),
    (
        "Quantum_Mango",
        "Spiced green mango chutney",
        [("4oz", 4, "8.99"), ("8oz", 8, "17.98"), ("16oz", 16, "35.96")],
    ),
]

COUPONS = [
    {"code": "family", "kind": "percentage", "value": "25", "usage_limit": -1, "description": "Friends and family"},
]


def _post(session: requests.Session, url: str, payload: dict) -> dict:
    response = session.post(url, json=payload, timeout=10)
    if response.status_code >= 400:
        print(f"  [ERROR] POST {url}: {response.status_code} {response.text[:200]}")
        response.raise_for_status()
    return response.json()


def main():
    parser = argparse.ArgumentParser(description="Seed the storefront catalogue and coupons")
    parser.add_argument("--base-url", default="http://localhost:8000", help="Storefront API (default: %(default)s)")
    parser.add_argument(
        "--admin-key",
        default=os.environ.get("STOREFRONT_ADMIN_KEY", "change-me"),
        help="Value for the X-Admin-Key header (default: $STOREFRONT_ADMIN_KEY)",
    )
    parser.add_argument("--on-hand", type=int, default=100, help="Starting stock per variant (default: 100)")
    args = parser.parse_args()

    session = requests.Session()
    session.headers["X-Admin-Key"] = args.admin_key
    admin = f"{args.base_url.rstrip('/')}/admin"

    print(f"\n{'='*60}")
    print("  Storefront Seed")
    print(f"{'='*60}")
    print(f"  Target:   {args.base_url}")
    print(f"  On hand:  {args.on_hand} per variant")
    print(f"{'='*60}\n")

    try:
        for name, description, variants in CATALOGUE:
            product_id = _post(session, f"{admin}/products", {"name": name, "description": description})["product_id"]
            print(f"  Product  {name:<16} {product_id}")
            for size, size_oz, price in variants:
                variant_id = _post(
                    session,
                    f"{admin}/products/{product_id}/variants",
                    {"size": size, "size_oz": size_oz, "price": price, "on_hand": args.on_hand},
                )["variant_id"]
                print(f"    Variant {size:<5} ${price:>6}  {variant_id}")

        for coupon in COUPONS:
            _post(session, f"{admin}/coupons", coupon)
            print(f"  Coupon   {coupon['code']} ({coupon['value']}% off)")
    except requests.RequestException as exc:
        print(f"\n  Seeding failed: {exc}\n")
        sys.exit(1)

    print("\n  Done.\n")


if __name__ == "__main__":
    main()
