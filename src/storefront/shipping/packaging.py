"""Package weight and box selection for a line item."""

from decimal import Decimal

from storefront.shipping.port import PackageSpec

PACKAGING_ALLOWANCE_LB = Decimal("0.5")
DEFAULT_UNIT_WEIGHT_LB = Decimal("1.0")

UNIT_WEIGHTS_LB = {
    "4oz": Decimal("0.25"),
    "small": Decimal("0.5"),
    "8oz": Decimal("0.5"),
    "medium": Decimal("1.0"),
    "16oz": Decimal("1.0"),
    "large": Decimal("1.5"),
    "24oz": Decimal("1.5"),
}

# (length, width, height) in inches, by quantity tier
_BOX_SINGLE = (9, 6, 4)
_BOX_DOUBLE = (10, 8, 5)
_BOX_BULK = (12, 10, 6)


def unit_weight(size_label: str | None, size_oz: int | None = None) -> Decimal:
    """Shipping weight of one unit, in pounds."""
    key = (size_label or "").strip().lower().replace(" ", "")
    if key in UNIT_WEIGHTS_LB:
        return UNIT_WEIGHTS_LB[key]
    if size_oz:
        return Decimal(size_oz) / Decimal(16)
    return DEFAULT_UNIT_WEIGHT_LB


def box_for(quantity: int) -> tuple[int, int, int]:
    if quantity <= 1:
        return _BOX_SINGLE
    if quantity == 2:
        return _BOX_DOUBLE
    return _BOX_BULK


def package_for(size_label: str | None, quantity: int, size_oz: int | None = None) -> PackageSpec:
    weight = unit_weight(size_label, size_oz) * quantity + PACKAGING_ALLOWANCE_LB
    length, width, height = box_for(quantity)
    return PackageSpec(
        weight_lb=weight.quantize(Decimal("0.01")),
        length=length,
        width=width,
        height=height,
    )
