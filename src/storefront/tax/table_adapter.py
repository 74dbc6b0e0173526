"""Static per-state sales tax table."""

from decimal import Decimal

from storefront.shared.money import ZERO, to_money
from storefront.tax.port import TaxEstimator, TaxQuote

STATE_TAX_RATES = {
    "AL": Decimal("0.04"),
    "AR": Decimal("0.045"),
    "AZ": Decimal("0.056"),
    "CA": Decimal("0.075"),
    "CO": Decimal("0.029"),
    "CT": Decimal("0.0635"),
    "FL": Decimal("0.06"),
    "GA": Decimal("0.04"),
    "IL": Decimal("0.0625"),
    "IN": Decimal("0.07"),
    "KS": Decimal("0.065"),
    "LA": Decimal("0.045"),
    "MA": Decimal("0.0625"),
    "MO": Decimal("0.04225"),
    "MS": Decimal("0.07"),
    "NC": Decimal("0.0475"),
    "NY": Decimal("0.08"),
    "OH": Decimal("0.0575"),
    "OK": Decimal("0.045"),
    "SC": Decimal("0.06"),
    "TN": Decimal("0.07"),
    "TX": Decimal("0.0625"),
    "VA": Decimal("0.043"),
    "WA": Decimal("0.065"),
    "WI": Decimal("0.05"),
    "WV": Decimal("0.06"),
}


def describe_rate(jurisdiction: str, rate: Decimal) -> str:
    return f"{jurisdiction} sales tax ({rate * 100:.3f}%)"


class TableTaxEstimator(TaxEstimator):
    def __init__(self, rates: dict[str, Decimal] | None = None) -> None:
        self.rates = dict(STATE_TAX_RATES if rates is None else rates)

    def rate_for(self, jurisdiction: str) -> Decimal | None:
        return self.rates.get(jurisdiction)

    def estimate(self, taxable_amount: Decimal, jurisdiction: str) -> TaxQuote:
        taxable_amount = to_money(taxable_amount)
        rate = self.rate_for(jurisdiction)
        if rate is None:
            return TaxQuote(
                taxable_amount=taxable_amount,
                rate=ZERO,
                tax=ZERO,
                jurisdiction=jurisdiction,
                reason=f"No tax rate configured for {jurisdiction}",
            )
        return TaxQuote(
            taxable_amount=taxable_amount,
            rate=rate,
            tax=to_money(taxable_amount * rate),
            jurisdiction=jurisdiction,
            reason=describe_rate(jurisdiction, rate),
        )
