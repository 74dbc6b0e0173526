"""Sales tax resolution.

Taxable amount is the subtotal plus shipping: the merchant's home state
taxes delivery charges along with the goods. Only nexus states are sent
to the estimator; every other destination gets a zero-tax quote with the
reason spelled out. An estimator failure is never treated as zero tax.
"""

from decimal import Decimal

import structlog

from storefront.checkout.errors import UpstreamUnavailable
from storefront.shared.jurisdiction import normalize_state, state_for_zip
from storefront.shared.money import ZERO, to_money
from storefront.tax.port import TaxEstimator, TaxQuote
from storefront.tax.table_adapter import STATE_TAX_RATES

logger = structlog.get_logger(__name__)


def taxable_amount(subtotal, shipping_cost) -> Decimal:
    return to_money(to_money(subtotal) + to_money(shipping_cost))


class TaxResolver:
    def __init__(self, estimator: TaxEstimator, nexus_states=frozenset({"AR"})) -> None:
        self.estimator = estimator
        self.nexus_states = frozenset(nexus_states)

    def jurisdiction_for(self, dest_zip: str | None, state: str | None = None) -> str | None:
        return normalize_state(state) or state_for_zip(dest_zip)

    def has_nexus(self, jurisdiction: str | None) -> bool:
        return jurisdiction in self.nexus_states

    def resolve(self, subtotal, shipping_cost, dest_zip: str | None, state: str | None = None) -> TaxQuote:
        amount = taxable_amount(subtotal, shipping_cost)
        jurisdiction = self.jurisdiction_for(dest_zip, state)

        if jurisdiction is None:
            return TaxQuote(amount, ZERO, ZERO, None, "No shipping state provided")
        if not self.has_nexus(jurisdiction):
            return TaxQuote(amount, ZERO, ZERO, jurisdiction, f"No nexus in {jurisdiction}")

        try:
            quote = self.estimator.estimate(amount, jurisdiction)
        except UpstreamUnavailable:
            raise
        except Exception as exc:
            logger.error("Tax estimator failed", jurisdiction=jurisdiction, error=str(exc))
            raise UpstreamUnavailable("Tax estimator", str(exc)) from exc

        return TaxQuote(
            taxable_amount=amount,
            rate=quote.rate,
            tax=to_money(quote.tax),
            jurisdiction=jurisdiction,
            reason=quote.reason,
        )

    def describe(self, state: str) -> dict:
        """Tax collection summary for a state, for display."""
        jurisdiction = normalize_state(state)
        rate = STATE_TAX_RATES.get(jurisdiction, ZERO)
        nexus = self.has_nexus(jurisdiction)
        return {
            "state": jurisdiction,
            "has_nexus": nexus,
            "rate": rate,
            "percentage": f"{rate * 100:.3f}%",
            "will_collect_tax": nexus and rate > 0,
        }
