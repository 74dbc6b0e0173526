"""Tax estimator port (abstract interface)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TaxQuote:
    """Tax owed on a taxable amount. ``reason`` is for receipts only."""

    taxable_amount: Decimal
    rate: Decimal
    tax: Decimal
    jurisdiction: str | None
    reason: str


class TaxEstimator(ABC):
    @abstractmethod
    def estimate(self, taxable_amount: Decimal, jurisdiction: str) -> TaxQuote:
        """Compute tax for a jurisdiction where the merchant has nexus."""
        ...
