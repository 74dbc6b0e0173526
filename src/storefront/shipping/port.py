"""Rate estimator port (abstract interface).

Adapters turn an origin/destination pair and a package into a list of
priced carrier services. Any failure (timeout, transport error, malformed
response) is raised; the resolver decides how to degrade.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PackageSpec:
    """Weight in pounds, dimensions in inches."""

    weight_lb: Decimal
    length: int
    width: int
    height: int

    @property
    def dims_key(self) -> str:
        return f"{self.width}x{self.length}x{self.height}"


@dataclass(frozen=True)
class RateOption:
    service_id: str
    name: str
    cost: Decimal
    eta: str


class RateEstimator(ABC):
    """Abstract carrier rate interface."""

    @abstractmethod
    def estimate(self, origin_zip: str, dest_zip: str, package: PackageSpec) -> list[RateOption]:
        """Return the carrier's priced services for the package."""
        ...
