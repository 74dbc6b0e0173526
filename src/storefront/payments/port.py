"""Payment verifier port (abstract interface).

The processor authorizes and captures out of band. At commit time the
verifier reports how much was actually captured for an authorization
reference so it can be compared with the server-side total.

Adapters must keep two failures apart:
- ``UpstreamUnavailable`` when the processor cannot be reached in time
- ``PaymentRejected`` when the processor answers that nothing was captured
"""

from abc import ABC, abstractmethod
from decimal import Decimal


class PaymentVerifier(ABC):
    @abstractmethod
    def captured_amount(self, auth_ref: str) -> Decimal:
        """Amount captured for ``auth_ref``, in dollars."""
        ...
