"""USPS rate estimator adapter.

Uses the USPS Web Tools v3 pricing API with an OAuth client-credentials
token. One pricing request per mail class; classes that fail are skipped,
and the call fails only when no class could be priced.
"""

import time
from decimal import Decimal, InvalidOperation

import requests
import structlog

from storefront.checkout.errors import UpstreamUnavailable
from storefront.shipping.port import PackageSpec, RateEstimator, RateOption

logger = structlog.get_logger(__name__)

PRODUCTION_BASE_URL = "https://apis.usps.com"
TESTING_BASE_URL = "https://apis-tem.usps.com"

MAIL_CLASSES = (
    ("USPS_GROUND_ADVANTAGE", "GROUND_ADVANTAGE", "Ground Advantage", "2-5 business days"),
    ("PRIORITY_MAIL", "PRIORITY_MAIL", "Priority Mail", "1-3 business days"),
    ("PRIORITY_MAIL_EXPRESS", "PRIORITY_MAIL_EXPRESS", "Priority Express", "1-2 business days"),
)

# Refresh the token this long before USPS says it expires
_TOKEN_REFRESH_MARGIN = 300


class UspsRateEstimator(RateEstimator):
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str = PRODUCTION_BASE_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._token: str | None = None
        self._token_expires_at: float = 0.0

    def _access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        try:
            response = self.session.post(
                f"{self.base_url}/oauth2/v3/token",
                json={
                    "grant_type": "client_credentials",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
            token = payload["access_token"]
            expires_in = int(payload.get("expires_in", 3600))
        except (requests.RequestException, KeyError, ValueError) as exc:
            raise UpstreamUnavailable("USPS OAuth", str(exc)) from exc

        self._token = token
        self._token_expires_at = time.monotonic() + max(expires_in - _TOKEN_REFRESH_MARGIN, 0)
        return self._token

    def _price(self, token: str, mail_class: str, origin_zip: str, dest_zip: str, package: PackageSpec) -> Decimal:
        response = self.session.post(
            f"{self.base_url}/prices/v3/base-rates/search",
            headers={"Authorization": f"Bearer {token}"},
            json={
                "originZIPCode": origin_zip,
                "destinationZIPCode": dest_zip[:5],
                "weight": float(package.weight_lb),
                "length": package.length,
                "width": package.width,
                "height": package.height,
                "mailClass": mail_class,
                "processingCategory": "MACHINABLE",
                "rateIndicator": "SP",
                "destinationEntryFacilityType": "NONE",
                "priceType": "RETAIL",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return Decimal(str(response.json()["totalBasePrice"]))

    def estimate(self, origin_zip: str, dest_zip: str, package: PackageSpec) -> list[RateOption]:
        token = self._access_token()

        options = []
        for mail_class, service_id, name, eta in MAIL_CLASSES:
            try:
                cost = self._price(token, mail_class, origin_zip, dest_zip, package)
            except (requests.RequestException, KeyError, ValueError, InvalidOperation) as exc:
                logger.warning("USPS pricing failed for mail class", mail_class=mail_class, error=str(exc))
                continue
            options.append(RateOption(service_id=service_id, name=name, cost=cost, eta=eta))

        if not options:
            raise UpstreamUnavailable("USPS pricing", "no mail class could be priced")
        return options
