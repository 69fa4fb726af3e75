import logging
from datetime import date
from typing import Optional

import requests

from core.settings import (
    PAYPAL_ACCESS_TOKEN,
    PAYPAL_BASE_URLS,
    PAYPAL_ENVIRONMENT,
    PAYPAL_REQUEST_TIMEOUT,
)
from apps.earnings.domain.exceptions import ConfigError, FetchError

logger = logging.getLogger(__name__)

TRANSACTION_FIELDS = "transaction_info,payer_info,cart_info,shipping_info"


class PayPalClient:
    """
    Thin synchronous client over the PayPal REST API.
    Every non-2xx answer becomes a FetchError carrying status and body.
    """

    def __init__(self, base_url: str, access_token: str, timeout: int = PAYPAL_REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "PayPalClient":
        """
        Build a client from PAYPAL_* settings.

        Raises:
            ConfigError: if the access token is missing or the environment is unknown
        """
        if not PAYPAL_ACCESS_TOKEN:
            logger.error("PAYPAL_ACCESS_TOKEN is not configured. Cannot call PayPal.")
            raise ConfigError("PayPal Access Token not found in environment variables")

        base_url = PAYPAL_BASE_URLS.get(PAYPAL_ENVIRONMENT)
        if not base_url:
            logger.error(f"Unknown PAYPAL_ENVIRONMENT '{PAYPAL_ENVIRONMENT}'")
            raise ConfigError(
                f"PAYPAL_ENVIRONMENT must be one of {sorted(PAYPAL_BASE_URLS)}, got '{PAYPAL_ENVIRONMENT}'"
            )

        return cls(base_url, PAYPAL_ACCESS_TOKEN)

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def get(self, path: str, params: Optional[dict] = None) -> dict:
        """
        GET a PayPal endpoint and return the decoded JSON body.

        Raises:
            FetchError: on network failures (status_code None), any non-2xx
                status, or a body that is not JSON
        """
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"PayPal GET {path} unreachable: {e}")
            raise FetchError(None, str(e), endpoint=path) from e

        if not response.ok:
            logger.error(f"PayPal GET {path} failed with {response.status_code}: {response.text[:200]}")
            raise FetchError(response.status_code, response.text, endpoint=path)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"PayPal GET {path} returned a non-JSON body: {response.text[:200]}")
            raise FetchError(response.status_code, response.text, endpoint=path) from e

    def list_transactions(self, start_date: date, end_date: date) -> dict:
        """
        Fetch one reporting window (at most 31 days, both days inclusive).
        """
        params = {
            "start_date": f"{start_date.isoformat()}T00:00:00Z",
            "end_date": f"{end_date.isoformat()}T23:59:59Z",
            "fields": TRANSACTION_FIELDS,
        }
        return self.get("/v1/reporting/transactions", params=params)

    def get_capture(self, capture_id: str) -> dict:
        return self.get(f"/v2/payments/captures/{capture_id}")

    def get_order(self, order_id: str) -> dict:
        return self.get(f"/v2/checkout/orders/{order_id}")

    def get_sale(self, sale_id: str) -> dict:
        return self.get(f"/v1/payments/sale/{sale_id}")
