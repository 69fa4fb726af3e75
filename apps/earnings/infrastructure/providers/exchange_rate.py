import logging
from decimal import Decimal
from typing import Dict, Optional

import requests

from core.settings import EXCHANGE_RATES_URL
from apps.earnings.domain.interfaces import BaseExchangeRateProvider

logger = logging.getLogger(__name__)


class ExchangeRateApiProvider(BaseExchangeRateProvider):
    """
    ExchangeRate-API provider.
    Uses the public /latest endpoint, no API key required.
    """

    def get_latest_rates(self, base_currency: str = "USD") -> Optional[Dict[str, Decimal]]:
        """
        Fetch the latest rates for every currency against `base_currency`.

        Args:
            base_currency: Base currency code (e.g. USD)

        Returns:
            Mapping of currency code to units per base currency, or None if error occurs
        """
        if not EXCHANGE_RATES_URL:
            logger.error("EXCHANGE_RATES_URL is not configured. Cannot fetch exchange rates.")
            return None

        # Format: https://api.exchangerate-api.com/v4/latest/USD
        url = f"{EXCHANGE_RATES_URL}/{base_currency}"

        try:
            response = requests.get(url, timeout=10)
            response.raise_for_status()
            data = response.json()

            # Response format: {"base": "USD", "rates": {"EUR": 0.92, ...}}
            return {code: Decimal(str(rate)) for code, rate in data["rates"].items()}

        except requests.exceptions.Timeout:
            logger.error(f"Timeout calling ExchangeRate-API for base {base_currency}")
            return None
        except requests.exceptions.HTTPError as e:
            logger.error(f"HTTP error from ExchangeRate-API: {e}")
            return None
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Invalid response from ExchangeRate-API: {e}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"Error calling ExchangeRate-API: {e}")
            return None
