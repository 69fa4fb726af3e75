"""
Static provider used as the fallback table and for offline development.
"""

from decimal import Decimal
from typing import Dict, Optional

from apps.earnings.domain.interfaces import BaseExchangeRateProvider


# Units per USD, used whenever the live provider is unreachable
FALLBACK_RATES: Dict[str, Decimal] = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "BRL": Decimal("5.0"),
}


class StaticRatesProvider(BaseExchangeRateProvider):
    """
    Provider that always answers with a fixed USD-based table.
    Useful for:
    - Testing without external API calls
    - Development without network access
    """

    def __init__(self, rates: Optional[Dict[str, Decimal]] = None):
        self.rates = dict(rates if rates is not None else FALLBACK_RATES)

    def get_latest_rates(self, base_currency: str = "USD") -> Optional[Dict[str, Decimal]]:
        base_rate = self.rates.get(base_currency)
        if not base_rate:
            return None

        # Rebase the table when asked for something other than USD
        return {code: rate / base_rate for code, rate in self.rates.items()}
