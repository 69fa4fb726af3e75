from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Optional


class BaseExchangeRateProvider(ABC):
    @abstractmethod
    def get_latest_rates(self, base_currency: str = "USD") -> Optional[Dict[str, Decimal]]:
        pass


class BaseExchangeRateCache(ABC):
    @abstractmethod
    def get(self) -> Dict[str, Decimal]:
        pass

    @abstractmethod
    def refresh(self) -> Dict[str, Decimal]:
        pass


class DetailLookupStrategy(ABC):
    """One way of resolving a PayPal identifier into its detail payload."""

    name: str = ""

    @abstractmethod
    def lookup(self, client, transaction_id: str) -> dict:
        """Return the detail payload, or raise FetchError."""
        pass
