"""
Process-wide exchange-rate cache.
Keeps the latest USD table for a coarse TTL to stay under the provider limits.
"""

import logging
import threading
import time
from decimal import Decimal
from typing import Callable, Dict, Optional

from core.settings import EXCHANGE_RATES_CACHE_TTL, EXCHANGE_RATES_PROVIDER
from apps.earnings.domain.interfaces import BaseExchangeRateCache, BaseExchangeRateProvider
from apps.earnings.infrastructure.providers.registry import get_provider_instance
from apps.earnings.infrastructure.providers.static import FALLBACK_RATES

logger = logging.getLogger(__name__)


class InMemoryExchangeRateCache(BaseExchangeRateCache):
    """
    Exchange-rate table cached in memory.

    Fallback strategy on refresh failure:
    1. Keep serving the previously cached table, if any
    2. Otherwise serve the static fallback table
    Neither is stored, so the next call retries the provider.
    """

    def __init__(
        self,
        provider: Optional[BaseExchangeRateProvider],
        ttl_seconds: int = EXCHANGE_RATES_CACHE_TTL,
        fallback_rates: Optional[Dict[str, Decimal]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.provider = provider
        self.ttl_seconds = ttl_seconds
        self.fallback_rates = dict(fallback_rates if fallback_rates is not None else FALLBACK_RATES)
        self.clock = clock
        self._rates: Optional[Dict[str, Decimal]] = None
        self._fetched_at: Optional[float] = None
        self._lock = threading.Lock()

    def _is_fresh(self) -> bool:
        return self._rates is not None and self.clock() - self._fetched_at < self.ttl_seconds

    def get(self) -> Dict[str, Decimal]:
        """Return the cached table, refreshing it when older than the TTL."""
        with self._lock:
            if self._is_fresh():
                return self._rates
            return self._refresh_locked()

    def refresh(self) -> Dict[str, Decimal]:
        """Fetch a fresh table regardless of its age."""
        with self._lock:
            return self._refresh_locked()

    def _refresh_locked(self) -> Dict[str, Decimal]:
        rates = self.provider.get_latest_rates("USD") if self.provider is not None else None

        if rates:
            self._rates = rates
            self._fetched_at = self.clock()
            logger.info(f"Exchange rates refreshed ({len(rates)} currencies)")
            return rates

        if self._rates is not None:
            logger.warning("Exchange rate refresh failed, serving the previous table")
            return self._rates

        logger.warning("Exchange rate refresh failed, serving fallback rates")
        return dict(self.fallback_rates)


exchange_rate_cache = InMemoryExchangeRateCache(get_provider_instance(EXCHANGE_RATES_PROVIDER))
