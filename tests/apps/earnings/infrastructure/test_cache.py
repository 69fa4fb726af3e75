import pytest
from decimal import Decimal
from unittest.mock import MagicMock

from apps.earnings.infrastructure.cache import InMemoryExchangeRateCache
from apps.earnings.infrastructure.providers.static import FALLBACK_RATES


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider():
    provider = MagicMock()
    provider.get_latest_rates.return_value = {"USD": Decimal("1"), "EUR": Decimal("0.90")}
    return provider


@pytest.fixture
def cache(provider, clock):
    return InMemoryExchangeRateCache(provider, ttl_seconds=3600, clock=clock)


class TestInMemoryExchangeRateCache:
    """Tests for the TTL exchange-rate cache."""

    def test_first_get_fetches(self, cache, provider):
        assert cache.get() == {"USD": Decimal("1"), "EUR": Decimal("0.90")}
        provider.get_latest_rates.assert_called_once_with("USD")

    def test_fresh_table_is_reused(self, cache, provider, clock):
        cache.get()
        clock.now += 3599
        cache.get()

        provider.get_latest_rates.assert_called_once()

    def test_stale_table_is_refetched(self, cache, provider, clock):
        cache.get()
        clock.now += 3600
        provider.get_latest_rates.return_value = {"USD": Decimal("1"), "EUR": Decimal("0.95")}

        assert cache.get()["EUR"] == Decimal("0.95")
        assert provider.get_latest_rates.call_count == 2

    def test_refresh_ignores_ttl(self, cache, provider):
        cache.get()
        cache.refresh()

        assert provider.get_latest_rates.call_count == 2

    def test_failure_without_previous_table_uses_fallback(self, cache, provider):
        provider.get_latest_rates.return_value = None

        assert cache.get() == FALLBACK_RATES

    def test_fallback_is_not_cached(self, cache, provider):
        provider.get_latest_rates.return_value = None
        cache.get()
        provider.get_latest_rates.return_value = {"USD": Decimal("1")}

        assert cache.get() == {"USD": Decimal("1")}
        assert provider.get_latest_rates.call_count == 2

    def test_failure_keeps_previous_table(self, cache, provider, clock):
        cache.get()
        clock.now += 7200
        provider.get_latest_rates.return_value = None

        assert cache.get() == {"USD": Decimal("1"), "EUR": Decimal("0.90")}

    def test_custom_fallback(self, clock):
        cache = InMemoryExchangeRateCache(None, fallback_rates={"USD": Decimal("1")}, clock=clock)

        assert cache.get() == {"USD": Decimal("1")}
