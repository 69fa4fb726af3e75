from apps.earnings.infrastructure.providers.exchange_rate import ExchangeRateApiProvider
from apps.earnings.infrastructure.providers.registry import (
    PROVIDER_REGISTRY,
    ProviderName,
    get_provider_instance,
)
from apps.earnings.infrastructure.providers.static import StaticRatesProvider


class TestProviderRegistry:
    """Tests for provider registry functions."""

    def test_provider_registry_contains_providers(self):
        assert ProviderName.EXCHANGE_RATE_API in PROVIDER_REGISTRY
        assert ProviderName.STATIC in PROVIDER_REGISTRY

    def test_get_provider_instance_exchange_rate_api(self):
        instance = get_provider_instance(ProviderName.EXCHANGE_RATE_API)

        assert isinstance(instance, ExchangeRateApiProvider)

    def test_get_provider_instance_static(self):
        instance = get_provider_instance(ProviderName.STATIC)

        assert isinstance(instance, StaticRatesProvider)

    def test_get_provider_instance_invalid(self):
        assert get_provider_instance("invalid_provider") is None
