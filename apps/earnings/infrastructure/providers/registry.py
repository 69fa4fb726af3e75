"""
Provider Registry - Maps provider names to adapter classes.
EXCHANGE_RATES_PROVIDER selects which one feeds the rate cache.
"""

import logging

from apps.earnings.domain.interfaces import BaseExchangeRateProvider
from apps.earnings.infrastructure.providers.exchange_rate import ExchangeRateApiProvider
from apps.earnings.infrastructure.providers.static import StaticRatesProvider

logger = logging.getLogger(__name__)


class ProviderName:
    EXCHANGE_RATE_API = "exchange_rate_api"
    STATIC = "static"


# Registry: Maps provider name to the corresponding adapter class
PROVIDER_REGISTRY: dict[str, type[BaseExchangeRateProvider]] = {
    ProviderName.EXCHANGE_RATE_API: ExchangeRateApiProvider,
    ProviderName.STATIC: StaticRatesProvider,
}


def get_provider_instance(provider_name: str) -> BaseExchangeRateProvider | None:
    """
    Get an instance of a provider by its name.

    Args:
        provider_name: One of the ProviderName values

    Returns:
        Instance of the provider adapter, or None if not found
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)

    if provider_class is None:
        logger.error(f"Provider '{provider_name}' not found in registry")
        return None

    return provider_class()
