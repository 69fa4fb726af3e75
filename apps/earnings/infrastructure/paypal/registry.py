"""
Lookup Registry - Maps lookup names to strategy classes.
The order of DEFAULT_LOOKUP_ORDER is the order in which ids are tried.
"""

from apps.earnings.domain.interfaces import DetailLookupStrategy
from apps.earnings.infrastructure.paypal.lookups import CaptureLookup, OrderLookup, SaleLookup


# Registry: Maps lookup name to the corresponding strategy class
LOOKUP_REGISTRY: dict[str, type[DetailLookupStrategy]] = {
    CaptureLookup.name: CaptureLookup,
    OrderLookup.name: OrderLookup,
    SaleLookup.name: SaleLookup,
}

# Capture first: it holds the most detailed financial breakdown
DEFAULT_LOOKUP_ORDER = ("capture", "order", "sale")


def get_lookup_strategies_ordered(names=DEFAULT_LOOKUP_ORDER) -> list[DetailLookupStrategy]:
    """
    Instantiate the lookup strategies in the order they should be tried.

    Raises:
        KeyError: if a name is not registered
    """
    return [LOOKUP_REGISTRY[name]() for name in names]
