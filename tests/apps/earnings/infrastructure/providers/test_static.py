from decimal import Decimal

from apps.earnings.infrastructure.providers.static import FALLBACK_RATES, StaticRatesProvider


def test_fallback_table_covers_required_currencies():
    assert FALLBACK_RATES["USD"] == Decimal("1")
    assert {"USD", "EUR", "GBP", "BRL"} <= set(FALLBACK_RATES)


def test_returns_fallback_table_by_default():
    assert StaticRatesProvider().get_latest_rates("USD") == FALLBACK_RATES


def test_custom_table():
    provider = StaticRatesProvider({"USD": Decimal("1"), "JPY": Decimal("150")})

    assert provider.get_latest_rates() == {"USD": Decimal("1"), "JPY": Decimal("150")}


def test_rebases_on_other_currency():
    provider = StaticRatesProvider({"USD": Decimal("1"), "BRL": Decimal("5")})

    rates = provider.get_latest_rates("BRL")

    assert rates["BRL"] == Decimal("1")
    assert rates["USD"] == Decimal("0.2")


def test_unsupported_base():
    assert StaticRatesProvider().get_latest_rates("XXX") is None
