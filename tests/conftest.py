import pytest
from decimal import Decimal


@pytest.fixture
def make_entry():
    """Factory for raw PayPal `transaction_details` entries."""

    def _make_entry(
        transaction_id="TX-1",
        amount="100.00",
        currency="USD",
        fee="-3.50",
        initiated="2024-05-21T10:00:00+0000",
        name="Jane Doe",
        email="jane@example.com",
        country="US",
        shipping_country=None,
        status="S",
        invoice_id=None,
    ):
        info = {
            "transaction_id": transaction_id,
            "transaction_initiation_date": initiated,
            "transaction_status": status,
            "transaction_amount": {"currency_code": currency, "value": amount},
            "fee_amount": {"currency_code": currency, "value": fee},
        }
        if invoice_id:
            info["invoice_id"] = invoice_id

        payer = {"email_address": email}
        if name is not None:
            payer["payer_name"] = {"alternate_full_name": name}
        if country is not None:
            payer["country_code"] = country

        entry = {"transaction_info": info, "payer_info": payer}
        if shipping_country is not None:
            entry["shipping_info"] = {"address": {"country_code": shipping_country}}
        return entry

    return _make_entry


@pytest.fixture
def usd_rates():
    return {
        "USD": Decimal("1"),
        "EUR": Decimal("0.92"),
        "GBP": Decimal("0.79"),
        "BRL": Decimal("5.0"),
    }
