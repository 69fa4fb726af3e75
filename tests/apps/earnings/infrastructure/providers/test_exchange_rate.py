import pytest
import requests
from unittest.mock import Mock
from decimal import Decimal

from apps.earnings.infrastructure.providers.exchange_rate import ExchangeRateApiProvider


@pytest.fixture
def provider():
    return ExchangeRateApiProvider()


@pytest.fixture
def mock_requests_get(mocker):
    return mocker.patch("requests.get")


def test_get_latest_rates_success(provider, mock_requests_get):
    """
    Test that get_latest_rates returns Decimal rates keyed by currency code.
    """
    mock_response = Mock()
    mock_response.json.return_value = {
        "base": "USD",
        "date": "2024-05-21",
        "rates": {"USD": 1, "EUR": 0.92, "BRL": 5.13},
    }
    mock_response.raise_for_status.return_value = None
    mock_requests_get.return_value = mock_response

    rates = provider.get_latest_rates("USD")

    assert rates == {"USD": Decimal("1"), "EUR": Decimal("0.92"), "BRL": Decimal("5.13")}
    url = mock_requests_get.call_args[0][0]
    assert url.endswith("/latest/USD")


def test_get_latest_rates_http_error(provider, mock_requests_get):
    mock_response = Mock()
    mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("429 Too Many Requests")
    mock_requests_get.return_value = mock_response

    assert provider.get_latest_rates() is None


def test_get_latest_rates_timeout(provider, mock_requests_get):
    mock_requests_get.side_effect = requests.exceptions.Timeout()

    assert provider.get_latest_rates() is None


def test_get_latest_rates_connection_error(provider, mock_requests_get):
    mock_requests_get.side_effect = requests.exceptions.ConnectionError("offline")

    assert provider.get_latest_rates() is None


def test_get_latest_rates_missing_key(provider, mock_requests_get):
    """
    Test that a body without `rates` is reported as a failure instead of raising.
    """
    mock_response = Mock()
    mock_response.json.return_value = {"result": "error"}
    mock_response.raise_for_status.return_value = None
    mock_requests_get.return_value = mock_response

    assert provider.get_latest_rates() is None


def test_get_latest_rates_not_configured(provider, mock_requests_get, mocker):
    mocker.patch("apps.earnings.infrastructure.providers.exchange_rate.EXCHANGE_RATES_URL", "")

    assert provider.get_latest_rates() is None
    mock_requests_get.assert_not_called()
