import pytest
from io import StringIO
from decimal import Decimal
from datetime import date
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError

from apps.earnings.domain.exceptions import FetchError
from apps.earnings.domain.models import CountrySales, DashboardSummary, DateRange, EarningsReport


@pytest.fixture
def report():
    return EarningsReport(
        date_range=DateRange.LAST_90_DAYS,
        start_date=date(2024, 2, 21),
        end_date=date(2024, 5, 21),
        summary=DashboardSummary(
            gross_total=Decimal("203.8043"),
            fee_total=Decimal("6.5"),
            net_total=Decimal("197.3043"),
            transaction_count=2,
            avg_ticket=Decimal("101.90215"),
        ),
        sales_by_country=[CountrySales(country_code="DE", amount=Decimal("103.8043"), count=1)],
        skipped_count=1,
    )


@patch('apps.earnings.management.commands.earnings_report.get_international_earnings')
def test_sync_summary(mock_get_earnings, report):
    mock_get_earnings.return_value = report
    out = StringIO()

    call_command('earnings_report', '--range', '90d', '--sync', stdout=out)

    output = out.getvalue()
    assert "gross 203.80 USD" in output
    assert "DE: 103.80 (1)" in output
    assert "Skipped 1 internal transfer(s)" in output
    mock_get_earnings.assert_called_once_with('90d')


@patch('apps.earnings.management.commands.earnings_report.get_international_earnings')
def test_sync_json(mock_get_earnings, report):
    mock_get_earnings.return_value = report
    out = StringIO()

    call_command('earnings_report', '--sync', '--json', stdout=out)

    assert '"gross_total": "203.80"' in out.getvalue()


@patch('apps.earnings.management.commands.earnings_report.get_international_earnings')
def test_sync_failure(mock_get_earnings):
    mock_get_earnings.side_effect = FetchError(500, "boom", endpoint="/v1/reporting/transactions")

    with pytest.raises(CommandError):
        call_command('earnings_report', '--sync', stdout=StringIO())


@patch('apps.earnings.management.commands.earnings_report.build_earnings_report')
def test_dispatch_task(mock_task):
    mock_task.delay.return_value.id = "task-123"
    out = StringIO()

    call_command('earnings_report', '--range', 'ytd', stdout=out)

    mock_task.delay.assert_called_once_with('ytd')
    assert "task-123" in out.getvalue()
