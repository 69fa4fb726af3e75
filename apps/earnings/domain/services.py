"""
Domain services - Core business logic.
Turns raw PayPal transactions into the USD earnings dashboard and
resolves transaction ids through an ordered chain of lookups.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from apps.earnings.domain.exceptions import FetchError, NotFoundError
from apps.earnings.domain.interfaces import DetailLookupStrategy
from apps.earnings.domain.models import (
    NOT_AVAILABLE,
    REPORT_CURRENCY,
    CountrySales,
    DailyEarnings,
    DashboardSummary,
    DateRange,
    EarningsReport,
    TransactionRecord,
)

logger = logging.getLogger(__name__)

# PayPal refuses reporting windows longer than 31 days
MAX_CHUNK_DAYS = 31

# Currency conversion spread charged on non-USD payments
CONVERSION_SPREAD = Decimal("0.045")

ZERO = Decimal("0")


def resolve_date_range(date_range: DateRange | str, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Resolve a named range into inclusive (start_date, end_date).

    Raises:
        ValueError: if the range name is unknown
    """
    date_range = DateRange(date_range)
    if today is None:
        today = date.today()

    if date_range == DateRange.LAST_30_DAYS:
        return today - timedelta(days=30), today
    if date_range == DateRange.LAST_90_DAYS:
        return today - timedelta(days=90), today
    if date_range == DateRange.YEAR_TO_DATE:
        return date(today.year, 1, 1), today
    return date(today.year, 1, 1), date(today.year, 12, 31)


def split_into_chunks(start_date: date, end_date: date, max_days: int = MAX_CHUNK_DAYS) -> List[Tuple[date, date]]:
    """
    Partition [start_date, end_date] into consecutive inclusive windows
    of at most `max_days` calendar days.

    Example:
        >>> split_into_chunks(datetime.date(2024, 1, 1), datetime.date(2024, 2, 1))
        [(datetime.date(2024, 1, 1), datetime.date(2024, 1, 31)), (datetime.date(2024, 2, 1), datetime.date(2024, 2, 1))]
    """
    chunks = []
    chunk_start = start_date
    while chunk_start <= end_date:
        chunk_end = min(chunk_start + timedelta(days=max_days - 1), end_date)
        chunks.append((chunk_start, chunk_end))
        chunk_start = chunk_end + timedelta(days=1)
    return chunks


def iter_days(start_date: date, end_date: date) -> Iterable[date]:
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


class EarningsAggregator:
    """
    Folds PayPal transactions into a USD earnings report.

    Rules:
    1. Entries whose customer name is the internal-transfer sentinel are dropped
    2. Non-USD amounts are divided by the USD rate, minus the conversion spread
    3. Only strictly positive payments count towards totals and breakdowns
    4. The daily series covers every day of the range, zero-filled
    """

    def __init__(self, sentinel: str = NOT_AVAILABLE, spread: Decimal = CONVERSION_SPREAD):
        self.sentinel = sentinel
        self.spread = spread

    def to_usd(self, amount: Decimal, currency: str, rates: Dict[str, Decimal]) -> Optional[Decimal]:
        """
        Convert an amount to USD. Returns None when the currency has no rate.
        """
        if currency == REPORT_CURRENCY:
            return amount

        rate = rates.get(currency)
        if not rate:
            return None

        return amount / rate * (1 - self.spread)

    def aggregate(
        self,
        entries: Sequence[dict],
        rates: Dict[str, Decimal],
        start_date: date,
        end_date: date,
        date_range: Optional[DateRange] = None,
    ) -> EarningsReport:
        """
        Build the report for raw `transaction_details` entries.

        Args:
            entries: Raw PayPal entries, merged from every fetched chunk
            rates: Units of each currency per USD
            start_date: First day of the dashboard range
            end_date: Last day of the dashboard range (inclusive)

        Returns:
            EarningsReport with every monetary aggregate in USD
        """
        gross_total = ZERO
        fee_total = ZERO
        net_total = ZERO
        transaction_count = 0
        skipped = 0

        daily: Dict[date, Decimal] = defaultdict(lambda: ZERO)
        by_country: Dict[str, Dict] = defaultdict(lambda: {"amount": ZERO, "count": 0})
        transactions: List[TransactionRecord] = []
        missing_rates = set()

        for entry in entries:
            record = TransactionRecord.from_paypal(entry)

            if record.customer_name == self.sentinel:
                skipped += 1
                logger.debug(f"Skipping {record.id}: payer name is '{self.sentinel}' (internal transfer)")
                continue

            transactions.append(record)

            if record.gross <= 0:
                continue

            gross_usd = self.to_usd(record.gross, record.currency, rates)
            fee_usd = self.to_usd(record.fee, record.currency, rates)
            if gross_usd is None or fee_usd is None:
                missing_rates.add(record.currency)
                gross_usd, fee_usd = record.gross, record.fee

            gross_total += gross_usd
            fee_total += abs(fee_usd)
            net_total += gross_usd + fee_usd
            transaction_count += 1

            daily[record.day] += gross_usd
            by_country[record.country_code]["amount"] += gross_usd
            by_country[record.country_code]["count"] += 1

        if missing_rates:
            logger.warning(f"No exchange rate for {sorted(missing_rates)}, amounts kept unconverted")

        chart_data = [DailyEarnings(date=day, amount=daily.get(day, ZERO)) for day in iter_days(start_date, end_date)]

        sales_by_country = sorted(
            (
                CountrySales(country_code=code, amount=bucket["amount"], count=bucket["count"])
                for code, bucket in by_country.items()
            ),
            key=lambda country: country.amount,
            reverse=True,
        )

        transactions.sort(key=lambda tx: tx.timestamp, reverse=True)

        avg_ticket = gross_total / transaction_count if transaction_count > 0 else ZERO

        return EarningsReport(
            date_range=date_range,
            start_date=start_date,
            end_date=end_date,
            summary=DashboardSummary(
                gross_total=gross_total,
                fee_total=fee_total,
                net_total=net_total,
                transaction_count=transaction_count,
                avg_ticket=avg_ticket,
            ),
            chart_data=chart_data,
            sales_by_country=sales_by_country,
            transactions=transactions,
            skipped_count=skipped,
        )


class OrderDetailResolver:
    """
    Resolves an identifier of unknown kind (capture, order or legacy sale).

    Strategies are tried in order; the first one that succeeds wins.
    A strategy signals "not mine" by raising FetchError with an HTTP status.
    A network failure aborts the chain at once.
    """

    def __init__(self, strategies: Sequence[DetailLookupStrategy]):
        self.strategies = list(strategies)

    def resolve(self, client, transaction_id: str) -> dict:
        """
        Raises:
            NotFoundError: with the HTTP status of every attempt
            FetchError: when PayPal is unreachable
        """
        attempts: Dict[str, int] = {}

        for strategy in self.strategies:
            try:
                details = strategy.lookup(client, transaction_id)
            except FetchError as e:
                if e.is_network_error:
                    raise
                attempts[strategy.name] = e.status_code
                logger.warning(f"{strategy.name} lookup failed for {transaction_id} ({e.status_code}), trying next...")
                continue

            logger.info(f"Resolved {transaction_id} as {strategy.name}")
            return details

        error = NotFoundError(transaction_id, attempts)
        logger.error(str(error))
        raise error
