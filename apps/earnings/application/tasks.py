"""
Application entry points and Celery tasks.
"""

import asyncio
import logging
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from celery import shared_task

from core.settings import INTERNAL_TRANSFER_SENTINEL
from apps.earnings.domain.exceptions import FetchError, PayPalError
from apps.earnings.domain.interfaces import BaseExchangeRateCache
from apps.earnings.domain.models import DateRange, EarningsReport
from apps.earnings.domain.services import (
    EarningsAggregator,
    OrderDetailResolver,
    resolve_date_range,
    split_into_chunks,
)
from apps.earnings.infrastructure.cache import exchange_rate_cache
from apps.earnings.infrastructure.paypal.client import PayPalClient
from apps.earnings.infrastructure.paypal.registry import get_lookup_strategies_ordered

logger = logging.getLogger(__name__)


async def fetch_chunk_async(client: PayPalClient, start_date: date, end_date: date) -> List[dict]:
    """
    Fetch one reporting window by running the synchronous client
    in a thread pool via asyncio.to_thread.

    Returns the raw `transaction_details` entries of the window.
    """
    data = await asyncio.to_thread(client.list_transactions, start_date, end_date)
    entries = data.get("transaction_details") or []
    logger.debug(f"Fetched {len(entries)} transactions for {start_date}..{end_date}")
    return entries


async def fetch_transactions(client: PayPalClient, chunks: Sequence[Tuple[date, date]]) -> List[dict]:
    """
    Fetch every window concurrently and merge them once all have resolved.

    The first failing window aborts the whole fetch; no partial result is returned.
    """
    results = await asyncio.gather(
        *(fetch_chunk_async(client, start, end) for start, end in chunks)
    )

    merged: List[dict] = []
    for entries in results:
        merged.extend(entries)
    return merged


def get_international_earnings(
    date_range: DateRange | str = DateRange.LAST_30_DAYS,
    client: Optional[PayPalClient] = None,
    rate_cache: Optional[BaseExchangeRateCache] = None,
    today: Optional[date] = None,
) -> EarningsReport:
    """
    Build the international earnings report for a named date range.

    Args:
        date_range: One of 30d, 90d, ytd, 1y
        client: PayPal client, built from settings when omitted
        rate_cache: Exchange-rate cache, the process-wide one when omitted
        today: Reference day, defaults to date.today()

    Raises:
        ValueError: unknown date range
        ConfigError: PayPal is not configured
        FetchError: a reporting window failed or PayPal is unreachable
        InvalidTransactionError: PayPal returned an entry that cannot be parsed
    """
    date_range = DateRange(date_range)
    start_date, end_date = resolve_date_range(date_range, today)
    chunks = split_into_chunks(start_date, end_date)

    if client is None:
        client = PayPalClient.from_settings()
    if rate_cache is None:
        rate_cache = exchange_rate_cache

    logger.info(f"Fetching PayPal earnings {start_date}..{end_date} in {len(chunks)} chunk(s)")

    try:
        entries = asyncio.run(fetch_transactions(client, chunks))
    except Exception as e:
        logger.error(f"Error fetching PayPal data for range {date_range.value}: {e}")
        raise

    rates = rate_cache.get()

    report = EarningsAggregator(sentinel=INTERNAL_TRANSFER_SENTINEL).aggregate(
        entries, rates, start_date, end_date, date_range=date_range
    )

    logger.info(
        f"Aggregated {report.summary.transaction_count} sales "
        f"({report.skipped_count} internal transfers skipped) for range {date_range.value}"
    )
    return report


def get_order_details(transaction_id: str, client: Optional[PayPalClient] = None) -> dict:
    """
    Resolve a capture, order or legacy sale id into its detail payload.

    Raises:
        ConfigError: PayPal is not configured
        NotFoundError: no lookup strategy recognised the id
        FetchError: PayPal is unreachable
    """
    if client is None:
        client = PayPalClient.from_settings()

    resolver = OrderDetailResolver(get_lookup_strategies_ordered())
    try:
        return resolver.resolve(client, transaction_id)
    except FetchError as e:
        logger.error(f"Error fetching PayPal order details for {transaction_id}: {e}")
        raise


@shared_task(name="build_earnings_report")
def build_earnings_report(date_range: str = DateRange.LAST_30_DAYS.value) -> Dict:
    """
    Build the earnings report in the background.

    Returns:
        Dict with the JSON-serializable report, or the failure message
    """
    try:
        report = get_international_earnings(date_range)
    except (ValueError, PayPalError) as e:
        return {
            "success": False,
            "message": str(e),
        }

    return {
        "success": True,
        "report": report.to_dict(),
    }
