"""
Pure domain entities (POPOs).
No dependency on the ORM; only Django utilities for parsing upstream dates.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.earnings.domain.exceptions import InvalidTransactionError

NOT_AVAILABLE = "N/A"
UNKNOWN_COUNTRY = "Unknown"
REPORT_CURRENCY = "USD"

CENTS = Decimal("0.01")


def _money(value: Decimal) -> str:
    return str(value.quantize(CENTS))


class DateRange(str, Enum):
    """Named ranges offered by the earnings dashboard."""

    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    YEAR_TO_DATE = "ytd"
    CURRENT_YEAR = "1y"


@dataclass(frozen=True)
class TransactionRecord:

    id: str
    timestamp: datetime
    status: str
    gross: Decimal
    fee: Decimal
    currency: str
    customer_name: str
    customer_email: str
    country_code: str
    invoice_id: Optional[str] = None

    @property
    def net(self) -> Decimal:
        # PayPal reports fees as negative amounts
        return self.gross + self.fee

    @property
    def day(self) -> date:
        return self.timestamp.date()

    @classmethod
    def from_paypal(cls, entry: dict) -> "TransactionRecord":
        """
        Build a record from one `transaction_details` entry of the
        PayPal reporting API. Naive initiation dates are read as UTC.

        Raises:
            InvalidTransactionError: if the entry is missing its id or date,
                the date cannot be parsed, or an amount is not numeric
        """
        info = entry.get("transaction_info") or {}
        payer = entry.get("payer_info") or {}
        shipping = entry.get("shipping_info") or {}

        transaction_id = info.get("transaction_id")
        if not transaction_id:
            raise InvalidTransactionError(None, "missing transaction_id")

        amount = info.get("transaction_amount") or {}
        fee = info.get("fee_amount") or {}

        raw_date = info.get("transaction_initiation_date")
        try:
            timestamp = parse_datetime(raw_date or "")
        except (TypeError, ValueError):
            timestamp = None
        if timestamp is None:
            raise InvalidTransactionError(transaction_id, f"invalid transaction_initiation_date {raw_date!r}")
        if timezone.is_naive(timestamp):
            timestamp = timezone.make_aware(timestamp, dt_timezone.utc)

        try:
            gross = Decimal(str(amount.get("value", "0")))
            fee_value = Decimal(str(fee.get("value", "0")))
        except InvalidOperation as e:
            raise InvalidTransactionError(
                transaction_id,
                f"non-numeric amount {amount.get('value')!r} / fee {fee.get('value')!r}",
            ) from e
        if not gross.is_finite() or not fee_value.is_finite():
            raise InvalidTransactionError(transaction_id, f"non-finite amount {amount.get('value')!r}")

        country_code = (
            payer.get("country_code")
            or (shipping.get("address") or {}).get("country_code")
            or UNKNOWN_COUNTRY
        )

        return cls(
            id=transaction_id,
            timestamp=timestamp,
            status=info.get("transaction_status", ""),
            gross=gross,
            fee=fee_value,
            currency=amount.get("currency_code", REPORT_CURRENCY),
            customer_name=(payer.get("payer_name") or {}).get("alternate_full_name") or NOT_AVAILABLE,
            customer_email=payer.get("email_address") or NOT_AVAILABLE,
            country_code=country_code,
            invoice_id=info.get("invoice_id"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.timestamp.isoformat(),
            "status": self.status,
            "gross": str(self.gross),
            "fee": str(self.fee),
            "net": str(self.net),
            "currency": self.currency,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "country_code": self.country_code,
            "invoice_id": self.invoice_id,
        }


@dataclass(frozen=True)
class DashboardSummary:

    gross_total: Decimal
    fee_total: Decimal
    net_total: Decimal
    transaction_count: int
    avg_ticket: Decimal
    currency: str = REPORT_CURRENCY

    def to_dict(self) -> dict:
        return {
            "gross_total": _money(self.gross_total),
            "fee_total": _money(self.fee_total),
            "net_total": _money(self.net_total),
            "transaction_count": self.transaction_count,
            "avg_ticket": _money(self.avg_ticket),
            "currency": self.currency,
        }


@dataclass(frozen=True)
class DailyEarnings:

    date: date
    amount: Decimal

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "amount": _money(self.amount)}


@dataclass(frozen=True)
class CountrySales:

    country_code: str
    amount: Decimal
    count: int

    def to_dict(self) -> dict:
        return {
            "country_code": self.country_code,
            "amount": _money(self.amount),
            "count": self.count,
        }


@dataclass(frozen=True)
class EarningsReport:
    """Everything the earnings dashboard renders for one date range."""

    start_date: date
    end_date: date
    summary: DashboardSummary
    chart_data: List[DailyEarnings] = field(default_factory=list)
    sales_by_country: List[CountrySales] = field(default_factory=list)
    transactions: List[TransactionRecord] = field(default_factory=list)
    skipped_count: int = 0
    date_range: Optional[DateRange] = None

    def to_dict(self) -> dict:
        return {
            "date_range": self.date_range.value if self.date_range else None,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "summary": self.summary.to_dict(),
            "chart_data": [point.to_dict() for point in self.chart_data],
            "sales_by_country": [country.to_dict() for country in self.sales_by_country],
            "transactions": [tx.to_dict() for tx in self.transactions],
            "skipped_count": self.skipped_count,
        }
