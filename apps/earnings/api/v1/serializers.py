"""
Serializers for the earnings API.
Validate query parameters before they reach the domain layer.
"""

from rest_framework import serializers

from apps.earnings.domain.models import DateRange


class EarningsQuerySerializer(serializers.Serializer):
    range = serializers.ChoiceField(
        choices=[date_range.value for date_range in DateRange],
        default=DateRange.LAST_30_DAYS.value,
    )


class TransactionIdSerializer(serializers.Serializer):
    transaction_id = serializers.RegexField(
        r"^[A-Za-z0-9-]+$",
        max_length=64,
        error_messages={"invalid": "Transaction id may only contain letters, digits and dashes"},
    )
