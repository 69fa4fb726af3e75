"""
ViewSets for the earnings API v1.
Domain errors are mapped to HTTP statuses here; nothing below this layer knows about HTTP.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.earnings.api.v1.serializers import EarningsQuerySerializer, TransactionIdSerializer
from apps.earnings.application.tasks import get_international_earnings, get_order_details
from apps.earnings.domain.exceptions import ConfigError, FetchError, InvalidTransactionError, NotFoundError


def paypal_error_response(error: Exception) -> Response:
    if isinstance(error, ConfigError):
        return Response({"error": str(error)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    if isinstance(error, NotFoundError):
        return Response(
            {"error": str(error), "attempts": error.attempts},
            status=status.HTTP_404_NOT_FOUND
        )

    if isinstance(error, InvalidTransactionError):
        return Response(
            {"error": str(error), "transaction_id": error.transaction_id},
            status=status.HTTP_502_BAD_GATEWAY
        )

    return Response(
        {"error": str(error), "upstream_status": error.status_code},
        status=status.HTTP_502_BAD_GATEWAY
    )


@extend_schema(tags=['Earnings'])
class EarningsViewSet(viewsets.ViewSet):

    @extend_schema(
        parameters=[
            OpenApiParameter("range", OpenApiTypes.STR, enum=["30d", "90d", "ytd", "1y"], description="Date range (defaults to 30d)"),
        ],
        responses=OpenApiTypes.OBJECT,
        description="International PayPal earnings in USD: summary, daily series, sales by country and transactions"
    )
    @action(detail=False, methods=['get'], url_path='international')
    def international(self, request):
        query = EarningsQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response({"error": query.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            report = get_international_earnings(query.validated_data["range"])
        except (ConfigError, FetchError, InvalidTransactionError) as e:
            return paypal_error_response(e)

        return Response(report.to_dict())


@extend_schema(tags=['Transactions'])
class TransactionViewSet(viewsets.ViewSet):

    lookup_value_regex = r"[^/]+"

    @extend_schema(
        responses=OpenApiTypes.OBJECT,
        description="Full PayPal details for a capture, order or legacy sale id"
    )
    def retrieve(self, request, pk=None):
        identifier = TransactionIdSerializer(data={"transaction_id": pk})
        if not identifier.is_valid():
            return Response({"error": identifier.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            details = get_order_details(identifier.validated_data["transaction_id"])
        except (ConfigError, FetchError, NotFoundError) as e:
            return paypal_error_response(e)

        return Response(details)
