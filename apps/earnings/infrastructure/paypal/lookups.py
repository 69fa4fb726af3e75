"""
Lookup strategies for the transaction drill-down.
Each one knows a single PayPal detail endpoint.
"""

import logging

from apps.earnings.domain.exceptions import FetchError
from apps.earnings.domain.interfaces import DetailLookupStrategy

logger = logging.getLogger(__name__)


class CaptureLookup(DetailLookupStrategy):
    """
    v2 payments capture, which carries the detailed financials.
    When the capture belongs to an order, the order is fetched too and the
    capture is attached under `_capture_details`.
    """

    name = "capture"

    def lookup(self, client, transaction_id: str) -> dict:
        capture = client.get_capture(transaction_id)

        related_order_id = (
            (capture.get("supplementary_data") or {})
            .get("related_ids", {})
            .get("order_id")
        )
        if not related_order_id:
            return capture

        logger.info(f"Found related Order ID: {related_order_id} for Capture: {transaction_id}")
        try:
            order = client.get_order(related_order_id)
        except FetchError as e:
            if e.is_network_error:
                raise
            logger.warning(f"Order {related_order_id} could not be fetched ({e.status_code}), returning capture only")
            return capture

        return {**order, "_capture_details": capture}


class OrderLookup(DetailLookupStrategy):
    """v2 checkout order."""

    name = "order"

    def lookup(self, client, transaction_id: str) -> dict:
        return client.get_order(transaction_id)


class SaleLookup(DetailLookupStrategy):
    """v1 payments sale, for legacy transactions."""

    name = "sale"

    def lookup(self, client, transaction_id: str) -> dict:
        return client.get_sale(transaction_id)
