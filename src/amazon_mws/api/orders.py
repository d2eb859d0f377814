"""Orders API client for Amazon MWS."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from ..pagination import PagedOperation, paginate
from ..transport import format_timestamp
from ..utils.validators import validate_list_orders_filters, validate_order_ids
from ..utils.xml_tools import get_path, normalize_items
from .base import BaseAPIClient

logger = logging.getLogger(__name__)

Moment = Union[datetime, int, float]

LIST_ORDERS = PagedOperation(
    action="ListOrders",
    next_action="ListOrdersByNextToken",
    container="Orders",
    item="Order",
    id_field="AmazonOrderId",
)

LIST_ORDER_ITEMS = PagedOperation(
    action="ListOrderItems",
    next_action="ListOrderItemsByNextToken",
    container="OrderItems",
    item="OrderItem",
    id_field="ASIN",
)

DEFAULT_STATUSES = ("Unshipped", "PartiallyShipped")
DEFAULT_CHANNELS = ("AFN", "MFN")


def indexed_params(prefix: str, values: Sequence[Any]) -> Dict[str, Any]:
    """Expand values into 1-indexed repeated parameters (``prefix.1``, ``prefix.2``, ...)."""
    return {f"{prefix}.{index}": value for index, value in enumerate(values, start=1)}


class OrdersAPIClient(BaseAPIClient):
    """Client for MWS Orders endpoints."""

    def get_api_section(self) -> str:
        return "Orders"

    def list_orders(
        self,
        last_updated_after: Moment,
        last_updated_before: Optional[Moment] = None,
        statuses: Sequence[str] = DEFAULT_STATUSES,
        channels: Sequence[str] = DEFAULT_CHANNELS,
        page_size: int = 100,
        fetch_all: bool = True,
    ) -> List[Dict[str, Any]]:
        """
        List orders updated within a time window.

        Args:
            last_updated_after: Orders updated after this moment (datetime or epoch seconds)
            last_updated_before: Optional upper bound for the update time
            statuses: Order statuses to include
            channels: Fulfillment channels to include (AFN, MFN)
            page_size: MaxResultsPerPage, 1-100
            fetch_all: Follow NextToken until every page is fetched

        Returns:
            List of orders in the order MWS returned them

        Raises:
            ValueError: For invalid filters
            MWSAPIError: For MWS errors on any page
        """
        is_valid, errors = validate_list_orders_filters(statuses, channels, page_size)
        if not is_valid:
            raise ValueError("; ".join(errors))

        params: Dict[str, Any] = {
            "MaxResultsPerPage": page_size,
            "LastUpdatedAfter": format_timestamp(last_updated_after),
        }
        if last_updated_before is not None:
            params["LastUpdatedBefore"] = format_timestamp(last_updated_before)
        params.update(indexed_params("OrderStatus.Status", statuses))
        params.update(indexed_params("FulfillmentChannel.Channel", channels))

        try:
            return paginate(self._make_request, LIST_ORDERS, params, fetch_all=fetch_all)
        except Exception:
            logger.exception("Error listing orders")
            raise

    def get_order(self, amazon_order_ids: Union[str, Sequence[str]]) -> List[Dict[str, Any]]:
        """
        Retrieve one or more orders by Amazon order ID.

        Args:
            amazon_order_ids: A single order ID or up to 50 of them

        Returns:
            List of orders, empty when none matched

        Raises:
            ValueError: For missing or malformed order IDs
            MWSAPIError: For MWS errors
        """
        if isinstance(amazon_order_ids, str):
            amazon_order_ids = [amazon_order_ids]
        order_ids = list(amazon_order_ids)

        is_valid, errors = validate_order_ids(order_ids)
        if not is_valid:
            raise ValueError("; ".join(errors))

        try:
            response = self._make_request("GetOrder", indexed_params("AmazonOrderId.Id", order_ids))
        except Exception:
            logger.exception("Error fetching orders %s", ", ".join(order_ids))
            raise

        orders = get_path(response, "GetOrderResult", "Orders", "Order")
        return normalize_items(orders, LIST_ORDERS.id_field)

    def list_order_items(self, amazon_order_id: str, fetch_all: bool = True) -> List[Dict[str, Any]]:
        """
        List the items of an order.

        Args:
            amazon_order_id: Amazon order ID
            fetch_all: Follow NextToken until every page is fetched

        Returns:
            List of order items
        """
        logger.info(f"Fetching order items for order {amazon_order_id}")
        try:
            return paginate(
                self._make_request,
                LIST_ORDER_ITEMS,
                {"AmazonOrderId": amazon_order_id},
                fetch_all=fetch_all,
            )
        except Exception:
            logger.exception("Error fetching order items for order %s", amazon_order_id)
            raise
