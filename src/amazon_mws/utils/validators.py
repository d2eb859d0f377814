"""Input validation utilities for MWS parameters."""

import re
from typing import Iterable, List

from ..constants import (
    FULFILLMENT_CHANNELS,
    MARKETPLACE_HOSTS,
    MAX_ORDER_IDS_PER_REQUEST,
    MAX_RESULTS_PER_PAGE,
    ORDER_STATUSES,
)

AMAZON_ORDER_ID_PATTERN = re.compile(r"[0-9]{3}-[0-9]{7}-[0-9]{7}")


def validate_marketplace_id(marketplace_id: str) -> bool:
    """Validate marketplace ID existence.

    Args:
        marketplace_id: The marketplace ID to validate

    Returns:
        True if marketplace ID is known
    """
    return marketplace_id in MARKETPLACE_HOSTS


def validate_order_status(status: str) -> bool:
    """Validate order status parameter.

    Args:
        status: The order status to validate

    Returns:
        True if order status is valid
    """
    return status in ORDER_STATUSES


def validate_fulfillment_channel(channel: str) -> bool:
    return channel in FULFILLMENT_CHANNELS


def validate_page_size(value: int) -> bool:
    """Validate MaxResultsPerPage (1-100)."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= MAX_RESULTS_PER_PAGE


def validate_amazon_order_id(order_id: str) -> bool:
    """Validate Amazon order ID format (e.g. 123-1234567-1234567).

    Args:
        order_id: The order ID to validate

    Returns:
        True if order ID format is valid
    """
    return isinstance(order_id, str) and AMAZON_ORDER_ID_PATTERN.fullmatch(order_id) is not None


def validate_list_orders_filters(
    statuses: Iterable[str], channels: Iterable[str], page_size: int
) -> tuple[bool, List[str]]:
    """Validate the filters of a ListOrders request.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    invalid_statuses = [status for status in statuses if not validate_order_status(status)]
    if invalid_statuses:
        errors.append(f"Invalid order statuses: {', '.join(invalid_statuses)}")

    invalid_channels = [channel for channel in channels if not validate_fulfillment_channel(channel)]
    if invalid_channels:
        errors.append(f"Invalid fulfillment channels: {', '.join(invalid_channels)}")

    if not validate_page_size(page_size):
        errors.append(f"page_size must be between 1 and {MAX_RESULTS_PER_PAGE}")

    return len(errors) == 0, errors


def validate_order_ids(order_ids: List[str]) -> tuple[bool, List[str]]:
    """Validate a batch of Amazon order IDs for GetOrder.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    if not order_ids:
        errors.append("At least one Amazon order ID is required")
        return False, errors

    if len(order_ids) > MAX_ORDER_IDS_PER_REQUEST:
        errors.append(f"Too many order IDs. Maximum allowed: {MAX_ORDER_IDS_PER_REQUEST}")

    for idx, order_id in enumerate(order_ids):
        if not validate_amazon_order_id(order_id):
            errors.append(f"Item {idx}: Invalid Amazon order ID {order_id!r}")

    return len(errors) == 0, errors
