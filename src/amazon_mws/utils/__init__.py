"""Utility modules for MWS operations."""

from .validators import (
    validate_amazon_order_id,
    validate_fulfillment_channel,
    validate_list_orders_filters,
    validate_marketplace_id,
    validate_order_ids,
    validate_order_status,
    validate_page_size,
)
from .xml_tools import as_list, build_xml, get_path, normalize_items, parse_document

__all__ = [
    "as_list",
    "build_xml",
    "get_path",
    "normalize_items",
    "parse_document",
    "validate_amazon_order_id",
    "validate_fulfillment_channel",
    "validate_list_orders_filters",
    "validate_marketplace_id",
    "validate_order_ids",
    "validate_order_status",
    "validate_page_size",
]
