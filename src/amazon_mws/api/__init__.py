"""Amazon MWS client modules."""

from .base import BaseAPIClient
from .feeds import FeedsAPIClient
from .orders import OrdersAPIClient

__all__ = ["BaseAPIClient", "FeedsAPIClient", "OrdersAPIClient"]
