"""Signed-request client for the Amazon Marketplace Web Service order and feed APIs."""

from .client import MWSClient
from .config import ClientConfig
from .exceptions import (
    ConfigurationError,
    InvalidMarketplaceError,
    MWSAPIError,
    MWSError,
    MWSResponseError,
    TransportError,
    UndefinedActionError,
)

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "InvalidMarketplaceError",
    "MWSAPIError",
    "MWSClient",
    "MWSError",
    "MWSResponseError",
    "TransportError",
    "UndefinedActionError",
]
