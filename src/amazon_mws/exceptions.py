"""Common exceptions for the amazon-mws package."""

from typing import Optional

import requests

# Network-level failures from requests are surfaced unchanged.
TransportError = requests.RequestException


class MWSError(Exception):
    """Base class for all MWS client errors."""


class ConfigurationError(MWSError):
    """Raised when the client configuration is incomplete or invalid."""


class InvalidMarketplaceError(ConfigurationError):
    """Raised when a marketplace ID is not in the region registry."""

    def __init__(self, marketplace_id: str) -> None:
        super().__init__(f"Invalid Marketplace ID: {marketplace_id!r}")
        self.marketplace_id = marketplace_id


class UndefinedActionError(MWSError):
    """Raised when an operation is not in the endpoint catalog."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Call to undefined action '{action}'.")
        self.action = action


class MWSAPIError(MWSError):
    """Raised when MWS returns an error status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.request_id = request_id


class MWSResponseError(MWSError):
    """Raised when a successful response lacks an expected element."""

    def __init__(self, message: str, path: tuple = ()) -> None:
        super().__init__(message)
        self.path = path
