"""Client configuration for Amazon MWS."""

import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .constants import DEFAULT_TIMEOUT
from .exceptions import ConfigurationError, InvalidMarketplaceError
from .utils.validators import validate_marketplace_id

REQUIRED_FIELDS = ("access_key_id", "secret_key", "marketplace_id", "seller_id")

# Environment variable names used by ClientConfig.from_env
ENV_VARS = {
    "access_key_id": "MWS_ACCESS_KEY_ID",
    "secret_key": "MWS_SECRET_KEY",
    "marketplace_id": "MWS_MARKETPLACE_ID",
    "seller_id": "MWS_SELLER_ID",
    "auth_token": "MWS_AUTH_TOKEN",
}


@dataclass(frozen=True)
class ClientConfig:
    """Credentials and marketplace selection for an MWS seller account.

    Args:
        access_key_id: AWSAccessKeyId
        secret_key: Secret key used to sign requests
        marketplace_id: Marketplace ID, also selects the regional endpoint
        seller_id: Seller (merchant) ID
        auth_token: MWSAuthToken, only needed for delegated access
        timeout: HTTP request timeout in seconds

    Raises:
        ConfigurationError: If a required field is empty
        InvalidMarketplaceError: If the marketplace ID is unknown
    """

    access_key_id: str
    secret_key: str
    marketplace_id: str
    seller_id: str
    auth_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        for name in REQUIRED_FIELDS:
            if not getattr(self, name):
                raise ConfigurationError(f"Required field '{name}' is not set.")

        if not validate_marketplace_id(self.marketplace_id):
            raise InvalidMarketplaceError(self.marketplace_id)

    def __repr__(self) -> str:
        return (
            f"ClientConfig(access_key_id={self.access_key_id!r}, secret_key='***', "
            f"marketplace_id={self.marketplace_id!r}, seller_id={self.seller_id!r}, "
            f"auth_token={'***' if self.auth_token else None})"
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClientConfig":
        """Build a config from a mapping, ignoring keys that are not config fields."""
        known = {field.name for field in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        for name in REQUIRED_FIELDS:
            kwargs.setdefault(name, None)
        return cls(**kwargs)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from MWS_* environment variables (and a .env file if present)."""
        load_dotenv()

        data: dict[str, Any] = {name: os.getenv(var) for name, var in ENV_VARS.items()}
        timeout = os.getenv("MWS_TIMEOUT")
        if timeout:
            try:
                data["timeout"] = float(timeout)
            except ValueError:
                raise ConfigurationError(f"MWS_TIMEOUT must be a number, got {timeout!r}") from None

        return cls.from_mapping(data)
