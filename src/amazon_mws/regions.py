"""Marketplace to regional endpoint resolution."""

from dataclasses import dataclass

from .constants import MARKETPLACE_HOSTS
from .exceptions import InvalidMarketplaceError


@dataclass(frozen=True)
class RegionBinding:
    """Regional MWS host a marketplace is served from."""

    host: str

    @property
    def base_url(self) -> str:
        return f"https://{self.host}"


def resolve_region(marketplace_id: str) -> RegionBinding:
    """Look up the regional host for a marketplace.

    Args:
        marketplace_id: MWS marketplace ID

    Returns:
        RegionBinding for the marketplace

    Raises:
        InvalidMarketplaceError: If the marketplace ID is unknown
    """
    try:
        return RegionBinding(host=MARKETPLACE_HOSTS[marketplace_id])
    except KeyError:
        raise InvalidMarketplaceError(marketplace_id) from None
