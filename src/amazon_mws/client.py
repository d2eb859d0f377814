"""Single entry point bundling the MWS section clients."""

import logging
from typing import Any, Mapping, Optional, Union

import requests

from .api.feeds import FeedsAPIClient
from .api.orders import OrdersAPIClient
from .config import ClientConfig
from .transport import Transport

logger = logging.getLogger(__name__)


class MWSClient:
    """Amazon MWS client for one seller account and marketplace.

    Configuration is validated on construction, before any network use. All
    section clients share one Transport and therefore one HTTP session.

    Example::

        client = MWSClient(ClientConfig.from_env())
        orders = client.list_orders(datetime(2024, 1, 1))
    """

    def __init__(
        self,
        config: Union[ClientConfig, Mapping[str, Any]],
        session: Optional[requests.Session] = None,
    ) -> None:
        if not isinstance(config, ClientConfig):
            config = ClientConfig.from_mapping(config)

        self.config = config
        self.transport = Transport(config, session=session)
        self.orders = OrdersAPIClient(self.transport)
        self.feeds = FeedsAPIClient(self.transport)

        logger.info(
            f"MWS client ready for seller {config.seller_id} on {self.transport.region.host}"
        )

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "MWSClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Orders

    def list_orders(self, *args: Any, **kwargs: Any) -> list:
        return self.orders.list_orders(*args, **kwargs)

    def get_order(self, amazon_order_ids: Any) -> list:
        return self.orders.get_order(amazon_order_ids)

    def list_order_items(self, amazon_order_id: str, fetch_all: bool = True) -> list:
        return self.orders.list_order_items(amazon_order_id, fetch_all=fetch_all)

    # Feeds

    def submit_feed(self, feed_type: str, content: Any, purge_and_replace: bool = False) -> dict:
        return self.feeds.submit_feed(feed_type, content, purge_and_replace=purge_and_replace)

    def get_feed_submission_result(self, feed_submission_id: str, raw: bool = True) -> Any:
        return self.feeds.get_feed_submission_result(feed_submission_id, raw=raw)
