"""Catalog of supported MWS operations."""

from dataclasses import dataclass
from types import MappingProxyType

from .constants import FEEDS_PATH, FEEDS_VERSION, ORDERS_PATH, ORDERS_VERSION
from .exceptions import UndefinedActionError


@dataclass(frozen=True)
class EndpointSpec:
    """HTTP method, action name, path and API version of an operation."""

    method: str
    action: str
    path: str
    version: str


def _orders(action: str) -> EndpointSpec:
    return EndpointSpec("POST", action, ORDERS_PATH, ORDERS_VERSION)


def _feeds(action: str) -> EndpointSpec:
    return EndpointSpec("POST", action, FEEDS_PATH, FEEDS_VERSION)


ENDPOINTS = MappingProxyType(
    {
        spec.action: spec
        for spec in (
            _orders("ListOrders"),
            _orders("ListOrdersByNextToken"),
            _orders("GetOrder"),
            _orders("ListOrderItems"),
            _orders("ListOrderItemsByNextToken"),
            _feeds("SubmitFeed"),
            _feeds("GetFeedSubmissionResult"),
        )
    }
)


def lookup(action: str) -> EndpointSpec:
    """Return the EndpointSpec for an action.

    Raises:
        UndefinedActionError: If the action is not in the catalog
    """
    try:
        return ENDPOINTS[action]
    except KeyError:
        raise UndefinedActionError(action) from None
