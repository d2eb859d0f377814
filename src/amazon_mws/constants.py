"""Constants and configuration for Amazon MWS."""

from types import MappingProxyType

APPLICATION_NAME = "AmazonMWSClient"
APPLICATION_VERSION = "0.1"
USER_AGENT = f"{APPLICATION_NAME}/{APPLICATION_VERSION} (Language=Python)"

# Signature Version 2
SIGNATURE_METHOD = "HmacSHA256"
SIGNATURE_VERSION = "2"

# Timestamps are always sent with a zero millisecond part and a literal Z
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.000Z"

# Default request timeout (seconds)
DEFAULT_TIMEOUT = 30

JAPAN_MARKETPLACE_ID = "A1VC38T7YXB528"

# Marketplace ID -> MWS host
MARKETPLACE_HOSTS = MappingProxyType(
    {
        # North America region
        "A2Q3Y263D00KWC": "mws.amazonservices.com",  # Brazil (BR)
        "A2EUQ1WTGCTBG2": "mws.amazonservices.ca",  # Canada (CA)
        "A1AM78C64UM0Y8": "mws.amazonservices.com.mx",  # Mexico (MX)
        "ATVPDKIKX0DER": "mws.amazonservices.com",  # US (US)
        # Europe region
        "A2VIGQ35RCS4UG": "mws.amazonservices.ae",  # United Arab Emirates (AE)
        "A1PA6795UKMFR9": "mws-eu.amazonservices.com",  # Germany (DE)
        "ARBP9OOSHTCHU": "mws-eu.amazonservices.com",  # Egypt (EG)
        "A1RKKUPIHCS9HS": "mws-eu.amazonservices.com",  # Spain (ES)
        "A13V1IB3VIYZZH": "mws-eu.amazonservices.com",  # France (FR)
        "A1F83G8C2ARO7P": "mws-eu.amazonservices.com",  # UK (GB)
        "A21TJRUUN4KGV": "mws.amazonservices.in",  # India (IN)
        "APJ6JRA9NG5V4": "mws-eu.amazonservices.com",  # Italy (IT)
        "A1805IZSGTT6HS": "mws-eu.amazonservices.com",  # Netherlands (NL)
        "A17E79C6D8DWNP": "mws-eu.amazonservices.com",  # Saudi Arabia (SA)
        "A33AVAJ2PDY3EV": "mws-eu.amazonservices.com",  # Turkey (TR)
        # Far East region
        "A19VAU5U5O7RUS": "mws-fe.amazonservices.com",  # Singapore (SG)
        "A39IBJ37TRP1C6": "mws.amazonservices.com.au",  # Australia (AU)
        JAPAN_MARKETPLACE_ID: "mws.amazonservices.jp",  # Japan (JP)
    }
)

# API sections
ORDERS_PATH = "/Orders/2013-09-01"
ORDERS_VERSION = "2013-09-01"
FEEDS_PATH = "/"
FEEDS_VERSION = "2009-01-01"

# Marketplace id parameter keys, in order of precedence
MARKETPLACE_ID_KEYS = ("MarketplaceId", "MarketplaceId.Id.1", "MarketplaceIdList.Id.1")
DEFAULT_MARKETPLACE_ID_KEY = "MarketplaceId.Id.1"

# Feed bodies
FEED_CHARSET = "iso-8859-1"
JAPAN_FEED_CHARSET = "Shift_JIS"
FEED_DOCUMENT_VERSION = "1.01"
FEED_ROOT_ELEMENT = "AmazonEnvelope"

GENERIC_ERROR_MESSAGE = "An error occurred."

# Order statuses accepted by ListOrders
ORDER_STATUSES = [
    "PendingAvailability",
    "Pending",
    "Unshipped",
    "PartiallyShipped",
    "Shipped",
    "Canceled",
    "Unfulfillable",
    "InvoiceUnconfirmed",
]

# Fulfillment channels
FULFILLMENT_CHANNELS = {
    "AFN": "Fulfilled by Amazon",
    "MFN": "Fulfilled by the seller",
}

MAX_RESULTS_PER_PAGE = 100
MAX_ORDER_IDS_PER_REQUEST = 50

# Common feed types
FEED_TYPES = {
    "PRODUCT": "_POST_PRODUCT_DATA_",
    "INVENTORY": "_POST_INVENTORY_AVAILABILITY_DATA_",
    "PRICING": "_POST_PRODUCT_PRICING_DATA_",
    "ORDER_FULFILLMENT": "_POST_ORDER_FULFILLMENT_DATA_",
    "FLAT_FILE_LISTINGS": "_POST_FLAT_FILE_LISTINGS_DATA_",
    "FLAT_FILE_FULFILLMENT": "_POST_FLAT_FILE_FULFILLMENT_DATA_",
}
