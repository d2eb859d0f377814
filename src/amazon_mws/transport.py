"""Signed HTTP transport for Amazon MWS."""

import base64
import hashlib
import logging
import uuid
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import requests

from .config import ClientConfig
from .constants import (
    DATE_FORMAT,
    DEFAULT_MARKETPLACE_ID_KEY,
    FEED_CHARSET,
    GENERIC_ERROR_MESSAGE,
    JAPAN_FEED_CHARSET,
    JAPAN_MARKETPLACE_ID,
    MARKETPLACE_ID_KEYS,
    SIGNATURE_METHOD,
    SIGNATURE_VERSION,
    USER_AGENT,
)
from .endpoints import EndpointSpec, lookup
from .exceptions import MWSAPIError
from .regions import RegionBinding, resolve_region
from .signing import encode_query, sign_params
from .utils.xml_tools import Node, as_list, get_path, parse_document

logger = logging.getLogger(__name__)

FEED_SUBMISSION_ACTION = "SubmitFeed"

Body = Union[str, bytes, None]


def format_timestamp(moment: Union[datetime, int, float, None] = None) -> str:
    """Format a moment as an MWS timestamp (UTC, zero milliseconds, literal Z).

    Accepts a datetime (naive values are taken as UTC), epoch seconds, or
    ``None`` for now.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif isinstance(moment, (int, float)):
        moment = datetime.fromtimestamp(moment, tz=timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(DATE_FORMAT)


def feed_charset(marketplace_id: str) -> str:
    """Charset MWS expects feed bodies in for a marketplace."""
    return JAPAN_FEED_CHARSET if marketplace_id == JAPAN_MARKETPLACE_ID else FEED_CHARSET


def resolve_marketplace_key(params: Mapping[str, Any]) -> Optional[str]:
    """Return the marketplace id key already present in ``params``, by precedence."""
    for key in MARKETPLACE_ID_KEYS:
        if key in params:
            return key
    return None


def parse_error_response(body: Union[str, bytes]) -> Tuple[str, Optional[str], Optional[str]]:
    """Extract (message, error code, request id) from an MWS error envelope.

    Falls back to the generic message when the body is not an ``ErrorResponse``
    or cannot be parsed.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    if not text or "<ErrorResponse" not in text:
        return GENERIC_ERROR_MESSAGE, None, None

    try:
        document = parse_document(body)
    except ET.ParseError:
        logger.warning("Could not parse MWS error response")
        return GENERIC_ERROR_MESSAGE, None, None

    errors = as_list(get_path(document, "Error"))
    error = errors[0] if errors else {}
    message = get_path(error, "Message")
    code = get_path(error, "Code")
    request_id = get_path(document, "RequestID") or get_path(document, "RequestId")

    if not isinstance(message, str) or not message:
        message = GENERIC_ERROR_MESSAGE
    return (
        message,
        code if isinstance(code, str) else None,
        request_id if isinstance(request_id, str) else None,
    )


class Transport:
    """Builds, signs and sends MWS requests for one seller account.

    The HTTP session is created on first use and reused for later calls.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None) -> None:
        """Initialize the transport.

        Args:
            config: Seller account configuration
            session: Optional preconfigured requests session
        """
        self.config = config
        self.region: RegionBinding = resolve_region(config.marketplace_id)
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def build_params(
        self, endpoint: EndpointSpec, params: Optional[Mapping[str, Any]] = None
    ) -> Tuple[Dict[str, Any], str]:
        """Merge common parameters into ``params`` and sign the result.

        Returns:
            Tuple of (signed parameters, marketplace id key in use)
        """
        query: Dict[str, Any] = {
            "AWSAccessKeyId": self.config.access_key_id,
            "Action": endpoint.action,
            "SellerId": self.config.seller_id,
            "SignatureMethod": SIGNATURE_METHOD,
            "SignatureVersion": SIGNATURE_VERSION,
            "Timestamp": format_timestamp(),
            "Version": endpoint.version,
        }
        query.update(params or {})

        if self.config.auth_token:
            query["MWSAuthToken"] = self.config.auth_token

        marketplace_key = resolve_marketplace_key(query)
        if marketplace_key is None:
            marketplace_key = DEFAULT_MARKETPLACE_ID_KEY
            query[marketplace_key] = self.config.marketplace_id
        for key in MARKETPLACE_ID_KEYS:
            if key != marketplace_key and query.pop(key, None) is not None:
                logger.warning(f"Dropping {key} parameter, {marketplace_key} takes precedence")

        signed = sign_params(
            endpoint.method, self.region.host, endpoint.path, query, self.config.secret_key
        )
        return signed, marketplace_key

    def build_headers(self, endpoint: EndpointSpec, marketplace_id: str, body: Optional[bytes]) -> Dict[str, str]:
        headers = {
            "Accept": "application/xml",
            "x-amazon-user-agent": USER_AGENT,
        }
        if endpoint.action == FEED_SUBMISSION_ACTION:
            headers["Content-MD5"] = base64.b64encode(hashlib.md5(body or b"").digest()).decode("ascii")
            headers["Content-Type"] = f"text/xml; charset={feed_charset(marketplace_id)}"
        return headers

    def execute(
        self,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Body = None,
        raw: bool = False,
    ) -> Union[Node, str]:
        """Send a signed request for an MWS operation.

        Args:
            action: Operation name from the endpoint catalog
            params: Operation specific query parameters
            body: Request body; text is encoded in the feed charset and must be representable in it
            raw: Return the body text even for XML responses

        Returns:
            Parsed response document, or the body text for raw and non-XML responses

        Raises:
            UndefinedActionError: If the action is not in the catalog
            UnicodeEncodeError: If a text body has characters outside the feed charset
            MWSAPIError: When MWS returns an error status
            requests.RequestException: For network failures
        """
        endpoint = lookup(action)
        query, marketplace_key = self.build_params(endpoint, params)
        marketplace_id = str(query[marketplace_key])

        if isinstance(body, str):
            body = body.encode(feed_charset(marketplace_id))
        headers = self.build_headers(endpoint, marketplace_id, body)

        request_id = str(uuid.uuid4())
        start_time = datetime.now()
        url = f"{self.region.base_url}{endpoint.path}"

        logger.info(f"Request {request_id}: Starting {endpoint.method} {action}")

        try:
            response = self.session.request(
                method=endpoint.method,
                url=f"{url}?{encode_query(query)}",
                headers=headers,
                data=body,
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"Request {request_id}: HTTP error in {duration_ms}ms, status={status_code}")

            content = e.response.content if e.response is not None else b""
            message, error_code, mws_request_id = parse_error_response(content)
            raise MWSAPIError(message, status_code, error_code, mws_request_id) from e
        except requests.RequestException as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.error(f"Request {request_id}: Transport error in {duration_ms}ms: {e}")
            raise

        duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        logger.info(
            f"Request {request_id}: Success in {duration_ms}ms, status={response.status_code}"
        )

        content_type = response.headers.get("Content-Type", "").lower()
        if raw or "xml" not in content_type:
            return response.text
        return parse_document(response.content)
