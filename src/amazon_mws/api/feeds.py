"""Feeds API client for Amazon MWS feed submissions."""

import logging
from typing import Any, Dict, Mapping, Union

from ..constants import FEED_DOCUMENT_VERSION, FEED_ROOT_ELEMENT, FEED_TYPES, JAPAN_MARKETPLACE_ID
from ..exceptions import MWSResponseError
from ..transport import feed_charset
from ..utils.xml_tools import Node, build_xml, get_path
from .base import BaseAPIClient

logger = logging.getLogger(__name__)

FeedContent = Union[str, bytes, Mapping[str, Any]]

SUBMISSION_INFO_PATH = ("SubmitFeedResult", "FeedSubmissionInfo")

# Result key -> FeedSubmissionInfo element
SUBMISSION_FIELDS = {
    "feedSubmissionId": "FeedSubmissionId",
    "feedType": "FeedType",
    "submittedDate": "SubmittedDate",
    "feedProcessingStatus": "FeedProcessingStatus",
}


class FeedsAPIClient(BaseAPIClient):
    """Client for MWS Feeds operations."""

    def get_api_section(self) -> str:
        return "Feeds"

    def build_feed_envelope(self, sections: Mapping[str, Any]) -> str:
        """Wrap feed sections in an AmazonEnvelope document.

        A ``Header`` block carrying the document version and this seller's
        merchant identifier always comes first; ``sections`` follow in their
        own order. A ``Header`` key in ``sections`` is ignored.

        Args:
            sections: Envelope content, e.g. ``{"MessageType": ..., "Message": [...]}``

        Returns:
            XML document declared in the marketplace's feed charset
        """
        document: Dict[str, Any] = {
            "Header": {
                "DocumentVersion": FEED_DOCUMENT_VERSION,
                "MerchantIdentifier": self.config.seller_id,
            }
        }
        for key, value in sections.items():
            if key == "Header":
                logger.warning("Ignoring caller supplied feed Header block")
                continue
            document[key] = value
        return build_xml(document, FEED_ROOT_ELEMENT, encoding=feed_charset(self.config.marketplace_id))

    def submit_feed(
        self,
        feed_type: str,
        content: FeedContent,
        purge_and_replace: bool = False,
    ) -> Dict[str, str]:
        """Submit a feed for asynchronous processing.

        Args:
            feed_type: MWS feed type, e.g. ``_POST_PRODUCT_DATA_``, or a FEED_TYPES alias such as ``PRODUCT``
            content: Raw feed body, or envelope sections to serialize. Text bodies must be
                representable in the marketplace feed charset; pass bytes to control encoding.
            purge_and_replace: Replace all existing data of this feed type

        Returns:
            Dict with feedSubmissionId, feedType, submittedDate and feedProcessingStatus

        Raises:
            MWSAPIError: For MWS errors
            MWSResponseError: If the response lacks FeedSubmissionInfo
            UnicodeEncodeError: If a raw text body has characters outside the feed charset
        """
        feed_type = FEED_TYPES.get(feed_type, feed_type)

        if isinstance(content, Mapping):
            # Characters outside the feed charset become XML character references
            body: Union[str, bytes] = self.build_feed_envelope(content).encode(
                feed_charset(self.config.marketplace_id), errors="xmlcharrefreplace"
            )
        else:
            body = content

        params: Dict[str, Any] = {
            "FeedType": feed_type,
            "PurgeAndReplace": purge_and_replace,
        }
        # The Japanese endpoint rejects MarketplaceIdList on SubmitFeed
        if self.config.marketplace_id != JAPAN_MARKETPLACE_ID:
            params["MarketplaceIdList.Id.1"] = self.config.marketplace_id

        try:
            response = self._make_request("SubmitFeed", params, body=body)
        except Exception:
            logger.exception("Error submitting %s feed", feed_type)
            raise

        info = get_path(response, *SUBMISSION_INFO_PATH)
        if not isinstance(info, Mapping):
            raise MWSResponseError(
                "SubmitFeed response is missing FeedSubmissionInfo", path=SUBMISSION_INFO_PATH
            )

        result = {}
        for key, element in SUBMISSION_FIELDS.items():
            value = info.get(element)
            if not isinstance(value, str):
                raise MWSResponseError(
                    f"SubmitFeed response is missing {element}",
                    path=SUBMISSION_INFO_PATH + (element,),
                )
            result[key] = value

        logger.info(f"Submitted {feed_type} feed, submission id {result['feedSubmissionId']}")
        return result

    def get_feed_submission_result(self, feed_submission_id: str, raw: bool = True) -> Union[Node, str]:
        """Fetch the processing report of a feed submission.

        Reports are often flat files, so the body is returned as text unless
        ``raw`` is False and MWS answers with XML.
        """
        if not feed_submission_id:
            raise ValueError("feed_submission_id is required")

        return self._make_request(
            "GetFeedSubmissionResult",
            {"FeedSubmissionId": feed_submission_id},
            raw=raw,
        )
