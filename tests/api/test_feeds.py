"""Tests for the Feeds API client."""

import base64
import hashlib
import xml.etree.ElementTree as ET
from urllib.parse import parse_qsl, urlsplit

import pytest

from amazon_mws.api.feeds import FeedsAPIClient
from amazon_mws.exceptions import MWSResponseError
from amazon_mws.transport import Transport

SUBMIT_FEED_RESPONSE = """
<SubmitFeedResponse xmlns="http://mws.amazonaws.com/doc/2009-01-01/">
  <SubmitFeedResult>
    <FeedSubmissionInfo>
      <FeedSubmissionId>2291326430</FeedSubmissionId>
      <FeedType>_POST_PRODUCT_DATA_</FeedType>
      <SubmittedDate>2024-01-01T10:00:00+00:00</SubmittedDate>
      <FeedProcessingStatus>_SUBMITTED_</FeedProcessingStatus>
    </FeedSubmissionInfo>
  </SubmitFeedResult>
  <ResponseMetadata><RequestId>75424a49-1f1c-4d3c-9aec-4a6b8f1c2d3e</RequestId></ResponseMetadata>
</SubmitFeedResponse>
"""

SECTIONS = {
    "MessageType": "Inventory",
    "Message": [
        {"MessageID": 1, "OperationType": "Update", "Inventory": {"SKU": "SKU-1", "Quantity": 3}},
        {"MessageID": 2, "OperationType": "Update", "Inventory": {"SKU": "SKU-2", "Quantity": 0}},
    ],
}


def sent(session):
    kwargs = session.request.call_args.kwargs
    return dict(parse_qsl(urlsplit(kwargs["url"]).query)), kwargs


@pytest.fixture
def client(transport):
    return FeedsAPIClient(transport)


@pytest.fixture
def jp_client(jp_config, session):
    return FeedsAPIClient(Transport(jp_config, session=session))


class TestFeedEnvelope:
    """Test AmazonEnvelope construction."""

    def test_header_first(self, client):
        root = ET.fromstring(client.build_feed_envelope(SECTIONS).encode("iso-8859-1"))

        assert root.tag == "AmazonEnvelope"
        children = list(root)
        assert children[0].tag == "Header"
        assert [child.tag for child in children].count("Header") == 1
        assert children[0].find("DocumentVersion").text == "1.01"
        assert children[0].find("MerchantIdentifier").text == "SELLER123"
        assert [child.tag for child in children[1:]] == ["MessageType", "Message", "Message"]

    def test_caller_header_ignored(self, client):
        sections = {"Header": {"MerchantIdentifier": "SOMEONE-ELSE"}, **SECTIONS}

        root = ET.fromstring(client.build_feed_envelope(sections).encode("iso-8859-1"))

        headers = root.findall("Header")
        assert len(headers) == 1
        assert headers[0].find("MerchantIdentifier").text == "SELLER123"

    def test_declared_charset(self, client, jp_client):
        assert client.build_feed_envelope({}).startswith('<?xml version="1.0" encoding="iso-8859-1"?>')
        assert jp_client.build_feed_envelope({}).startswith('<?xml version="1.0" encoding="Shift_JIS"?>')


class TestSubmitFeed:
    """Test SubmitFeed."""

    def test_structured_feed(self, client, session, xml_response):
        session.request.return_value = xml_response(SUBMIT_FEED_RESPONSE)

        result = client.submit_feed("_POST_INVENTORY_AVAILABILITY_DATA_", SECTIONS)

        assert result == {
            "feedSubmissionId": "2291326430",
            "feedType": "_POST_PRODUCT_DATA_",
            "submittedDate": "2024-01-01T10:00:00+00:00",
            "feedProcessingStatus": "_SUBMITTED_",
        }
        params, kwargs = sent(session)
        assert params["Action"] == "SubmitFeed"
        assert params["Version"] == "2009-01-01"
        assert params["FeedType"] == "_POST_INVENTORY_AVAILABILITY_DATA_"
        assert params["PurgeAndReplace"] == "false"
        assert params["MarketplaceIdList.Id.1"] == "ATVPDKIKX0DER"
        assert "MarketplaceId.Id.1" not in params

        body = kwargs["data"]
        root = ET.fromstring(body)
        assert list(root)[0].tag == "Header"
        assert kwargs["headers"]["Content-MD5"] == base64.b64encode(hashlib.md5(body).digest()).decode("ascii")
        assert kwargs["headers"]["Content-Type"] == "text/xml; charset=iso-8859-1"

    def test_raw_feed_sent_unchanged(self, client, session, xml_response):
        session.request.return_value = xml_response(SUBMIT_FEED_RESPONSE)
        content = "sku\tquantity\nSKU-1\t3\n"

        client.submit_feed("_POST_FLAT_FILE_INVALIDATION_DATA_", content, purge_and_replace=True)

        params, kwargs = sent(session)
        assert kwargs["data"] == content.encode("iso-8859-1")
        assert params["PurgeAndReplace"] == "true"

    def test_flat_file_with_unencodable_text_rejected(self, client, session):
        content = "sku\titem-name\nSKU-1\tMug 5€ & cup\n"

        with pytest.raises(UnicodeEncodeError):
            client.submit_feed("FLAT_FILE_LISTINGS", content)

        session.request.assert_not_called()

    def test_flat_file_bytes_sent_unchanged(self, client, session, xml_response):
        session.request.return_value = xml_response(SUBMIT_FEED_RESPONSE)
        content = "sku\titem-name\nSKU-1\tMug 5€ & cup\n".encode("utf-8")

        client.submit_feed("FLAT_FILE_LISTINGS", content)

        _, kwargs = sent(session)
        assert kwargs["data"] == content

    def test_envelope_unencodable_text_becomes_reference(self, client, session, xml_response):
        session.request.return_value = xml_response(SUBMIT_FEED_RESPONSE)

        client.submit_feed("PRODUCT", {"Message": {"Title": "Mug 5€"}})

        _, kwargs = sent(session)
        assert b"<Title>Mug 5&#8364;</Title>" in kwargs["data"]
        assert ET.fromstring(kwargs["data"]).find("Message/Title").text == "Mug 5€"

    def test_feed_type_alias(self, client, session, xml_response):
        session.request.return_value = xml_response(SUBMIT_FEED_RESPONSE)

        client.submit_feed("INVENTORY", SECTIONS)

        params, _ = sent(session)
        assert params["FeedType"] == "_POST_INVENTORY_AVAILABILITY_DATA_"

    def test_japan_omits_marketplace_list(self, jp_client, session, xml_response):
        session.request.return_value = xml_response(SUBMIT_FEED_RESPONSE)

        jp_client.submit_feed("_POST_PRODUCT_DATA_", SECTIONS)

        params, kwargs = sent(session)
        assert "MarketplaceIdList.Id.1" not in params
        assert params["MarketplaceId.Id.1"] == "A1VC38T7YXB528"
        assert kwargs["headers"]["Content-Type"] == "text/xml; charset=Shift_JIS"
        assert kwargs["url"].startswith("https://mws.amazonservices.jp/")

    def test_missing_submission_info(self, client, session, xml_response):
        session.request.return_value = xml_response(
            "<SubmitFeedResponse><SubmitFeedResult/></SubmitFeedResponse>"
        )

        with pytest.raises(MWSResponseError, match="FeedSubmissionInfo"):
            client.submit_feed("_POST_PRODUCT_DATA_", "<AmazonEnvelope/>")

    def test_missing_submission_field(self, client, session, xml_response):
        session.request.return_value = xml_response(
            "<SubmitFeedResponse><SubmitFeedResult><FeedSubmissionInfo>"
            "<FeedSubmissionId>1</FeedSubmissionId>"
            "</FeedSubmissionInfo></SubmitFeedResult></SubmitFeedResponse>"
        )

        with pytest.raises(MWSResponseError, match="FeedType") as exc_info:
            client.submit_feed("_POST_PRODUCT_DATA_", "<AmazonEnvelope/>")

        assert exc_info.value.path == ("SubmitFeedResult", "FeedSubmissionInfo", "FeedType")

    def test_non_xml_response(self, client, session, make_response):
        session.request.return_value = make_response("OK", content_type="text/plain")

        with pytest.raises(MWSResponseError):
            client.submit_feed("_POST_PRODUCT_DATA_", "<AmazonEnvelope/>")


class TestFeedSubmissionResult:
    """Test GetFeedSubmissionResult."""

    def test_raw_report(self, client, session, make_response):
        report = "Feed Processing Summary:\n\tNumber of records processed\t\t2\n"
        session.request.return_value = make_response(report, content_type="text/plain")

        assert client.get_feed_submission_result("2291326430") == report
        params, _ = sent(session)
        assert params["Action"] == "GetFeedSubmissionResult"
        assert params["FeedSubmissionId"] == "2291326430"

    def test_parsed_report(self, client, session, xml_response):
        session.request.return_value = xml_response(
            "<AmazonEnvelope><Message><ProcessingReport>"
            "<StatusCode>Complete</StatusCode>"
            "</ProcessingReport></Message></AmazonEnvelope>"
        )

        document = client.get_feed_submission_result("2291326430", raw=False)

        assert document["Message"]["ProcessingReport"]["StatusCode"] == "Complete"

    def test_id_required(self, client, session):
        with pytest.raises(ValueError):
            client.get_feed_submission_result("")

        session.request.assert_not_called()
