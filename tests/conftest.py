"""Shared fixtures for the amazon-mws test suite."""

from typing import Optional
from unittest.mock import Mock

import pytest
import requests

from amazon_mws.config import ClientConfig
from amazon_mws.transport import Transport

US_MARKETPLACE = "ATVPDKIKX0DER"
JP_MARKETPLACE = "A1VC38T7YXB528"


def _make_response(
    body: str = "",
    status_code: int = 200,
    content_type: Optional[str] = "text/xml",
) -> Mock:
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.text = body
    response.content = body.encode("utf-8")
    response.headers = {"Content-Type": content_type} if content_type else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


def _xml_response(body: str, status_code: int = 200) -> Mock:
    return _make_response(f'<?xml version="1.0"?>\n{body}', status_code=status_code)


@pytest.fixture
def config():
    return ClientConfig(
        access_key_id="AKIAEXAMPLE",
        secret_key="secret-key",
        marketplace_id=US_MARKETPLACE,
        seller_id="SELLER123",
    )


@pytest.fixture
def jp_config():
    return ClientConfig(
        access_key_id="AKIAEXAMPLE",
        secret_key="secret-key",
        marketplace_id=JP_MARKETPLACE,
        seller_id="SELLER123",
    )


@pytest.fixture
def session():
    """A mock requests.Session; set ``request.return_value`` or ``side_effect`` per test."""
    return Mock(spec=requests.Session)


@pytest.fixture
def transport(config, session):
    return Transport(config, session=session)


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def xml_response():
    return _xml_response
