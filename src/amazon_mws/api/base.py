"""Base API client for Amazon MWS sections."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from ..config import ClientConfig
from ..transport import Body, Transport
from ..utils.xml_tools import Node

logger = logging.getLogger(__name__)


class BaseAPIClient(ABC):
    """Base class for all MWS section clients.

    Clients built from the same Transport share its HTTP session.
    """

    def __init__(self, transport: Transport) -> None:
        """Initialize the base API client.

        Args:
            transport: Signed transport bound to a seller account
        """
        self.transport = transport

    @property
    def config(self) -> ClientConfig:
        return self.transport.config

    @abstractmethod
    def get_api_section(self) -> str:
        """Return the MWS API section this client talks to."""
        pass

    def _make_request(
        self,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Body = None,
        raw: bool = False,
    ) -> Union[Node, str]:
        """Make a signed request to an MWS operation.

        Args:
            action: Operation name
            params: Query parameters
            body: Request body
            raw: Return the response text instead of a parsed document

        Returns:
            Parsed response document or response text

        Raises:
            UndefinedActionError: If the action is unknown
            MWSAPIError: For MWS error responses
        """
        logger.debug(f"{self.get_api_section()}: {action}")
        return self.transport.execute(action, params, body=body, raw=raw)
