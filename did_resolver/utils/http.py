"""HTTP transport used to fetch remote DID documents."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Mapping, NamedTuple, Optional

from aiohttp import BaseConnector, ClientError, ClientSession, ClientTimeout

from ..core.error import BaseError

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class FetchError(BaseError):
    """Error raised when an HTTP fetch fails below the HTTP layer."""


class HTTPResponse(NamedTuple):
    """Status, headers and body of a completed HTTP request."""

    status: int
    reason: str
    headers: Mapping[str, str]
    body: str

    @property
    def ok(self) -> bool:
        """Check for a 2xx status."""
        return 200 <= self.status < 300


class BaseHTTPTransport(ABC):
    """Interface of the HTTP client used by network-bound DID methods."""

    @abstractmethod
    async def fetch(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> HTTPResponse:
        """Perform a GET request.

        Any status code is returned as a response; connection failures and
        timeouts raise `FetchError`.
        """


class AiohttpTransport(BaseHTTPTransport):
    """HTTP transport backed by `aiohttp`."""

    def __init__(
        self,
        *,
        session: ClientSession = None,
        connector: BaseConnector = None,
    ):
        """Initialize the transport.

        Args:
            session: a shared ClientSession, left open after each fetch
            connector: an optional existing BaseConnector for new sessions
        """
        self.session = session
        self.connector = connector

    async def fetch(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> HTTPResponse:
        """Fetch from an HTTP server, bounding connect and read by `timeout`."""
        client_timeout = ClientTimeout(total=None, connect=timeout, sock_read=timeout)
        try:
            if self.session:
                return await self._get(self.session, url, headers, client_timeout)
            async with ClientSession(
                connector=self.connector,
                connector_owner=(not self.connector),
                trust_env=True,
            ) as session:
                return await self._get(session, url, headers, client_timeout)
        except asyncio.TimeoutError as err:
            raise FetchError(f"Request timeout after {timeout}s: {url}") from err
        except ClientError as err:
            raise FetchError(f"Connection failed: {err}") from err

    @staticmethod
    async def _get(
        session: ClientSession,
        url: str,
        headers: Optional[Mapping[str, str]],
        timeout: ClientTimeout,
    ) -> HTTPResponse:
        LOGGER.debug("GET %s", url)
        async with session.get(url, headers=headers, timeout=timeout) as response:
            body = await response.text(errors="replace")
            LOGGER.debug("GET %s returned %s", url, response.status)
            return HTTPResponse(
                response.status, response.reason or "", dict(response.headers), body
            )
