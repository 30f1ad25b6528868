"""Lazily opened HTTP connectivity toward a network endpoint."""

import logging
from typing import Optional

import aiohttp
from aiohttp import ClientTimeout

from ._version import __version__

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"deploy-profiles/{__version__}"


class HttpConnection:
    """Holds an aiohttp session bound to one endpoint.

    The session is created on first use, never at construction, so a
    resolved profile can be passed around without touching the network.
    """

    def __init__(self, endpoint_url: str, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the connection.

        Args:
            endpoint_url: URL of the node endpoint
            timeout: Total request timeout in seconds
        """
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None
        self._closed = False

    def __repr__(self) -> str:
        return f"HttpConnection({self.endpoint_url!r}, timeout={self.timeout})"

    def __eq__(self, other):
        if not isinstance(other, HttpConnection):
            return NotImplemented
        return (self.endpoint_url, self.timeout) == (other.endpoint_url, other.timeout)

    def __hash__(self):
        return hash((self.endpoint_url, self.timeout))

    async def __aenter__(self):
        """Async context manager entry."""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    async def open(self) -> aiohttp.ClientSession:
        """Return the session, creating it if needed."""
        if self._closed:
            raise RuntimeError("Connection has been closed")

        if self.session is None or self.session.closed:
            logger.debug(f"Opening HTTP session for {self.endpoint_url}")
            self.session = aiohttp.ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={
                    'Content-Type': 'application/json',
                    'User-Agent': USER_AGENT
                }
            )
        return self.session

    async def close(self):
        """Close the HTTP session."""
        if self.session and not self.session.closed:
            await self.session.close()
        self._closed = True
