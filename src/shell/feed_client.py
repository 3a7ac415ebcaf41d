"""Bushfire Feed Client - Imperative Shell.

This module handles HTTP communication with the bushfire alert feed.
All I/O is contained here; parsing is in the core module.
"""

import logging

import requests

from src.core.config import FEED_URL
from src.core.errors import TransportError


logger = logging.getLogger(__name__)


# Connect and read timeouts (seconds); bounds how long one poll can hang
DEFAULT_TIMEOUT = (5, 5)


class FeedClient:
    """Client for fetching the bushfire alert feed.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        url: str = FEED_URL,
        timeout: tuple[float, float] = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize feed client.

        Args:
            url: Feed URL (redirects are followed)
            timeout: (connect, read) timeouts in seconds
            session: HTTP session (created if not provided)
        """
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self) -> bytes:
        """Fetch the raw feed document.

        This method performs HTTP I/O.

        Returns:
            Raw response body, undecoded so the XML declaration decides
            the encoding

        Raises:
            TransportError: On connection failure, timeout or non-2xx status
        """
        logger.debug("Fetching bushfire feed from %s", self.url)

        try:
            response = self.session.get(
                self.url,
                timeout=self.timeout,
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            raise TransportError(f"HTTP request timed out: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"HTTP request error: {e}") from e

        logger.debug("Fetched %d bytes from bushfire feed", len(response.content))
        return response.content
