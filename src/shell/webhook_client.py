"""Chat Webhook Client - Imperative Shell.

This module handles HTTP communication with the chat incoming webhook.
All I/O is contained here; message formatting is in the core module.
"""

import logging

import requests

from src.core.errors import TransportError
from src.core.formatter import format_webhook_payload


logger = logging.getLogger(__name__)


# Default timeout for webhook requests (seconds)
DEFAULT_TIMEOUT = 10


class WebhookClient:
    """Client for posting messages to a chat incoming webhook.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize webhook client.

        Args:
            webhook_url: Incoming webhook URL
            timeout: Request timeout in seconds
            session: HTTP session (created if not provided)
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def post_text(self, text: str) -> None:
        """Post a Markdown message to the webhook.

        This method performs HTTP I/O.

        Args:
            text: Message text

        Raises:
            TransportError: On request failure or a non-2xx response
        """
        try:
            response = self.session.post(
                self.webhook_url,
                json=format_webhook_payload(text),
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
        except requests.Timeout as e:
            logger.error("Webhook request timed out")
            raise TransportError(f"HTTP request timed out: {e}") from e
        except requests.RequestException as e:
            logger.error("Webhook request failed: %s", str(e))
            raise TransportError(f"HTTP request error: {e}") from e

        if not response.ok:
            logger.warning(
                "Webhook returned non-2xx: %d - %s",
                response.status_code,
                response.text,
            )
            raise TransportError(
                f"webhook returned HTTP {response.status_code}: {response.text}"
            )
