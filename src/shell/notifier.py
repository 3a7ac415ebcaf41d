"""Notification Dispatcher - Imperative Shell.

Sends alert notifications and operational error reports to the chat
webhook. Formatting comes from the core module.
"""

import logging

from src.core.alert import Alert
from src.core.errors import NotifyError, TransportError
from src.core.formatter import ALERT_PAGE_URL, format_alert_message
from src.shell.webhook_client import WebhookClient


logger = logging.getLogger(__name__)


class Notifier:
    """Delivers alerts to a single webhook."""

    def __init__(
        self,
        webhook_client: WebhookClient,
        alert_page_url: str = ALERT_PAGE_URL,
    ) -> None:
        self.webhook_client = webhook_client
        self.alert_page_url = alert_page_url

    def notify(self, alert: Alert) -> None:
        """Send a notification about an alert.

        Raises:
            NotifyError: Carrying the rendered message and transport error
        """
        message = format_alert_message(alert, self.alert_page_url)
        try:
            self.webhook_client.post_text(message)
        except TransportError as e:
            raise NotifyError(message, e) from e

    def report(self, message: str) -> bool:
        """Best-effort report of an operational problem.

        Never raises.

        Returns:
            True if the report was delivered
        """
        try:
            self.webhook_client.post_text(message)
        except TransportError as e:
            logger.error("Unable to report %r: %s", message, e)
            return False
        return True
