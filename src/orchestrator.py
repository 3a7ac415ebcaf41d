"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components for one poll of the feed.

Notifications are sent before the alert ID is recorded. If recording
fails (or the process dies in between) the alert is notified again on a
later poll: delivery is at-least-once, never silently dropped.
"""

import logging
import threading
from dataclasses import dataclass, field

from src.core.alert import Alert, parse_feed
from src.core.config import Config
from src.core.errors import FeedParseError, NotifyError, TransportError
from src.core.formatter import format_feed_error, format_store_error
from src.core.geo import filter_nearby
from src.shell.datastore import DedupStore
from src.shell.feed_client import FeedClient
from src.shell.notifier import Notifier
from src.shell.webhook_client import WebhookClient


logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    """Result of a single poll of the feed.

    Attributes:
        alerts_fetched: Total alerts in the feed
        alerts_nearby: Alerts near the monitored point
        alerts_new: Nearby alerts not previously notified
        alerts_sent: IDs of alerts notified this cycle
        alerts_failed: IDs of alerts whose notification failed
        errors: Any errors that occurred
        cancelled: True if the cycle was stopped before finishing
    """
    alerts_fetched: int = 0
    alerts_nearby: int = 0
    alerts_new: int = 0
    alerts_sent: list[str] = field(default_factory=list)
    alerts_failed: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def success(self) -> bool:
        """Returns True if no errors occurred."""
        return len(self.errors) == 0 and len(self.alerts_failed) == 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the processing result."""
        return (
            f"Fetched {self.alerts_fetched} alerts, "
            f"{self.alerts_nearby} nearby, "
            f"{self.alerts_new} new, "
            f"{len(self.alerts_sent)} notified, "
            f"{len(self.alerts_failed)} failed"
        )


class Orchestrator:
    """Coordinates polling the feed and notifying about nearby alerts.

    This class wires together:
    - Feed client (fetches the alert feed)
    - Core functions (parsing, proximity, formatting)
    - Dedup store (IDs already notified)
    - Notifier (sends webhook messages)
    """

    def __init__(
        self,
        config: Config,
        store: DedupStore,
        feed_client: FeedClient | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            store: Dedup store of already-notified IDs
            feed_client: Feed client (created if not provided)
            notifier: Notifier (created if not provided)
        """
        self.config = config
        self.store = store
        self.feed_client = feed_client or FeedClient(url=config.feed_url)
        self.notifier = notifier or Notifier(
            WebhookClient(config.webhook_url),
            alert_page_url=config.alert_page_url,
        )

    def _fetch_alerts(self) -> list[Alert]:
        """Fetch and parse the feed.

        Raises:
            TransportError: If the feed can't be fetched
            FeedParseError: If the feed isn't valid XML
        """
        raw = self.feed_client.fetch()
        return parse_feed(raw)

    def _record(self, alert: Alert, result: ProcessingResult) -> None:
        """Record a notified alert, reporting if that fails."""
        try:
            self.store.append(alert.id)
        except (OSError, ValueError) as e:
            error_msg = format_store_error(e)
            logger.error("%s (alert %s)", error_msg, alert.id)
            result.errors.append(error_msg)
            if not self.notifier.report(error_msg):
                logger.error(
                    "Alert %s will be notified again on the next poll",
                    alert.id,
                )

    def _process_alert(self, alert: Alert, result: ProcessingResult) -> None:
        """Notify about a single new alert and record it."""
        logger.info("Notify of incident %s", alert.id)

        try:
            self.notifier.notify(alert)
        except NotifyError as e:
            logger.error(
                "Unable to post notification: %s: %s",
                e.error,
                e.notification,
            )
            result.alerts_failed.append(alert.id)
            return

        result.alerts_sent.append(alert.id)
        self._record(alert, result)

    def process(self, cancel: threading.Event | None = None) -> ProcessingResult:
        """Run a single poll of the feed.

        This is the main entry point that:
        1. Fetches and parses the feed
        2. Filters alerts to those near the monitored point
        3. Skips alerts already notified
        4. Sends notifications
        5. Records each notified alert

        Args:
            cancel: If set while alerts are being processed, stop before
                the next alert; the rest are picked up on the next poll

        Returns:
            ProcessingResult with details of what happened
        """
        result = ProcessingResult()

        # Step 1: Fetch alerts
        try:
            alerts = self._fetch_alerts()
        except (TransportError, FeedParseError) as e:
            error_msg = format_feed_error(e)
            logger.error(error_msg)
            self.notifier.report(error_msg)
            result.errors.append(error_msg)
            return result

        result.alerts_fetched = len(alerts)
        logger.info("Polled bushfire feed: %d alerts", len(alerts))

        # Step 2: Proximity filter (pure core function)
        nearby = filter_nearby(
            alerts,
            self.config.reference_point,
            self.config.alert_distance_km,
        )
        result.alerts_nearby = len(nearby)

        # Steps 3-5: Dedup, notify, record (in document order)
        for alert in nearby:
            if cancel is not None and cancel.is_set():
                logger.info("Poll cancelled, remaining alerts deferred")
                result.cancelled = True
                break

            if self.store.contains(alert.id):
                continue

            result.alerts_new += 1
            self._process_alert(alert, result)

        return result
