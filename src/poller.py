"""Poller - runs the orchestrator on a fixed cadence.

The poller is a cancellable periodic task. A threading.Event is both the
timer (waiting on it with a timeout) and the cancellation token, so a stop
request wakes the poller immediately instead of after a sleep.
"""

import logging
import signal
import threading
from types import FrameType

from src.core.config import POLL_INTERVAL_SECONDS
from src.orchestrator import Orchestrator


logger = logging.getLogger(__name__)


class Poller:
    """Polls the feed every interval_seconds until stopped."""

    def __init__(
        self,
        orchestrator: Orchestrator,
        interval_seconds: float = POLL_INTERVAL_SECONDS,
        stop_event: threading.Event | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.interval_seconds = interval_seconds
        self.stop_event = stop_event or threading.Event()

    @property
    def stopped(self) -> bool:
        return self.stop_event.is_set()

    def stop(self) -> None:
        """Request the poller to stop. Safe to call from a signal handler."""
        self.stop_event.set()

    def poll_once(self) -> None:
        """Run one cycle, logging instead of raising on failure."""
        try:
            result = self.orchestrator.process(cancel=self.stop_event)
        except Exception:
            logger.exception("Unexpected error polling bushfire feed")
            return
        logger.info("Completed: %s", result.summary)

    def run(self) -> None:
        """Poll immediately, then every interval until stopped."""
        logger.info("Polling bushfire feed every %s seconds", self.interval_seconds)

        while not self.stopped:
            self.poll_once()
            if self.stop_event.wait(self.interval_seconds):
                break

        logger.info("Poller exiting")


def install_signal_handlers(poller: Poller) -> None:
    """Stop the poller on SIGINT or SIGTERM.

    Must be called from the main thread.
    """
    def _handle(signum: int, frame: FrameType | None) -> None:
        logger.info("Received %s, shutting down", signal.Signals(signum).name)
        poller.stop()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)
