"""Error kinds raised by the alert pipeline.

Store failures use the built-in OSError; everything else that can go wrong
while polling is one of these.
"""


class AlertPipelineError(Exception):
    """Base class for alert pipeline errors."""


class TransportError(AlertPipelineError):
    """Network or HTTP failure reaching the feed or the webhook."""


class FeedParseError(AlertPipelineError):
    """The fetched feed is not a well-formed XML document."""


class NotifyError(TransportError):
    """A notification could not be delivered.

    Attributes:
        notification: The rendered message that failed to send
        error: The underlying transport error
    """

    def __init__(self, notification: str, error: TransportError) -> None:
        super().__init__(str(error))
        self.notification = notification
        self.error = error


class ConfigError(ValueError):
    """Startup configuration is missing or invalid."""
