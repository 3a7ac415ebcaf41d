"""Message formatting - Pure functions.

This module formats alerts into webhook messages (Markdown text).
All functions are pure with no side effects.
"""

from datetime import datetime
from email.utils import format_datetime
from typing import Any

from src.core.alert import Alert


# Public page listing current incidents
ALERT_PAGE_URL = "https://www.qfes.qld.gov.au/Current-Incidents"

ALERT_EMOJI = "⚠️"


def format_published(published: datetime | None) -> str:
    """Format a publish time for display (RFC 2822).

    Pure function.
    """
    if published is None:
        return "unknown"
    return format_datetime(published)


def _or_default(value: str | None, default: str) -> str:
    return default if value is None else value


def format_alert_message(alert: Alert, alert_page_url: str = ALERT_PAGE_URL) -> str:
    """Format an alert as a Markdown notification.

    Pure function.

    Args:
        alert: Alert to format
        alert_page_url: Link appended to every message

    Returns:
        Message text
    """
    return (
        f"#### {ALERT_EMOJI} {_or_default(alert.category, 'Unknown Category')}\n\n"
        f"**{_or_default(alert.title, 'Untitled')}**\n\n"
        f"{_or_default(alert.content, 'No content')}\n\n"
        f"**Published:** {format_published(alert.published)}\n"
        f"**Link:** {alert_page_url}"
    )


def format_feed_error(error: Exception) -> str:
    """Format the report sent when the feed can't be polled."""
    return f"unable to poll bushfire feed: {error}"


def format_store_error(error: Exception) -> str:
    """Format the report sent when a notified ID can't be recorded."""
    return f"Unable to append entry to bushfire datastore: {error}"


def format_webhook_payload(text: str) -> dict[str, Any]:
    """Build the JSON body for the chat webhook.

    Pure function.
    """
    return {"text": text}
