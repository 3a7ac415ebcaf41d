"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Alert feed parsing
- Proximity checks
- Message formatting
- Deduplication logic
- Link rewriting

All functions here are deterministic and have no I/O.
"""

from src.core.alert import Alert, parse_alert, parse_feed
from src.core.geo import BoundingBox, alert_is_near, filter_nearby, is_near
from src.core.formatter import format_alert_message
from src.core.dedup import filter_already_alerted, parse_id_lines
from src.core.links import substitute_urls

__all__ = [
    # Alert
    "Alert",
    "parse_alert",
    "parse_feed",
    # Geo
    "BoundingBox",
    "alert_is_near",
    "filter_nearby",
    "is_near",
    # Formatter
    "format_alert_message",
    # Dedup
    "filter_already_alerted",
    "parse_id_lines",
    # Links
    "substitute_urls",
]
