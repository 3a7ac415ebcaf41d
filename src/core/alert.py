"""Alert data model and feed parsing - Pure functions.

This module parses the bushfire Atom feed (with GeoRSS points) into typed
Alert objects. All functions are pure with no side effects.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.core.errors import FeedParseError


ATOM_NS = "http://www.w3.org/2005/Atom"
GEORSS_NS = "http://www.georss.org/georss"

ENTRY_TAG = f"{{{ATOM_NS}}}entry"

LatLong = tuple[float, float]

# RFC 3339 date-time, UTC offset required
RFC3339_REGEX = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})"
)


@dataclass(frozen=True)
class Alert:
    """Immutable alert data model.

    Attributes:
        id: Feed identifier for the alert, used as the dedup key
        category: Alert level (e.g. "Watch and Act")
        content: Alert body text
        published: When the alert was first published
        title: Alert headline
        updated: When the alert was last updated
        point: (latitude, longitude) of the alert, if the feed supplies one
    """
    id: str = ""
    category: str | None = None
    content: str | None = None
    published: datetime | None = None
    title: str | None = None
    updated: datetime | None = None
    point: LatLong | None = None


def _split_tag(tag: str) -> tuple[str, str | None]:
    """Split an ElementTree tag into (local name, namespace)."""
    if tag.startswith("{"):
        namespace, _, name = tag[1:].partition("}")
        return name, namespace
    return tag, None


def parse_timestamp(text: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp.

    Pure function. Returns None for missing text, bad syntax, or a
    timestamp without a UTC offset.
    """
    if text is None:
        return None
    text = text.strip()
    if not RFC3339_REGEX.fullmatch(text):
        return None
    try:
        value = datetime.fromisoformat(text.upper())
    except ValueError:
        return None
    if value.tzinfo is None:
        return None
    return value


def parse_point(text: str | None) -> LatLong | None:
    """Parse a GeoRSS point ("lat long").

    Pure function. Tokens that are not numbers are skipped; the first two
    numbers are latitude and longitude.
    """
    if text is None:
        return None

    coords = []
    for token in text.strip().split(" "):
        try:
            coords.append(float(token))
        except ValueError:
            continue
        if len(coords) == 2:
            return (coords[0], coords[1])

    return None


def parse_alert(element: ET.Element) -> Alert:
    """Parse a single Atom entry element into an Alert.

    Pure function. Fields that are missing or fail to decode are left
    absent; a bad field never discards the whole entry.

    Args:
        element: An Atom entry element

    Returns:
        Alert object
    """
    fields: dict[str, Any] = {}

    for node in element.iter():
        name, namespace = _split_tag(node.tag)

        if namespace == ATOM_NS:
            if name == "category":
                fields["category"] = node.get("term")
            elif name == "content":
                fields["content"] = node.text
            elif name == "id":
                if node.text is not None:
                    fields["id"] = node.text.strip()
            elif name == "published":
                if node.text is not None:
                    fields["published"] = parse_timestamp(node.text)
            elif name == "title":
                fields["title"] = node.text
            elif name == "updated":
                if node.text is not None:
                    fields["updated"] = parse_timestamp(node.text)
        elif namespace == GEORSS_NS and name == "point":
            point = parse_point(node.text)
            if point is not None:
                fields["point"] = point

    return Alert(**fields)


def parse_feed(raw: str | bytes) -> list[Alert]:
    """Parse the bushfire feed document into a list of Alerts.

    Pure function.

    Args:
        raw: Feed document as fetched

    Returns:
        Alerts in document order

    Raises:
        FeedParseError: If the document is not well-formed XML or declares
            an unknown encoding
    """
    try:
        root = ET.fromstring(raw)
    except (ET.ParseError, LookupError, ValueError) as e:
        raise FeedParseError(f"unable to parse XML: {e}") from e

    return [parse_alert(entry) for entry in root.iter(ENTRY_TAG)]
