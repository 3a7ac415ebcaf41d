"""Deduplication logic - Pure functions.

This module handles logic for determining which alerts have already been
notified, and the line format of the dedup artifact. All functions are
pure with no side effects.

Note: The actual persistence of notified IDs is handled by the imperative
shell (DedupStore). This module only contains the pure logic.
"""

from collections.abc import Iterable

from src.core.alert import Alert


def get_alert_ids(alerts: list[Alert]) -> set[str]:
    """Extract IDs from a list of alerts.

    Pure function.

    Args:
        alerts: List of alerts

    Returns:
        Set of alert IDs
    """
    return {a.id for a in alerts}


def filter_already_alerted(
    alerts: list[Alert],
    already_alerted_ids: set[str] | frozenset[str],
) -> list[Alert]:
    """Filter out alerts that have already been notified.

    Pure function. Preserves the order of alerts.

    Args:
        alerts: List of alerts to filter
        already_alerted_ids: IDs that have already been notified

    Returns:
        List of alerts that haven't been notified yet
    """
    return [a for a in alerts if a.id not in already_alerted_ids]


def parse_id_lines(lines: Iterable[str]) -> set[str]:
    """Rebuild the set of notified IDs from artifact lines.

    Pure function. Blank lines are skipped.

    Args:
        lines: Lines of the dedup artifact, with or without line endings

    Returns:
        Set of IDs
    """
    ids = set()
    for line in lines:
        alert_id = line.rstrip("\r\n")
        if alert_id:
            ids.add(alert_id)
    return ids


def format_id_line(alert_id: str) -> str:
    """Format an ID as one line of the dedup artifact.

    Pure function.

    Raises:
        ValueError: If the ID contains a line break
    """
    if "\n" in alert_id or "\r" in alert_id:
        raise ValueError(f"alert id contains a line break: {alert_id!r}")
    return f"{alert_id}\n"
