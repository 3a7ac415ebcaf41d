"""Unit tests for deduplication logic.

Pure function tests - no mocks needed.
"""

import pytest

from src.core.alert import Alert
from src.core.dedup import (
    filter_already_alerted,
    format_id_line,
    get_alert_ids,
    parse_id_lines,
)


@pytest.fixture
def alerts():
    """Create list of alerts."""
    return [
        Alert(id="IF39-1"),
        Alert(id="IF39-2"),
        Alert(id="IF39-3"),
    ]


class TestGetAlertIds:
    """Tests for get_alert_ids() function."""

    def test_extracts_ids(self, alerts):
        """Should extract all alert IDs."""
        assert get_alert_ids(alerts) == {"IF39-1", "IF39-2", "IF39-3"}

    def test_empty_list(self):
        """Should return empty set for empty list."""
        assert get_alert_ids([]) == set()


class TestFilterAlreadyAlerted:
    """Tests for filter_already_alerted() function."""

    def test_filters_alerted(self, alerts):
        """Should remove already-notified alerts."""
        result = filter_already_alerted(alerts, {"IF39-1", "IF39-3"})

        assert [a.id for a in result] == ["IF39-2"]

    def test_all_new_keeps_order(self, alerts):
        """Should return all, in order, when none notified."""
        result = filter_already_alerted(alerts, set())
        assert [a.id for a in result] == ["IF39-1", "IF39-2", "IF39-3"]

    def test_all_alerted(self, alerts):
        """Should return empty when all notified."""
        result = filter_already_alerted(alerts, frozenset({"IF39-1", "IF39-2", "IF39-3"}))
        assert result == []

    def test_exact_match_only(self, alerts):
        """IDs are compared as exact strings."""
        result = filter_already_alerted(alerts, {"if39-1", "IF39-2 "})
        assert len(result) == 3


class TestParseIdLines:
    """Tests for parse_id_lines() function."""

    def test_parses_lines(self):
        assert parse_id_lines(["a\n", "b\n"]) == {"a", "b"}

    def test_skips_blank_lines(self):
        assert parse_id_lines(["a\n", "\n", "", "b"]) == {"a", "b"}

    def test_strips_crlf(self):
        assert parse_id_lines(["a\r\n"]) == {"a"}

    def test_duplicates_collapse(self):
        assert parse_id_lines(["a\n", "a\n"]) == {"a"}

    def test_keeps_inner_whitespace(self):
        assert parse_id_lines(["  spaced id \n"]) == {"  spaced id "}


class TestFormatIdLine:
    """Tests for format_id_line() function."""

    def test_appends_newline(self):
        assert format_id_line("IF39-1919322") == "IF39-1919322\n"

    def test_round_trips_through_parse(self):
        assert parse_id_lines([format_id_line("IF39-1919322")]) == {"IF39-1919322"}

    @pytest.mark.parametrize("bad_id", ["a\nb", "a\r", "\n"])
    def test_rejects_line_breaks(self, bad_id):
        with pytest.raises(ValueError):
            format_id_line(bad_id)
