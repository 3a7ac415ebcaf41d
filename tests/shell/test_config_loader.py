"""Tests for the Configuration Loader module.

Tests configuration loading from YAML files and environment variables.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.core.config import FEED_URL
from src.core.errors import ConfigError
from src.core.formatter import ALERT_PAGE_URL
from src.shell.config_loader import (
    _resolve_value,
    load_config,
    load_config_from_dict,
    load_config_from_env,
    parse_point,
)


@pytest.fixture
def environ():
    """Minimal valid environment."""
    return {
        "BUSHFIRE_WEBHOOK_URL": "https://chat.example.com/hooks/abc",
        "BUSHFIRE_DATA_PATH": "/var/lib/bushfire/seen.txt",
        "BUSHFIRE_POINT": "-27.46844,153.02334",
    }


class TestResolveValue:
    """Tests for _resolve_value function."""

    def test_returns_non_string_unchanged(self):
        assert _resolve_value(123) == 123
        assert _resolve_value(None) is None

    def test_returns_plain_string_unchanged(self):
        assert _resolve_value("https://example.com") == "https://example.com"

    def test_resolves_env_var_placeholder(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert _resolve_value("${TEST_VAR}") == "test_value"

    def test_returns_placeholder_if_env_var_not_set(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _resolve_value("${UNDEFINED_VAR}") == "${UNDEFINED_VAR}"


class TestParsePoint:
    """Tests for parse_point function."""

    def test_comma_separated(self):
        assert parse_point("-27.46844,153.02334") == (-27.46844, 153.02334)

    def test_whitespace_tolerated(self):
        assert parse_point(" -27.5 , 153.0 ") == (-27.5, 153.0)

    def test_list(self):
        assert parse_point([-27.5, 153]) == (-27.5, 153.0)

    @pytest.mark.parametrize("value", ["-27.5", "a,b", "", [1.0], 5, None])
    def test_invalid(self, value):
        with pytest.raises(ConfigError):
            parse_point(value)


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    def test_minimal(self, environ):
        config = load_config_from_env(environ)

        assert config.webhook_url == "https://chat.example.com/hooks/abc"
        assert config.data_path == Path("/var/lib/bushfire/seen.txt")
        assert config.reference_point == (-27.46844, 153.02334)
        assert config.alert_distance_km == 30.0
        assert config.poll_interval_seconds == 300
        assert config.feed_url == FEED_URL
        assert config.alert_page_url == ALERT_PAGE_URL
        assert config.slash_token is None
        assert config.http_address == "0.0.0.0"
        assert config.http_port == 8888
        assert config.revision == "dev"

    def test_overrides(self, environ):
        environ.update({
            "ALERT_DISTANCE_KM": "50",
            "POLL_INTERVAL_SECONDS": "60",
            "BUSHFIRE_FEED_URL": "https://example.com/feed.xml",
            "SLASH_COMMAND_TOKEN": "tok",
            "HTTP_ADDRESS": "127.0.0.1",
            "HTTP_PORT": "9000",
            "APP_REVISION": "abc123",
        })

        config = load_config_from_env(environ)

        assert config.alert_distance_km == 50.0
        assert config.poll_interval_seconds == 60
        assert config.feed_url == "https://example.com/feed.xml"
        assert config.slash_token == "tok"
        assert config.http_address == "127.0.0.1"
        assert config.http_port == 9000
        assert config.revision == "abc123"

    @pytest.mark.parametrize("var", [
        "BUSHFIRE_WEBHOOK_URL",
        "BUSHFIRE_DATA_PATH",
        "BUSHFIRE_POINT",
    ])
    def test_missing_required(self, environ, var):
        del environ[var]

        with pytest.raises(ConfigError, match=var):
            load_config_from_env(environ)

    def test_unparseable_point(self, environ):
        environ["BUSHFIRE_POINT"] = "brisbane"

        with pytest.raises(ConfigError, match="BUSHFIRE_POINT"):
            load_config_from_env(environ)

    def test_invalid_distance(self, environ):
        environ["ALERT_DISTANCE_KM"] = "far"

        with pytest.raises(ConfigError):
            load_config_from_env(environ)

    def test_invalid_port_uses_default(self, environ):
        environ["HTTP_PORT"] = "eighty"

        assert load_config_from_env(environ).http_port == 8888

    def test_reads_os_environ_by_default(self, environ):
        with patch.dict(os.environ, environ, clear=True):
            config = load_config_from_env()

        assert config.reference_point == (-27.46844, 153.02334)


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_yaml_types(self):
        config = load_config_from_dict({
            "webhook_url": "https://chat.example.com/hooks/abc",
            "data_path": "seen.txt",
            "reference_point": [-27.46844, 153.02334],
            "alert_distance_km": 50,
            "http_port": 9000,
        })

        assert config.reference_point == (-27.46844, 153.02334)
        assert config.alert_distance_km == 50.0
        assert config.http_port == 9000

    def test_expands_placeholders(self):
        with patch.dict(os.environ, {"HOOK": "https://chat.example.com/hooks/xyz"}):
            config = load_config_from_dict({
                "webhook_url": "${HOOK}",
                "data_path": "seen.txt",
                "reference_point": "-27.5,153.0",
            })

        assert config.webhook_url == "https://chat.example.com/hooks/xyz"

    def test_missing_required(self):
        with pytest.raises(ConfigError, match="webhook_url"):
            load_config_from_dict({
                "data_path": "seen.txt",
                "reference_point": "-27.5,153.0",
            })


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "webhook_url: https://chat.example.com/hooks/abc\n"
            "data_path: /tmp/seen.txt\n"
            "reference_point: [-27.46844, 153.02334]\n"
            "poll_interval_seconds: 120\n"
        )

        config = load_config(path)

        assert config.poll_interval_seconds == 120
        assert config.data_path == Path("/tmp/seen.txt")

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        with pytest.raises(ConfigError):
            load_config(path)
