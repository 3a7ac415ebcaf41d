"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in src/core/config.py to avoid information
leakage between layers.
"""

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from src.core.alert import LatLong
from src.core.config import (
    DEFAULT_HTTP_ADDRESS,
    DEFAULT_HTTP_PORT,
    FEED_URL,
    POLL_INTERVAL_SECONDS,
    Config,
)
from src.core.errors import ConfigError
from src.core.formatter import ALERT_PAGE_URL
from src.core.geo import ALERT_DISTANCE_KM


logger = logging.getLogger(__name__)


# Environment variable for each config key
ENV_VARS = {
    "webhook_url": "BUSHFIRE_WEBHOOK_URL",
    "data_path": "BUSHFIRE_DATA_PATH",
    "reference_point": "BUSHFIRE_POINT",
    "alert_distance_km": "ALERT_DISTANCE_KM",
    "poll_interval_seconds": "POLL_INTERVAL_SECONDS",
    "feed_url": "BUSHFIRE_FEED_URL",
    "alert_page_url": "BUSHFIRE_PAGE_URL",
    "slash_token": "SLASH_COMMAND_TOKEN",
    "http_address": "HTTP_ADDRESS",
    "http_port": "HTTP_PORT",
    "revision": "APP_REVISION",
}


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Args:
        value: Value to resolve

    Returns:
        Resolved value, or the value unchanged if it isn't a placeholder
        or the variable isn't set
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def parse_point(value: Any, name: str = "reference_point") -> LatLong:
    """Parse a reference point given as "lat,long" or a [lat, long] list.

    Raises:
        ConfigError: If the value isn't two numbers
    """
    if isinstance(value, str):
        lat, sep, long = value.partition(",")
        if not sep:
            raise ConfigError(f"Unable to parse {name}: {value!r}")
        parts = [lat, long]
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        parts = list(value)
    else:
        raise ConfigError(f"Unable to parse {name}: {value!r}")

    try:
        return (float(parts[0]), float(parts[1]))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Unable to parse {name}: {value!r}") from e


def _parse_port(value: Any) -> int:
    """Parse the HTTP port, falling back to the default if invalid."""
    try:
        port = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid HTTP port %r, using %d", value, DEFAULT_HTTP_PORT)
        return DEFAULT_HTTP_PORT
    if not 0 <= port <= 65535:
        logger.warning("Invalid HTTP port %r, using %d", value, DEFAULT_HTTP_PORT)
        return DEFAULT_HTTP_PORT
    return port


def _require(data: Mapping[str, Any], key: str, source: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise ConfigError(f"{source} is not set")
    return value


def _get(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None or value == "" else value


def _build_config(
    data: Mapping[str, Any],
    describe: Callable[[str], str],
) -> Config:
    """Build a Config from values keyed by config field name.

    Args:
        data: Raw values (strings from env, or YAML types)
        describe: Maps a key to the name shown in error messages

    Returns:
        Parsed Config object

    Raises:
        ConfigError: If a required value is missing or malformed
    """
    webhook_url = _require(data, "webhook_url", describe("webhook_url"))
    data_path = _require(data, "data_path", describe("data_path"))
    reference_point = parse_point(
        _require(data, "reference_point", describe("reference_point")),
        describe("reference_point"),
    )

    try:
        alert_distance_km = float(_get(data, "alert_distance_km", ALERT_DISTANCE_KM))
        poll_interval_seconds = int(_get(data, "poll_interval_seconds", POLL_INTERVAL_SECONDS))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid number in configuration: {e}") from e

    slash_token = _get(data, "slash_token", None)

    return Config(
        webhook_url=str(webhook_url),
        data_path=Path(data_path),
        reference_point=reference_point,
        alert_distance_km=alert_distance_km,
        poll_interval_seconds=poll_interval_seconds,
        feed_url=_get(data, "feed_url", FEED_URL),
        alert_page_url=_get(data, "alert_page_url", ALERT_PAGE_URL),
        slash_token=str(slash_token) if slash_token is not None else None,
        http_address=_get(data, "http_address", DEFAULT_HTTP_ADDRESS),
        http_port=_parse_port(_get(data, "http_port", DEFAULT_HTTP_PORT)),
        revision=str(_get(data, "revision", "dev")),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ConfigError: If a required value is missing or malformed
    """
    resolved = {key: _resolve_value(value) for key, value in data.items()}
    return _build_config(resolved, lambda key: key)


def load_config(config_path: str | Path) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file

    Returns:
        Parsed Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        ConfigError: If a required value is missing or malformed
    """
    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} does not contain a mapping")

    return load_config_from_dict(data)


def load_config_from_env(environ: Mapping[str, str] | None = None) -> Config:
    """Load configuration from environment variables.

    Environment variables:
        BUSHFIRE_WEBHOOK_URL: Webhook URL for notifications (required)
        BUSHFIRE_DATA_PATH: File of notified alert IDs (required)
        BUSHFIRE_POINT: Monitored point as "lat,long" (required)
        ALERT_DISTANCE_KM: Alert distance override
        POLL_INTERVAL_SECONDS: Poll cadence override
        BUSHFIRE_FEED_URL: Feed URL override
        BUSHFIRE_PAGE_URL: Link included in notifications
        SLASH_COMMAND_TOKEN: Token for the slash command endpoint
        HTTP_ADDRESS, HTTP_PORT: HTTP server bind address
        APP_REVISION: Revision shown on the home page

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Config object from environment

    Raises:
        ConfigError: If a required variable is missing or malformed
    """
    environ = os.environ if environ is None else environ
    data = {key: environ.get(var) for key, var in ENV_VARS.items()}
    return _build_config(data, ENV_VARS.__getitem__)
