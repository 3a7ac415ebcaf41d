"""Process Entry Point.

This module loads configuration, opens the dedup store, starts the HTTP
server in a background thread and runs the poller until SIGINT/SIGTERM.
"""

import logging
import os
import sys
import threading

import yaml
from werkzeug.serving import BaseWSGIServer, make_server

from src.api_handler import create_app
from src.core.config import Config, validate_config
from src.core.errors import ConfigError
from src.orchestrator import Orchestrator
from src.poller import Poller, install_signal_handlers
from src.shell.config_loader import load_config, load_config_from_env
from src.shell.datastore import DedupStore


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    return load_config_from_env()


def _start_http_server(config: Config) -> tuple[BaseWSGIServer, threading.Thread]:
    """Start the web handler on a daemon thread."""
    server = make_server(config.http_address, config.http_port, create_app(config), threaded=True)
    thread = threading.Thread(target=server.serve_forever, name="http-server", daemon=True)
    thread.start()
    logger.info(
        "HTTP server running on http://%s:%d",
        config.http_address,
        config.http_port,
    )
    return server, thread


def main() -> int:
    """Run the bushfire monitor until interrupted.

    Returns:
        Process exit status
    """
    try:
        config = _get_config()
    except (ConfigError, OSError, yaml.YAMLError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("%s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("%s: %s", error.field, error.message)
        return 1

    logger.info(
        "Monitoring for bushfire events at %s, %s",
        config.reference_point[0],
        config.reference_point[1],
    )

    try:
        store = DedupStore.open(config.data_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Unable to open datastore at %s: %s", config.data_path, e)
        return 1

    try:
        server, server_thread = _start_http_server(config)
    except OSError as e:
        logger.error(
            "Unable to start http server on %s:%d: %s",
            config.http_address,
            config.http_port,
            e,
        )
        return 1

    poller = Poller(
        Orchestrator(config, store),
        interval_seconds=config.poll_interval_seconds,
    )
    install_signal_handlers(poller)

    try:
        poller.run()
    finally:
        server.shutdown()
        server_thread.join()
        logger.info("HTTP server stopped")

    return 0


if __name__ == "__main__":
    sys.exit(main())
