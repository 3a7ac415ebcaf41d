#!/usr/bin/env python3
"""Send a test alert to the configured webhook.

⚠️  WARNING: This script sends a REAL notification to the configured channel!

This script creates a synthetic test alert and sends it using the same
formatting as production notifications. A [TEST] marker is added to the
title. The dedup store is not touched.

Usage:
    # Dry run (preview only, no send)
    python scripts/send_test_alert.py --dry-run

    # Send with a custom category
    python scripts/send_test_alert.py --category "Emergency Warning"

Environment:
    CONFIG_PATH: Path to config file (otherwise the environment is used)
"""

import argparse
import logging
import os
import sys
from datetime import datetime, timezone

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.core.alert import Alert
from src.core.errors import ConfigError, NotifyError
from src.core.formatter import format_alert_message
from src.shell.config_loader import load_config, load_config_from_env
from src.shell.notifier import Notifier
from src.shell.webhook_client import WebhookClient

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def create_test_alert(
    category: str = "Advice",
    title: str = "Bushfire near Test Location",
    point: tuple[float, float] | None = None,
) -> Alert:
    """Create a synthetic test alert.

    Args:
        category: Alert level
        title: Alert headline (a [TEST] marker is prepended)
        point: Optional (latitude, longitude)

    Returns:
        Synthetic Alert object
    """
    now = datetime.now(timezone.utc)
    return Alert(
        id="test-alert-" + now.strftime("%Y%m%d%H%M%S"),
        category=category,
        title=f"[TEST] {title}",
        content="This is a test notification. No action is required.",
        published=now,
        updated=now,
        point=point,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Send a test alert to the configured webhook",
        epilog="⚠️  WARNING: This sends a REAL notification! Use --dry-run first.",
    )
    parser.add_argument(
        "--category",
        type=str,
        default="Advice",
        help="Alert category (default: Advice)",
    )
    parser.add_argument(
        "--title",
        type=str,
        default="Bushfire near Test Location",
        help="Alert title",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be sent without actually sending",
    )
    args = parser.parse_args()

    try:
        config_path = os.environ.get("CONFIG_PATH")
        config = load_config(config_path) if config_path else load_config_from_env()
    except (ConfigError, OSError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    alert = create_test_alert(
        category=args.category,
        title=args.title,
        point=config.reference_point,
    )

    if args.dry_run:
        logger.info("DRY RUN - Would send:\n%s", format_alert_message(alert, config.alert_page_url))
        return 0

    notifier = Notifier(
        WebhookClient(config.webhook_url),
        alert_page_url=config.alert_page_url,
    )

    try:
        notifier.notify(alert)
    except NotifyError as e:
        logger.error("  ✗ Failed to send test alert: %s", e.error)
        return 1

    logger.info("  ✓ Test alert sent successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
