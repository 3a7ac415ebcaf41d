"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Bushfire feed client (HTTP)
- Chat webhook client (HTTP)
- Dedup store (file)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.feed_client import FeedClient
from src.shell.webhook_client import WebhookClient
from src.shell.notifier import Notifier
from src.shell.datastore import DedupStore
from src.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "FeedClient",
    "WebhookClient",
    "Notifier",
    "DedupStore",
    "load_config",
    "load_config_from_env",
]
