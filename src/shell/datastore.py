"""Dedup Store - Imperative Shell.

This module persists the IDs of alerts that have been notified, so a
restart doesn't notify about them again. Storage is a single append-only
text file with one ID per line, mirrored in memory for fast lookups.

All I/O is contained here; the line format is in the core module.
"""

import logging
import os
import threading
from pathlib import Path

from src.core.dedup import format_id_line, parse_id_lines


logger = logging.getLogger(__name__)


def load_ids(path: str | Path) -> set[str]:
    """Read every ID recorded in the artifact.

    This function performs file I/O.

    Raises:
        OSError: If the file can't be read (including FileNotFoundError)
    """
    with open(path, "r", encoding="utf-8") as f:
        return parse_id_lines(f)


class DedupStore:
    """Append-only record of notified alert IDs.

    An ID only enters the in-memory set once it has been durably written,
    so the set never claims more than a reload from disk would. All access
    is serialised with a lock.
    """

    def __init__(self, path: str | Path, ids: set[str] | None = None) -> None:
        """Initialize the store.

        Args:
            path: Backing file
            ids: IDs already recorded in the file
        """
        self.path = Path(path)
        self._ids = set(ids or ())
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: str | Path) -> "DedupStore":
        """Open the store at path, loading any recorded IDs.

        A missing file is an empty store; it is created on first append.

        Raises:
            OSError: If an existing file can't be read
        """
        try:
            ids = load_ids(path)
        except FileNotFoundError:
            logger.info("No dedup file at %s, starting empty", path)
            ids = set()
        else:
            logger.info("Loaded %d notified alert IDs from %s", len(ids), path)
        return cls(path, ids)

    def contains(self, alert_id: str) -> bool:
        """Check whether an alert has already been notified."""
        with self._lock:
            return alert_id in self._ids

    def __contains__(self, alert_id: object) -> bool:
        return isinstance(alert_id, str) and self.contains(alert_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)

    def ids(self) -> frozenset[str]:
        """Snapshot of the notified IDs."""
        with self._lock:
            return frozenset(self._ids)

    def append(self, alert_id: str) -> None:
        """Durably record an alert as notified.

        This method performs file I/O. The ID is added to the in-memory
        set only after the write has been flushed.

        Raises:
            ValueError: If the ID contains a line break
            OSError: If the write fails; the store is left unchanged
        """
        line = format_id_line(alert_id)
        with self._lock:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
            self._ids.add(alert_id)
