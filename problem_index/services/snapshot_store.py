"""Holder for the active index snapshot.

Updates:
    v0.1.0 - 2026-09-21 - Replaced module-level index state with an injectable store.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, Optional

from ..core.errors import RefreshInProgressError, StaleSnapshotError
from ..core.models import IndexSnapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Publishes snapshots atomically and allows a single rebuild at a time.

    Readers only ever dereference ``current``; the whole snapshot (index,
    title lookup, counts, timestamp) is swapped in one assignment.
    """

    def __init__(self) -> None:
        self._snapshot: Optional[IndexSnapshot] = None
        self._publish_lock = threading.Lock()
        self._rebuild_lock = threading.Lock()
        self._last_sequence = 0

    @property
    def current(self) -> Optional[IndexSnapshot]:
        """Return the active snapshot, or None before the first build."""

        return self._snapshot

    @property
    def rebuilding(self) -> bool:
        return self._rebuild_lock.locked()

    def next_sequence(self) -> int:
        """Reserve the next monotonic build number."""

        with self._publish_lock:
            self._last_sequence += 1
            return self._last_sequence

    def publish(self, snapshot: IndexSnapshot) -> IndexSnapshot:
        """Make ``snapshot`` the active one.

        Args:
            snapshot (IndexSnapshot): Fully built snapshot stamped with its sequence.

        Returns:
            IndexSnapshot: The snapshot now being served.

        Raises:
            StaleSnapshotError: If a snapshot from a later build is already active.
        """

        with self._publish_lock:
            active = self._snapshot
            if active is not None and snapshot.sequence < active.sequence:
                raise StaleSnapshotError(snapshot.sequence, active.sequence)
            self._snapshot = snapshot
        logger.info(
            "snapshot_published",
            extra={
                "tool": "snapshot_store",
                "sequence": snapshot.sequence,
                "total_problems": snapshot.total_problems,
            },
        )
        return snapshot

    def rebuild(self, produce: Callable[[], IndexSnapshot]) -> IndexSnapshot:
        """Run ``produce`` and publish its result if it succeeds.

        A failure inside ``produce`` propagates and leaves the active
        snapshot untouched.

        Args:
            produce (Callable[[], IndexSnapshot]): Fetch, parse and build step.

        Returns:
            IndexSnapshot: The newly published snapshot.

        Raises:
            RefreshInProgressError: If another rebuild holds the writer slot.
        """

        if not self._rebuild_lock.acquire(blocking=False):
            raise RefreshInProgressError("An index rebuild is already in progress.")
        try:
            sequence = self.next_sequence()
            snapshot = produce()
            return self.publish(replace(snapshot, sequence=sequence))
        finally:
            self._rebuild_lock.release()
