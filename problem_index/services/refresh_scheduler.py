"""Daily background refresh of the problem index.

Updates:
    v0.1.0 - 2026-09-08 - Daemon thread running the refresh at a fixed local time.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from .config_service import RefreshConfig

logger = logging.getLogger(__name__)


def seconds_until_next_run(now: datetime, hour: int, minute: int) -> float:
    """Return the delay from ``now`` until the next ``hour:minute``.

    A run scheduled for exactly ``now`` is pushed to the following day.
    """

    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


class RefreshScheduler:
    """Runs ``refresh`` once a day until stopped."""

    def __init__(
        self,
        refresh: Callable[[], object],
        config: RefreshConfig | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._refresh = refresh
        self._config = config or RefreshConfig()
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run_forever, name="index-refresh", daemon=True
        )
        self._thread.start()
        logger.info(
            "refresh_scheduled",
            extra={
                "tool": "refresh_scheduler",
                "hour": self._config.hour,
                "minute": self._config.minute,
            },
        )

    def stop(self, timeout: float = 2.0) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None

    def run_forever(self) -> None:
        while not self._stop_event.is_set():
            delay = seconds_until_next_run(
                self._clock(), self._config.hour, self._config.minute
            )
            if self._stop_event.wait(timeout=delay):
                break
            self.run_once()

    def run_once(self) -> bool:
        """Run one refresh; failures are logged and the previous index stays active."""

        logger.info("Running scheduled data update...")
        try:
            self._refresh()
        except Exception:
            logger.error("Scheduled update failed", exc_info=True)
            return False
        logger.info("Scheduled update completed")
        return True
