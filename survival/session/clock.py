"""
Game Clock - Countdown that ticks on a fixed real-time interval.

The clock only reports elapsed time; the game loop turns each report
into a tick action so clock and moves share one update path.
Stopping is unconditional: a stopped clock never calls back again.
"""

from __future__ import annotations
import threading
from typing import Callable

from ..utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


class GameClock:
    """
    Re-arming threading.Timer that calls on_tick(interval_ms).

    Usage:
        clock = GameClock(1000, on_tick=loop.tick)
        clock.start()
        ...
        clock.stop()
    """

    def __init__(self, interval_ms: int, on_tick: Callable[[int], object]):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        self.interval_ms = interval_ms
        self.on_tick = on_tick
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._running = False
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self):
        """Start ticking. Starting a running clock does nothing."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()
        logger.debug("Clock started (%d ms)", self.interval_ms)

    def stop(self):
        """Cancel the pending tick and stop re-arming."""
        with self._lock:
            self._running = False
            if self._timer:
                self._timer.cancel()
                self._timer = None
        logger.debug("Clock stopped after %d tick(s)", self.ticks)

    def _schedule(self):
        # Caller holds self._lock
        self._timer = threading.Timer(self.interval_ms / 1000, self._fire)
        self._timer.daemon = True
        self._timer.start()

    def _fire(self):
        with self._lock:
            if not self._running:
                return
            self.ticks += 1

        # on_tick may stop the clock, so it runs outside the lock
        self.on_tick(self.interval_ms)

        with self._lock:
            if self._running:
                self._schedule()
