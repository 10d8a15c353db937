# ticker.py
from __future__ import annotations
import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Ticker(Protocol):
    """The handle the game uses to start and cancel its periodic tick."""

    def start(self) -> None: ...
    def stop(self) -> None: ...


class IntervalTicker:
    """
    Fixed-interval tick source polled from a frame loop.

    The owner calls `due(now_ms)` once per frame and advances the game that
    many times. Time is measured in milliseconds from whatever clock the
    caller uses (pygame.time.get_ticks() in the app, plain ints in tests).
    """

    def __init__(self, interval_ms: int, clock=None):
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms} ms")
        self.interval_ms = interval_ms
        self._clock = clock
        self._last: Optional[int] = None   # ms timestamp of the last counted tick

    @property
    def running(self) -> bool:
        return self._last is not None

    def start(self, now_ms: Optional[int] = None) -> None:
        if now_ms is None:
            now_ms = self._now()
        self._last = now_ms
        logger.debug("ticker started at %d ms (every %d ms)", now_ms, self.interval_ms)

    def stop(self) -> None:
        # Safe to call on a stopped ticker.
        if self._last is None:
            return
        self._last = None
        logger.debug("ticker stopped")

    def due(self, now_ms: Optional[int] = None) -> int:
        """Number of whole intervals elapsed since the last poll (0 when stopped)."""
        if self._last is None:
            return 0
        if now_ms is None:
            now_ms = self._now()
        elapsed = now_ms - self._last
        if elapsed < self.interval_ms:
            return 0
        n = elapsed // self.interval_ms
        self._last += n * self.interval_ms
        return n

    def _now(self) -> int:
        if self._clock is None:
            raise RuntimeError("IntervalTicker needs an explicit time or a clock")
        return int(self._clock())


class NullTicker:
    """Ticker for games driven by hand (tests, scripted replays)."""

    running = False

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False
