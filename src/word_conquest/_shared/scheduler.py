# Area: Shared
"""
word_conquest._shared.scheduler — Cooperative timer queue
=========================================================

Single-threaded replacement for browser-style setTimeout/setInterval.
Callbacks are stored with the monotonic timestamp at which they become
due; the host loop calls ``run_due()`` to fire everything that has
expired. Nothing runs on its own thread, so every mutation the engine
makes happens on the caller's stack.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger("word_conquest.scheduler")

Clock = Callable[[], float]


class TimerHandle:
    """Handle to one scheduled callback (one-shot or repeating)."""

    def __init__(
        self,
        callback: Callable[[], None],
        due_at: float,
        interval: Optional[float] = None,
        label: str = "",
    ) -> None:
        self.callback = callback
        self.due_at = due_at
        self.interval = interval
        self.label = label
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        """Cancel the callback. No-op if already cancelled or fired."""
        if not self._cancelled:
            logger.debug("Timer cancelled: %s", self.label or self.callback)
        self._cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "pending"
        return f"<TimerHandle {self.label!r} due={self.due_at:.3f} {state}>"


class Scheduler:
    """
    Min-heap of timer handles keyed by due time.

    Ties are broken by insertion order so callbacks scheduled for the
    same instant fire in the order they were scheduled.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()
        self._firing_at: Optional[float] = None

    def now(self) -> float:
        """
        Current time. Inside a callback fired by ``run_due()`` this is the
        time the callback was due, so work it schedules is timed from
        there rather than from a late poll.
        """
        if self._firing_at is not None:
            return self._firing_at
        return self._read_clock()

    def call_later(
        self, delay: float, callback: Callable[[], None], label: str = ""
    ) -> TimerHandle:
        """Schedule ``callback`` once, ``delay`` seconds from now."""
        handle = TimerHandle(callback, self.now() + max(0.0, delay), label=label)
        self._push(handle)
        logger.debug("Timer set: %s in %.3fs", label or callback, delay)
        return handle

    def call_every(
        self, interval: float, callback: Callable[[], None], label: str = ""
    ) -> TimerHandle:
        """Schedule ``callback`` every ``interval`` seconds until cancelled."""
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        handle = TimerHandle(
            callback, self.now() + interval, interval=interval, label=label
        )
        self._push(handle)
        logger.debug("Repeating timer set: %s every %.3fs", label or callback, interval)
        return handle

    def run_due(self) -> int:
        """
        Fire every callback whose due time has passed.

        Repeating timers that fell behind fire once per missed interval,
        and timers scheduled from a callback are timed from its due time,
        so a caller that polls late sees the same sequence as one that
        polls often.

        Returns
        -------
        int
            Number of callbacks fired.
        """
        now = self._read_clock()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            due_at, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            if handle.repeating:
                handle.due_at += handle.interval
                self._push(handle)
            else:
                handle._cancelled = True
            self._firing_at = due_at
            try:
                handle.callback()
            finally:
                self._firing_at = None
            fired += 1
        return fired

    def pending(self) -> int:
        """Number of live (not cancelled) timers in the queue."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def next_due(self) -> Optional[float]:
        """Due time of the earliest live timer, or None."""
        live = [due for due, _, h in self._queue if not h.cancelled]
        return min(live) if live else None

    def clear(self) -> None:
        """Cancel and drop every scheduled timer."""
        for _, _, handle in self._queue:
            handle._cancelled = True
        self._queue.clear()
        logger.debug("All timers cleared")

    def _read_clock(self) -> float:
        if self._clock is not None:
            return self._clock()
        return time.monotonic()

    def _push(self, handle: TimerHandle) -> None:
        heapq.heappush(self._queue, (handle.due_at, next(self._counter), handle))


def scaled_clock(speed: float, base: Optional[Clock] = None) -> Clock:
    """
    Clock that runs ``speed`` times faster than ``base`` (monotonic by
    default), starting from the moment it is created.
    """
    if speed <= 0:
        raise ValueError(f"Speed must be positive, got {speed}")
    base = base or time.monotonic
    origin = base()

    def clock() -> float:
        return origin + (base() - origin) * speed

    return clock
