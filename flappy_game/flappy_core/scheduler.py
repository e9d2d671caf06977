"""
Frame Scheduler
===============

Cooperative, single-threaded scheduling of frame callbacks and timers.

The host pumps the scheduler once per display refresh:

    scheduler.run_timers()
    scheduler.run_frame()

Frame callbacks requested while a frame is running are deferred to the next
pump, so a loop that re-arms itself runs exactly once per refresh. Times are
in milliseconds from an injected clock; ManualClock makes them deterministic.
"""

from __future__ import annotations

import heapq
import itertools
import time
from typing import Callable, Dict, List, Optional, Set, Tuple

FrameCallback = Callable[[float], None]
TimerCallback = Callable[[], None]


def monotonic_ms() -> float:
    """Wall clock in milliseconds."""
    return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)

    def __call__(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        if delta_ms < 0:
            raise ValueError(f"Cannot move clock backwards by {delta_ms} ms")
        self._now += delta_ms
        return self._now


class FrameScheduler:
    """
    Animation-frame and timer scheduler.

    - request_frame / cancel_frame: one-shot callbacks run on the next frame,
      receiving the frame timestamp
    - call_later / cancel_timer: one-shot callbacks run once their delay has
      elapsed
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or monotonic_ms
        self._ids = itertools.count(1)
        self._frames: Dict[int, FrameCallback] = {}
        self._timers: List[Tuple[float, int, TimerCallback]] = []
        self._cancelled_timers: Set[int] = set()

    def now(self) -> float:
        """Current time in milliseconds."""
        return self._clock()

    # ---- frames ----

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._frames[handle] = callback
        return handle

    def cancel_frame(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._frames.pop(handle, None)

    @property
    def pending_frames(self) -> int:
        """Number of frame callbacks waiting for the next pump."""
        return len(self._frames)

    def run_frame(self) -> int:
        """
        Run every frame callback requested before this call.

        Returns:
            Number of callbacks run.
        """
        if not self._frames:
            return 0
        batch = self._frames
        self._frames = {}
        timestamp = self.now()
        ran = 0
        for callback in batch.values():
            callback(timestamp)
            ran += 1
        return ran

    # ---- timers ----

    def call_later(self, delay_ms: float, callback: TimerCallback) -> int:
        handle = next(self._ids)
        heapq.heappush(self._timers, (self.now() + max(0.0, delay_ms), handle, callback))
        return handle

    def cancel_timer(self, handle: Optional[int]) -> bool:
        """
        Cancel a pending timer.

        Returns:
            True if the timer was pending. Fired, cancelled or unknown
            handles are ignored.
        """
        if handle is None or handle in self._cancelled_timers:
            return False
        if not any(pending == handle for _, pending, _ in self._timers):
            return False
        self._cancelled_timers.add(handle)
        return True

    @property
    def pending_timers(self) -> int:
        return sum(1 for _, handle, _ in self._timers if handle not in self._cancelled_timers)

    def run_timers(self) -> int:
        """
        Fire timers that are due, earliest first.

        Returns:
            Number of callbacks fired.
        """
        now = self.now()
        fired = 0
        while self._timers and self._timers[0][0] <= now:
            _, handle, callback = heapq.heappop(self._timers)
            if handle in self._cancelled_timers:
                self._cancelled_timers.discard(handle)
                continue
            callback()
            fired += 1
        return fired

    def clear(self) -> None:
        """Drop everything pending."""
        self._frames.clear()
        self._timers.clear()
        self._cancelled_timers.clear()
