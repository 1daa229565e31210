"""
Timer sources for the playback scheduler.

The scheduler only needs to schedule one callback at a time and cancel it
synchronously. LoopClock does that on an asyncio event loop; ManualClock
is a simulated clock whose time only moves when advance() is called.
"""

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None: ...


class Clock(Protocol):
    """Schedules callbacks after a delay in milliseconds."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle: ...


class LoopClock:
    """Clock backed by an asyncio event loop.

    asyncio.TimerHandle.cancel() takes effect immediately, so a cancelled
    tick never runs. Must be used from the loop's own thread.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_ms / 1000.0, callback)


class ManualTimer:
    """Timer scheduled on a ManualClock."""

    def __init__(self, due_ms: float, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """
    Simulated clock for tests and hosts that drive time themselves.

    Example:
        >>> clock = ManualClock()
        >>> fired = []
        >>> _ = clock.call_later(200, lambda: fired.append(clock.now_ms))
        >>> clock.advance(199)
        0
        >>> clock.advance(1)
        1
        >>> fired
        [200.0]
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = float(start_ms)
        self._queue: List[Tuple[float, int, ManualTimer]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now_ms + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._sequence), timer))
        return timer

    @property
    def pending(self) -> List[ManualTimer]:
        """Timers that are neither cancelled nor fired, earliest first."""
        return [timer for _, _, timer in sorted(self._queue) if not timer.cancelled]

    def advance(self, delta_ms: float) -> int:
        """
        Move time forward, firing every timer that comes due on the way.

        Timers scheduled by callbacks fire too if they fall inside the
        window.

        Returns:
            Number of callbacks fired.
        """
        target = self.now_ms + delta_ms
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due_ms, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = due_ms
            timer.fired = True
            timer.callback()
            fired += 1

        self.now_ms = target
        return fired

    def run_next(self) -> bool:
        """Jump to the next live timer and fire it; False if none is pending."""
        while self._queue:
            due_ms, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = max(self.now_ms, due_ms)
            timer.fired = True
            timer.callback()
            return True
        return False
