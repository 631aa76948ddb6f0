"""
Timer services

The scheduler only needs two timer primitives: a fixed cadence repeating
timer and one-shot delayed callbacks. Both come from a TimerService so the
same scheduler runs on the asyncio event loop in production and on a
simulated clock in tests and offline rendering.

Cancellation is synchronous: once handle.cancel() returns, the callback
will not be invoked again.
"""

import asyncio
import heapq
import itertools
import time
from typing import Callable, List, Optional, Protocol, Tuple

from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.SCHEDULER)

Callback = Callable[[], None]


class Clock(Protocol):
    def now_ms(self) -> float:
        """Current time in milliseconds (monotonic)"""
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class TimerService(Clock, Protocol):
    def call_every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        ...

    def call_later(self, delay_ms: float, callback: Callback) -> TimerHandle:
        ...


class MonotonicClock:
    """Wall clock based on time.perf_counter()"""

    def now_ms(self) -> float:
        return time.perf_counter() * 1000.0


# ============================================================
# asyncio implementation
# ============================================================

class _RepeatingTask:
    """Handle for a repeating asyncio timer task"""

    def __init__(self):
        self.task: Optional[asyncio.Task] = None
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True
        if self.task and not self.task.done():
            self.task.cancel()


class AsyncioTimerService(MonotonicClock):
    """
    Timers on the running asyncio event loop

    call_every() spawns a task that sleeps until the next deadline and
    invokes the callback. Deadlines advance by the interval so the cadence
    does not drift; when the loop falls behind, missed ticks are skipped
    instead of fired in a burst.
    """

    def call_every(self, interval_ms: float, callback: Callback) -> _RepeatingTask:
        handle = _RepeatingTask()
        handle.task = asyncio.get_running_loop().create_task(
            self._run_every(interval_ms, callback, handle)
        )
        return handle

    def call_later(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay_ms / 1000.0, callback)

    async def _run_every(self, interval_ms: float, callback: Callback, handle: _RepeatingTask) -> None:
        next_at = self.now_ms() + interval_ms
        try:
            while not handle.cancelled:
                delay = next_at - self.now_ms()
                if delay > 0:
                    await asyncio.sleep(delay / 1000.0)
                if handle.cancelled:
                    break

                try:
                    callback()
                except Exception as e:
                    log.error(f"Timer callback failed: {e}")

                next_at += interval_ms
                now = self.now_ms()
                if next_at <= now:
                    next_at = now + interval_ms

                # yield to event loop even when running late
                await asyncio.sleep(0)
        except asyncio.CancelledError:
            pass


# ============================================================
# Simulated implementation
# ============================================================

class _SimulatedTimer:
    """Timer entry on the simulated clock"""

    def __init__(self, callback: Callback, interval_ms: Optional[float]):
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class SimulatedTimerService:
    """
    Deterministic timers driven by advance()

    Time only moves when advance() is called. Due callbacks fire in
    deadline order (ties in arming order), with now_ms() set to each
    callback's deadline while it runs.

    Example:
        timers = SimulatedTimerService()
        timers.call_every(16, tick)
        timers.advance(1000)    # runs 62 ticks
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, _SimulatedTimer]] = []
        self._seq = itertools.count()

    def now_ms(self) -> float:
        return self._now

    def call_every(self, interval_ms: float, callback: Callback) -> _SimulatedTimer:
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        timer = _SimulatedTimer(callback, interval_ms)
        self._push(self._now + interval_ms, timer)
        return timer

    def call_later(self, delay_ms: float, callback: Callback) -> _SimulatedTimer:
        timer = _SimulatedTimer(callback, None)
        self._push(self._now + max(0.0, delay_ms), timer)
        return timer

    def advance(self, ms: float) -> None:
        """Move the clock forward by ms, firing every due callback"""
        target = self._now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            try:
                timer.callback()
            except Exception as e:
                log.error(f"Timer callback failed: {e}")
            if timer.interval_ms is not None and not timer.cancelled:
                self._push(due + timer.interval_ms, timer)
        self._now = target

    def pending(self) -> int:
        """Number of armed, not cancelled timers"""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def _push(self, due: float, timer: _SimulatedTimer) -> None:
        heapq.heappush(self._queue, (due, next(self._seq), timer))
