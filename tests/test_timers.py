"""
Tests for the timer services.
"""

import asyncio

import pytest

from engine.timers import AsyncioTimerService, SimulatedTimerService


class TestSimulatedTimerService:
    """Deterministic clock used by scheduler tests."""

    def test_time_only_moves_on_advance(self):
        timers = SimulatedTimerService(start_ms=100)
        assert timers.now_ms() == 100
        timers.advance(50)
        assert timers.now_ms() == 150

    def test_call_every_fires_at_each_deadline(self):
        timers = SimulatedTimerService()
        seen = []
        timers.call_every(16, lambda: seen.append(timers.now_ms()))

        timers.advance(64)

        assert seen == [16, 32, 48, 64]

    def test_call_later_fires_once(self):
        timers = SimulatedTimerService()
        seen = []
        timers.call_later(200, lambda: seen.append(timers.now_ms()))

        timers.advance(199)
        assert seen == []
        timers.advance(500)
        assert seen == [200]
        assert timers.pending() == 0

    def test_cancel_stops_future_calls(self):
        timers = SimulatedTimerService()
        seen = []
        handle = timers.call_every(10, lambda: seen.append(timers.now_ms()))

        timers.advance(25)
        handle.cancel()
        timers.advance(100)

        assert seen == [10, 20]

    def test_cancel_from_inside_callback(self):
        timers = SimulatedTimerService()
        seen = []
        handle = None

        def tick():
            seen.append(timers.now_ms())
            if len(seen) == 2:
                handle.cancel()

        handle = timers.call_every(10, tick)
        timers.advance(100)

        assert seen == [10, 20]

    def test_deadline_ties_fire_in_arming_order(self):
        timers = SimulatedTimerService()
        order = []
        timers.call_later(10, lambda: order.append("a"))
        timers.call_later(10, lambda: order.append("b"))

        timers.advance(10)

        assert order == ["a", "b"]

    def test_failing_callback_does_not_stop_the_clock(self):
        timers = SimulatedTimerService()
        seen = []

        def boom():
            raise RuntimeError("boom")

        timers.call_later(5, boom)
        timers.call_later(6, lambda: seen.append("ok"))
        timers.advance(10)

        assert seen == ["ok"]

    def test_non_positive_interval_rejected(self):
        with pytest.raises(ValueError):
            SimulatedTimerService().call_every(0, lambda: None)


class TestAsyncioTimerService:
    """Timers on the running event loop."""

    @pytest.mark.asyncio
    async def test_call_every_repeats_until_cancelled(self):
        timers = AsyncioTimerService()
        ticks = []
        handle = timers.call_every(5, lambda: ticks.append(timers.now_ms()))

        await asyncio.sleep(0.1)
        handle.cancel()
        count = len(ticks)
        await asyncio.sleep(0.05)

        assert count >= 3
        assert len(ticks) == count

    @pytest.mark.asyncio
    async def test_call_later(self):
        timers = AsyncioTimerService()
        fired = asyncio.Event()
        timers.call_later(10, fired.set)

        await asyncio.wait_for(fired.wait(), timeout=1.0)

    @pytest.mark.asyncio
    async def test_cancelled_call_later_never_fires(self):
        timers = AsyncioTimerService()
        fired = []
        handle = timers.call_later(10, lambda: fired.append(True))
        handle.cancel()

        await asyncio.sleep(0.05)

        assert fired == []
