"""
Tests for the event bus: subscription, priorities, filters, middleware,
history and the synchronous publish path.
"""

import asyncio

import pytest

from models.enums import EffectID, StopReason
from models.errors import SinkError
from models.events import (
    DeviceConnectedEvent,
    EffectStartedEvent,
    EffectStoppedEvent,
    EventSource,
    EventType,
    FrameDeliveryFailedEvent,
)
from services.event_bus import EventBus
from services.middleware import log_middleware


def stopped(reason=StopReason.COMPLETED, effect_id=EffectID.STROBE):
    return EffectStoppedEvent(effect_id, reason)


class TestPublish:

    @pytest.mark.asyncio
    async def test_basic_pub_sub(self, event_bus):
        received = []

        async def handler(event):
            received.append(event)

        event_bus.subscribe(EventType.EFFECT_STOPPED, handler)
        await event_bus.publish(stopped())

        assert len(received) == 1
        assert received[0].reason == StopReason.COMPLETED
        assert received[0].source == EventSource.SCHEDULER

    @pytest.mark.asyncio
    async def test_sync_handler(self, event_bus):
        received = []
        event_bus.subscribe(EventType.DEVICE_CONNECTED, received.append)

        await event_bus.publish(DeviceConnectedEvent(True))

        assert received[0].connected is True

    @pytest.mark.asyncio
    async def test_only_matching_type(self, event_bus):
        received = []
        event_bus.subscribe(EventType.EFFECT_STARTED, received.append)

        await event_bus.publish(stopped())

        assert received == []

    @pytest.mark.asyncio
    async def test_filtering(self, event_bus):
        completed = []
        event_bus.subscribe(
            EventType.EFFECT_STOPPED,
            completed.append,
            filter_fn=lambda e: e.reason == StopReason.COMPLETED,
        )

        await event_bus.publish(stopped(StopReason.CANCELLED))
        await event_bus.publish(stopped(StopReason.COMPLETED))

        assert [e.reason for e in completed] == [StopReason.COMPLETED]

    @pytest.mark.asyncio
    async def test_priority_order(self, event_bus):
        order = []
        event_bus.subscribe(EventType.EFFECT_STOPPED, lambda e: order.append("low"), priority=0)
        event_bus.subscribe(EventType.EFFECT_STOPPED, lambda e: order.append("high"), priority=10)
        event_bus.subscribe(EventType.EFFECT_STOPPED, lambda e: order.append("mid"), priority=5)

        await event_bus.publish(stopped())

        assert order == ["high", "mid", "low"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self, event_bus):
        received = []

        def broken(event):
            raise RuntimeError("handler bug")

        event_bus.subscribe(EventType.EFFECT_STOPPED, broken, priority=10)
        event_bus.subscribe(EventType.EFFECT_STOPPED, received.append)

        await event_bus.publish(stopped())

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self, event_bus):
        received = []
        event_bus.subscribe(EventType.EFFECT_STOPPED, received.append)

        assert event_bus.unsubscribe(EventType.EFFECT_STOPPED, received.append) is True
        assert event_bus.unsubscribe(EventType.EFFECT_STOPPED, received.append) is False

        await event_bus.publish(stopped())
        assert received == []


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_blocking_middleware(self, event_bus):
        received = []
        event_bus.subscribe(EventType.EFFECT_STOPPED, received.append)
        event_bus.add_middleware(lambda e: None if e.reason == StopReason.SUPERSEDED else e)

        await event_bus.publish(stopped(StopReason.SUPERSEDED))
        await event_bus.publish(stopped(StopReason.CANCELLED))

        assert [e.reason for e in received] == [StopReason.CANCELLED]
        assert len(event_bus.get_event_history()) == 1

    @pytest.mark.asyncio
    async def test_log_middleware_passes_events_through(self, event_bus, capsys):
        from models.enums import LogLevel
        from utils.logger import configure_logger

        configure_logger(LogLevel.DEBUG, use_colors=False)
        received = []
        event_bus.subscribe(EventType.EFFECT_STARTED, received.append)
        event_bus.add_middleware(log_middleware)

        await event_bus.publish(EffectStartedEvent(EffectID.CHASE, {"speed": 500}))

        assert len(received) == 1
        out = capsys.readouterr().out
        assert "Event: EFFECT_STARTED from SCHEDULER" in out
        assert "effect_id=CHASE" in out


class TestHistory:

    @pytest.mark.asyncio
    async def test_history_is_bounded(self):
        bus = EventBus(history_limit=3)
        for _ in range(5):
            await bus.publish(stopped())

        assert len(bus.get_event_history(limit=10)) == 3

    @pytest.mark.asyncio
    async def test_events_recorded_without_handlers(self, event_bus):
        await event_bus.publish(DeviceConnectedEvent(False))

        history = event_bus.get_event_history()
        assert history[-1].type == EventType.DEVICE_CONNECTED

        event_bus.clear_history()
        assert event_bus.get_event_history() == []


class TestPublishNowait:

    def test_sync_handlers_run_immediately(self, event_bus):
        received = []
        event_bus.subscribe(EventType.FRAME_DELIVERY_FAILED, received.append)

        event_bus.publish_nowait(FrameDeliveryFailedEvent(SinkError("timeout", zone_id=2)))

        assert received[0].error.zone_id == 2
        assert received[0].to_data()["error"].message == "timeout"

    def test_async_handler_skipped_without_loop(self, event_bus):
        received = []

        async def handler(event):
            received.append(event)

        event_bus.subscribe(EventType.EFFECT_STOPPED, handler)
        event_bus.publish_nowait(stopped())

        assert received == []

    @pytest.mark.asyncio
    async def test_async_handler_scheduled_on_running_loop(self, event_bus):
        received = []

        async def handler(event):
            received.append(event)

        event_bus.subscribe(EventType.EFFECT_STOPPED, handler)
        event_bus.publish_nowait(stopped())
        assert received == []

        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert len(received) == 1
