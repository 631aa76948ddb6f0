import random

import pytest

from controllers import LightingController
from effects.base import EffectContext
from engine.scheduler import EffectScheduler
from engine.timers import SimulatedTimerService
from hardware.virtual_sink import VirtualSink
from models.enums import LogLevel
from models.events import EventType
from models.segments import SegmentLayout
from services.event_bus import EventBus
from utils.logger import configure_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Only errors on stdout while tests run."""
    configure_logger(LogLevel.ERROR, use_colors=False)
    yield
    configure_logger(LogLevel.INFO, use_colors=True)


@pytest.fixture
def layout():
    return SegmentLayout([0, 1, 2, 3])


@pytest.fixture
def sink(layout):
    s = VirtualSink(layout.ids)
    s.connect()
    return s


@pytest.fixture
def timers():
    return SimulatedTimerService()


@pytest.fixture
def context(layout):
    return EffectContext(layout=layout, rng=random.Random(1234))


@pytest.fixture
def sink_errors():
    return []


@pytest.fixture
def stops():
    return []


@pytest.fixture
def scheduler(sink, layout, timers, sink_errors, stops):
    return EffectScheduler(
        sink=sink,
        layout=layout,
        timers=timers,
        tick_interval_ms=16,
        on_sink_error=sink_errors.append,
        on_stopped=lambda effect_id, reason: stops.append((effect_id, reason)),
    )


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def published(event_bus):
    """Every lifecycle event published on the bus, in order."""
    events = []
    for event_type in EventType:
        event_bus.subscribe(event_type, events.append)
    return events


@pytest.fixture
def controller(sink, layout, timers, event_bus):
    return LightingController(
        sink=sink,
        layout=layout,
        timers=timers,
        event_bus=event_bus,
        settle_delay_ms=0,
        random_seed=42,
    )
