"""
Event system for the zone effect engine

Typed events published on the EventBus by the controller.
"""

from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

from models.events.effect_events import (
    EffectStartedEvent,
    EffectStoppedEvent,
    FrameDeliveryFailedEvent,
    DeviceConnectedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",

    "EffectStartedEvent",
    "EffectStoppedEvent",
    "FrameDeliveryFailedEvent",
    "DeviceConnectedEvent",
]
