from dataclasses import dataclass
from typing import Any, Dict

from models.enums import EffectID, StopReason
from models.errors import SinkError
from models.events.base import Event
from models.events.sources import EventSource
from models.events.types import EventType


@dataclass(init=False)
class EffectStartedEvent(Event):
    effect_id: EffectID
    params: Dict[str, Any]

    def __init__(self, effect_id: EffectID, params: Dict[str, Any]):
        super().__init__(
            type=EventType.EFFECT_STARTED,
            source=EventSource.SCHEDULER,
        )
        self.effect_id = effect_id
        self.params = params


@dataclass(init=False)
class EffectStoppedEvent(Event):
    effect_id: EffectID
    reason: StopReason

    def __init__(self, effect_id: EffectID, reason: StopReason):
        super().__init__(
            type=EventType.EFFECT_STOPPED,
            source=EventSource.SCHEDULER,
        )
        self.effect_id = effect_id
        self.reason = reason


@dataclass(init=False)
class FrameDeliveryFailedEvent(Event):
    error: SinkError

    def __init__(self, error: SinkError):
        super().__init__(
            type=EventType.FRAME_DELIVERY_FAILED,
            source=EventSource.DEVICE,
        )
        self.error = error


@dataclass(init=False)
class DeviceConnectedEvent(Event):
    connected: bool

    def __init__(self, connected: bool):
        super().__init__(
            type=EventType.DEVICE_CONNECTED,
            source=EventSource.CONTROLLER,
        )
        self.connected = connected
