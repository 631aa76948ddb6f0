from enum import Enum, auto


class EventType(Enum):
    # Scheduler
    EFFECT_STARTED = auto()
    EFFECT_STOPPED = auto()

    # Device
    FRAME_DELIVERY_FAILED = auto()
    DEVICE_CONNECTED = auto()
