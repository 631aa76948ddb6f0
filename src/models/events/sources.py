from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers for application events"""
    SCHEDULER = auto()     # Effect scheduler (start, stop, completion)
    DEVICE = auto()        # Device sink adapter
    CONTROLLER = auto()    # LightingController facade
