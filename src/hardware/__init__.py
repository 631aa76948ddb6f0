"""
Hardware Layer

Device boundary only:
- DeviceSink protocol (what the scheduler writes to)
- VirtualSink (in-memory device for tests and dry runs)
- create_sink() factory (configured driver or virtual fallback)
"""

from .sink_interface import DeviceSink, DeviceStatus
from .virtual_sink import VirtualSink, ZoneOutput
from .sink_factory import create_sink

__all__ = [
    "DeviceSink",
    "DeviceStatus",
    "VirtualSink",
    "ZoneOutput",
    "create_sink",
]
