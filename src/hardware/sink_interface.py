# hardware/sink_interface.py
"""
DeviceSink Protocol
===================
Hardware abstraction for a lighting device with addressable zones.

Writes are staged; nothing is visible until commit(). The scheduler issues
exactly one commit per tick. Connection setup (discovery, pairing, the
streaming transport) belongs to the concrete driver.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from models.color import Color


@dataclass(frozen=True)
class DeviceStatus:
    """Snapshot of the device connection"""
    connected: bool
    name: str
    zone_count: int
    commits: int = 0
    detail: Optional[str] = None


class DeviceSink(Protocol):
    """
    Protocol defining the device interface the scheduler writes to.

    All write methods may raise SinkError; ConnectionLostError signals the
    connection is gone and further writes are pointless.
    """

    # === RGB ===

    def set_zone_color(self, zone_id: Any, color: Color) -> None:
        """
        Stage a zone color. A color with alpha blends with whatever is
        currently staged for the zone; without alpha it replaces it.
        """
        ...

    def set_all_zones_color(self, color: Color) -> None:
        """Stage the same color on every zone (alpha rules as above)."""
        ...

    def clear_zone(self, zone_id: Any) -> None:
        """Stage black (no alpha) on one zone."""
        ...

    def clear_all(self) -> None:
        """Stage black (no alpha) on every zone."""
        ...

    # === Native color spaces ===

    def set_group_color_temperature(self, mireds: float, brightness: float) -> None:
        ...

    def set_group_xy(self, x: float, y: float, brightness: float) -> None:
        ...

    def set_zone_color_temperature(self, zone_id: Any, mireds: float, brightness: float) -> None:
        ...

    def set_zone_xy(self, zone_id: Any, x: float, y: float, brightness: float) -> None:
        ...

    def set_zone_brightness(self, zone_id: Any, brightness: float) -> None:
        ...

    # === Frame boundary ===

    def commit(self) -> None:
        """Publish everything staged since the previous commit as one frame."""
        ...

    # === Connection ===

    def connect(self) -> bool:
        ...

    def disconnect(self) -> None:
        ...

    def status(self) -> DeviceStatus:
        ...
