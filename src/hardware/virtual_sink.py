from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from hardware.sink_interface import DeviceSink, DeviceStatus
from models.color import Color
from models.errors import SinkError
from utils.colors import blend


@dataclass(frozen=True)
class ZoneOutput:
    """
    Staged output of one zone

    mode tells which of the value fields is active:
        "rgb" -> color (+ brightness)
        "ct"  -> mireds + brightness
        "xy"  -> xy + brightness
    """
    color: Color = Color(0, 0, 0)
    brightness: float = 1.0
    mode: str = "rgb"
    mireds: Optional[float] = None
    xy: Optional[Tuple[float, float]] = None


class VirtualSink(DeviceSink):
    """
    In-memory device sink

    Stages zone output exactly like a device would (alpha writes blend with
    the staged color), records every committed frame and every call made.
    Used by tests, dry runs and offline previews.

    Failure injection:
        sink.failing_zones[2] = SinkError("zone 2 timeout")
        sink.commit_error = ConnectionLostError()
    """

    def __init__(self, zone_ids: Sequence[Any], name: str = "virtual"):
        self.name = name
        self.zone_ids = list(zone_ids)
        self.connected = False
        self._staged: Dict[Any, ZoneOutput] = {zid: ZoneOutput() for zid in self.zone_ids}
        self.frames: List[Dict[Any, ZoneOutput]] = []
        self.commands: List[Tuple] = []

        self.failing_zones: Dict[Any, SinkError] = {}
        self.commit_error: Optional[SinkError] = None

    # === RGB ===

    def set_zone_color(self, zone_id: Any, color: Color) -> None:
        self._record("set_zone_color", zone_id, color)
        current = self._zone(zone_id)
        base = current.color if current.mode == "rgb" else None
        self._staged[zone_id] = ZoneOutput(color=blend(base, color))

    def set_all_zones_color(self, color: Color) -> None:
        self._record("set_all_zones_color", color)
        for zone_id in self.zone_ids:
            current = self._staged[zone_id]
            base = current.color if current.mode == "rgb" else None
            self._staged[zone_id] = ZoneOutput(color=blend(base, color))

    def clear_zone(self, zone_id: Any) -> None:
        self._record("clear_zone", zone_id)
        self._zone(zone_id)
        self._staged[zone_id] = ZoneOutput()

    def clear_all(self) -> None:
        self._record("clear_all")
        self._staged = {zid: ZoneOutput() for zid in self.zone_ids}

    # === Native color spaces ===

    def set_group_color_temperature(self, mireds: float, brightness: float) -> None:
        self._record("set_group_color_temperature", mireds, brightness)
        for zone_id in self.zone_ids:
            self._staged[zone_id] = ZoneOutput(mode="ct", mireds=mireds, brightness=brightness)

    def set_group_xy(self, x: float, y: float, brightness: float) -> None:
        self._record("set_group_xy", x, y, brightness)
        for zone_id in self.zone_ids:
            self._staged[zone_id] = ZoneOutput(mode="xy", xy=(x, y), brightness=brightness)

    def set_zone_color_temperature(self, zone_id: Any, mireds: float, brightness: float) -> None:
        self._record("set_zone_color_temperature", zone_id, mireds, brightness)
        self._zone(zone_id)
        self._staged[zone_id] = ZoneOutput(mode="ct", mireds=mireds, brightness=brightness)

    def set_zone_xy(self, zone_id: Any, x: float, y: float, brightness: float) -> None:
        self._record("set_zone_xy", zone_id, x, y, brightness)
        self._zone(zone_id)
        self._staged[zone_id] = ZoneOutput(mode="xy", xy=(x, y), brightness=brightness)

    def set_zone_brightness(self, zone_id: Any, brightness: float) -> None:
        self._record("set_zone_brightness", zone_id, brightness)
        self._staged[zone_id] = replace(self._zone(zone_id), brightness=brightness)

    # === Frame boundary ===

    def commit(self) -> None:
        self.commands.append(("commit",))
        if self.commit_error is not None:
            raise self.commit_error
        self.frames.append(dict(self._staged))

    # === Connection ===

    def connect(self) -> bool:
        self.connected = True
        return True

    def disconnect(self) -> None:
        self.connected = False

    def status(self) -> DeviceStatus:
        return DeviceStatus(
            connected=self.connected,
            name=self.name,
            zone_count=len(self.zone_ids),
            commits=len(self.frames),
        )

    # === Inspection helpers ===

    @property
    def last_frame(self) -> Optional[Dict[Any, ZoneOutput]]:
        return self.frames[-1] if self.frames else None

    def zone_color(self, zone_id: Any) -> Color:
        """Color of a zone in the last committed frame (black before any commit)"""
        frame = self.last_frame
        if frame is None:
            return Color.black()
        return frame[zone_id].color

    def staged(self, zone_id: Any) -> ZoneOutput:
        return self._zone(zone_id)

    def calls(self, name: str) -> List[Tuple]:
        """All recorded calls of one method, arguments only"""
        return [cmd[1:] for cmd in self.commands if cmd[0] == name]

    def reset_log(self) -> None:
        self.commands.clear()
        self.frames.clear()

    # === Internals ===

    def _zone(self, zone_id: Any) -> ZoneOutput:
        if zone_id in self.failing_zones:
            raise self.failing_zones[zone_id]
        try:
            return self._staged[zone_id]
        except KeyError:
            raise SinkError(f"Unknown zone {zone_id!r}", zone_id=zone_id) from None

    def _record(self, name: str, *args) -> None:
        self.commands.append((name, *args))
