"""
Alternate color commands

Besides RGB(A) colors, effects can drive the lights in their native
color spaces: color temperature, CIE xy chromaticity, or plain brightness.
Values are stored as given; the scheduler clamps them before they reach
the device sink.
"""

from dataclasses import dataclass

from utils.colors import clamp_mireds, clamp_unit


@dataclass(frozen=True)
class ColorTemperature:
    """White light at a color temperature (mireds 153-500) and brightness (0-1)"""
    mireds: float
    brightness: float = 1.0

    def clamped(self) -> "ColorTemperature":
        return ColorTemperature(clamp_mireds(self.mireds), clamp_unit(self.brightness))


@dataclass(frozen=True)
class XYColor:
    """CIE 1931 chromaticity point with brightness"""
    x: float
    y: float
    brightness: float = 1.0

    def clamped(self) -> "XYColor":
        return XYColor(clamp_unit(self.x), clamp_unit(self.y), clamp_unit(self.brightness))


@dataclass(frozen=True)
class Brightness:
    """Brightness change that keeps the zone's current color"""
    level: float

    def clamped(self) -> "Brightness":
        return Brightness(clamp_unit(self.level))
